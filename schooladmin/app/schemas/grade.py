"""Grade schemas. Value bounds are checked by the grade service against settings."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GradeCreate(BaseModel):
    enrollment_id: int
    assignment_name: str = Field(min_length=1, max_length=200)
    grade_value: int
    weight: Optional[int] = Field(default=1, ge=0)
    comments: Optional[str] = None


class GradeUpdate(BaseModel):
    assignment_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    grade_value: Optional[int] = None
    weight: Optional[int] = Field(default=None, ge=0)
    comments: Optional[str] = None


class GradeRead(BaseModel):
    id: int
    enrollment_id: int
    assignment_name: str
    grade_value: int
    weight: Optional[int] = None
    comments: Optional[str] = None
    graded_by: int
    graded_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GradeWithClass(GradeRead):
    class_id: int
    class_name: str
    student_id: int
