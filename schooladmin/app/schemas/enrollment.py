"""Enrollment schemas, including the bulk enrollment report."""

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class EnrollmentCreate(BaseModel):
    student_id: int
    class_id: int


class BulkEnrollmentCreate(BaseModel):
    """Repeated ids are enrolled once and reported once, under their first outcome."""

    class_id: int
    student_ids: List[int] = Field(min_length=1)


class EnrollmentRead(BaseModel):
    id: int
    student_id: int
    class_id: int
    enrollment_date: datetime
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class EnrollmentResult(EnrollmentRead):
    outcome: Literal["created", "reactivated"]


class BulkEnrollmentFailure(BaseModel):
    student_id: int
    reason: str


class BulkEnrollmentResponse(BaseModel):
    class_id: int
    successful: List[int] = []
    already_enrolled: List[int] = []
    failed: List[BulkEnrollmentFailure] = []
