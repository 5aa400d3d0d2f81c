"""Class schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClassCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    teacher_id: Optional[int] = None
    is_active: bool = True


class ClassUpdate(BaseModel):
    """Mutable class fields. The owning teacher cannot be changed."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    is_active: Optional[bool] = None


class ClassRead(BaseModel):
    id: int
    name: str
    teacher_id: int
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
