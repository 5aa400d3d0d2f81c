"""Student and teacher directory schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr

from schooladmin.app.schemas.enrollment import EnrollmentRead
from schooladmin.app.schemas.school_class import ClassRead


class StudentRead(BaseModel):
    id: int
    account_id: int
    name: str
    email: EmailStr
    enrollment_date: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentDetail(StudentRead):
    enrollments: List[EnrollmentRead] = []


class TeacherRead(BaseModel):
    id: int
    account_id: int
    name: str
    email: EmailStr
    hire_date: datetime

    model_config = ConfigDict(from_attributes=True)


class TeacherDetail(TeacherRead):
    classes: List[ClassRead] = []
