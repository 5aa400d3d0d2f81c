"""Account schemas used for creation, updates and responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

RoleName = Literal["student", "teacher", "admin"]


class AccountCreate(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=200)
    role: RoleName
    password: str = Field(min_length=8, max_length=128)


class AccountUpdate(BaseModel):
    """Mutable account fields. Role and ids are deliberately absent."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None


class AccountStatusUpdate(BaseModel):
    is_active: bool


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8, max_length=128)


class AccountRead(BaseModel):
    id: int
    email: EmailStr
    name: str
    role: RoleName
    is_active: bool
    student_id: Optional[int] = None
    teacher_id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
