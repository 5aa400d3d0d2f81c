from datetime import datetime

from pydantic import BaseModel, EmailStr

from schooladmin.app.schemas.account import RoleName


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginUser(BaseModel):
    id: int
    name: str
    role: RoleName


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: LoginUser


class LogoutResponse(BaseModel):
    revoked: int
