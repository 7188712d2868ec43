from typing import Optional
from pydantic import BaseModel, Field, field_validator

from goods_transport.models.shared.enums import UserRole

class SignupRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.OPERATOR

    @field_validator('username')
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError('Username must be at least 3 characters long')
        return v

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserSummary(BaseModel):
    username: str
    role: UserRole

    class Config:
        from_attributes = True

class SessionUser(UserSummary):
    id: int

class AuthResponse(BaseModel):
    message: str
    user: Optional[UserSummary] = None
