# schemas/user.py

import re
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime

from nexgig.models.user import UserRole
from nexgig.schemas.base import CamelModel

PASSWORD_RULES = [
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
]


def check_password_policy(password: str) -> str:
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password


class UserCreate(CamelModel):
    email: EmailStr
    password: str
    name: Optional[str] = None
    role: UserRole = UserRole.freelancer

    @field_validator("password")
    @classmethod
    def password_policy(cls, value: str) -> str:
        return check_password_policy(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str
    role: Optional[UserRole] = None


class UserRead(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    role: UserRole


class UserProfile(UserRead):
    created_at: datetime


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class UserEnvelope(CamelModel):
    user: UserProfile


class OAuthToken(BaseModel):
    # OAuth2 password-flow clients (the OpenAPI "Authorize" dialog) read snake_case keys
    access_token: str
    token_type: str = "bearer"
