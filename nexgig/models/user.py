from enum import Enum
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from datetime import datetime

from nexgig.core.clock import UTCDateTime, utcnow


class UserRole(str, Enum):
    client = "client"
    freelancer = "freelancer"


class User(SQLModel, table=True):
    __tablename__ = "users"
    # one account per role: the same email may hold a client and a freelancer record
    __table_args__ = (UniqueConstraint("email", "role", name="uq_users_email_role"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True)
    password_hash: str
    name: Optional[str] = None
    role: UserRole = UserRole.freelancer
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
