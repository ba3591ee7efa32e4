from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from nexgig.core.clock import UTCDateTime, utcnow


class Job(SQLModel, table=True):
    __tablename__ = "jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    budget: int  # smallest currency unit
    description: str
    # NULL for seed data; such jobs are left out of the public feed
    client_id: Optional[int] = Field(
        default=None, foreign_key="users.id", index=True, ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
