from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from nexgig.core.clock import UTCDateTime, utcnow


class Assignment(SQLModel, table=True):
    __tablename__ = "assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True, ondelete="CASCADE")
    freelancer_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    assigned_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
