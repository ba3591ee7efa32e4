from enum import Enum
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from datetime import datetime

from nexgig.core.clock import UTCDateTime, utcnow


class ProposalStatus(str, Enum):
    pending = "pending"
    under_review = "under_review"
    accepted = "accepted"
    rejected = "rejected"


OPEN_STATUSES = (ProposalStatus.pending, ProposalStatus.under_review)


class Proposal(SQLModel, table=True):
    __tablename__ = "proposals"
    __table_args__ = (
        UniqueConstraint("job_id", "freelancer_id", name="uq_proposals_job_freelancer"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", index=True, ondelete="CASCADE")
    freelancer_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    cover_letter: str = ""
    expected_rate: str = ""  # free text, e.g. "$40/h"
    timeline: str = ""
    additional_details: str = ""
    status: ProposalStatus = ProposalStatus.pending
    submitted_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
