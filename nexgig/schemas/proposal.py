from typing import List, Optional
from datetime import datetime

from nexgig.models.proposal import ProposalStatus
from nexgig.schemas.base import CamelModel


class ProposalCreate(CamelModel):
    cover_letter: str = ""
    expected_rate: str = ""
    timeline: str = ""
    additional_details: str = ""


class ProposalCreated(CamelModel):
    proposal_id: int


class FreelancerProposalRead(CamelModel):
    """A proposal as its author sees it, with the job it targets."""

    id: int
    job_id: int
    cover_letter: str
    expected_rate: str
    timeline: str
    additional_details: str
    status: ProposalStatus
    submitted_at: datetime
    title: str
    budget: int
    description: str


class JobProposalRead(CamelModel):
    """A proposal as the job owner sees it, with who sent it."""

    id: int
    cover_letter: str
    expected_rate: str
    timeline: str
    additional_details: str
    status: ProposalStatus
    submitted_at: datetime
    freelancer_name: Optional[str] = None
    freelancer_id: int


class FreelancerProposalList(CamelModel):
    proposals: List[FreelancerProposalRead]


class JobProposalList(CamelModel):
    proposals: List[JobProposalRead]
