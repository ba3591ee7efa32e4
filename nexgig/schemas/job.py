from typing import List, Optional
from pydantic import Field
from datetime import datetime

from nexgig.schemas.base import CamelModel


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    budget: int = Field(ge=0)
    description: str = Field(min_length=1)


# PATCH replaces all three editable fields at once
JobUpdate = JobCreate


class JobRead(CamelModel):
    id: int
    title: str
    budget: int
    description: str
    client_id: Optional[int] = None
    created_at: datetime


class OwnedJobRead(JobRead):
    proposal_count: int = 0


class JobEnvelope(CamelModel):
    job: JobRead


class JobList(CamelModel):
    jobs: List[JobRead]


class OwnedJobList(CamelModel):
    jobs: List[OwnedJobRead]
