from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from nexgig.api.endpoints.auth import get_current_client, get_current_freelancer
from nexgig.database import get_session
from nexgig.models.user import User
from nexgig.schemas.base import OkResponse
from nexgig.schemas.job import JobCreate, JobEnvelope, JobList, JobUpdate, OwnedJobList
from nexgig.schemas.proposal import (
    FreelancerProposalList,
    JobProposalList,
    ProposalCreate,
    ProposalCreated,
)
from nexgig.services import job_service, proposal_service

router = APIRouter()

# Fixed paths are declared before "/{job_id}" so they are not captured by it.


@router.get("/public", response_model=JobList)
def list_public_jobs(session: Session = Depends(get_session)):
    return {"jobs": job_service.list_public_jobs(session)}


@router.get("/mine/list", response_model=OwnedJobList)
def list_my_jobs(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    return {"jobs": job_service.list_jobs_for_client(session, current_user.id)}


@router.get("/proposals/my", response_model=FreelancerProposalList)
def list_my_proposals(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_freelancer),
):
    return {"proposals": proposal_service.list_proposals_for_freelancer(session, current_user.id)}


@router.patch("/proposals/{proposal_id}/accept", response_model=OkResponse)
def accept_proposal(
    proposal_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    proposal_service.accept_proposal(session, proposal_id, current_user.id)
    return OkResponse()


@router.patch("/proposals/{proposal_id}/reject", response_model=OkResponse)
def reject_proposal(
    proposal_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    proposal_service.reject_proposal(session, proposal_id, current_user.id)
    return OkResponse()


@router.get("/", response_model=JobList)
def list_jobs(session: Session = Depends(get_session)):
    return {"jobs": job_service.list_jobs(session)}


@router.post("/", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
def create_job(
    job_in: JobCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    return {"job": job_service.create_job(session, current_user.id, job_in)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, session: Session = Depends(get_session)):
    return {"job": job_service.get_job(session, job_id)}


@router.patch("/{job_id}", response_model=OkResponse)
def update_job(
    job_id: int,
    job_in: JobUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    job_service.update_job(session, job_id, current_user.id, job_in)
    return OkResponse()


@router.delete("/{job_id}", response_model=OkResponse)
def delete_job(
    job_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    job_service.delete_job(session, job_id, current_user.id)
    return OkResponse()


@router.get("/{job_id}/proposals", response_model=JobProposalList)
def list_job_proposals(
    job_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_client),
):
    return {"proposals": proposal_service.list_proposals_for_job(session, job_id, current_user.id)}


@router.post("/{job_id}/proposals", response_model=ProposalCreated)
def submit_proposal(
    job_id: int,
    proposal_in: ProposalCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_freelancer),
):
    proposal_id = proposal_service.submit_proposal(session, job_id, current_user.id, proposal_in)
    return ProposalCreated(proposal_id=proposal_id)
