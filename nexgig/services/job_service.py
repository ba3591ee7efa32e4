import logging
from typing import List

from sqlmodel import Session, func, select

from nexgig.core.errors import NotFoundError
from nexgig.models.job import Job
from nexgig.models.proposal import Proposal
from nexgig.schemas.job import JobCreate, JobUpdate, OwnedJobRead
from nexgig.services.authorization import require_job_owner
from nexgig.services.transaction import atomic

logger = logging.getLogger(__name__)


def create_job(session: Session, client_id: int, job_in: JobCreate) -> Job:
    job = Job(
        title=job_in.title,
        budget=job_in.budget,
        description=job_in.description,
        client_id=client_id,
    )
    with atomic(session, "create job"):
        session.add(job)
    session.refresh(job)
    logger.info("Job %s created by client %s", job.id, client_id)
    return job


def list_public_jobs(session: Session) -> List[Job]:
    return session.exec(
        select(Job).where(Job.client_id.is_not(None)).order_by(Job.id.desc())
    ).all()


def list_jobs(session: Session) -> List[Job]:
    return session.exec(select(Job).order_by(Job.id.desc())).all()


def get_job(session: Session, job_id: int) -> Job:
    job = session.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


def list_jobs_for_client(session: Session, client_id: int) -> List[OwnedJobRead]:
    rows = session.exec(
        select(Job, func.count(Proposal.id))
        .outerjoin(Proposal, Proposal.job_id == Job.id)
        .where(Job.client_id == client_id)
        .group_by(Job.id)
        .order_by(Job.id.desc())
    ).all()
    return [
        OwnedJobRead(**job.model_dump(), proposal_count=count)
        for job, count in rows
    ]


def update_job(session: Session, job_id: int, caller_id: int, job_in: JobUpdate) -> Job:
    require_job_owner(session, caller_id, job_id)
    job = session.get(Job, job_id)
    with atomic(session, "update job"):
        job.title = job_in.title
        job.budget = job_in.budget
        job.description = job_in.description
        session.add(job)
    session.refresh(job)
    logger.info("Job %s updated by client %s", job_id, caller_id)
    return job


def delete_job(session: Session, job_id: int, caller_id: int) -> None:
    """Deletes the job; its proposals and assignments go with it (FK cascade)."""
    require_job_owner(session, caller_id, job_id)
    job = session.get(Job, job_id)
    with atomic(session, "delete job"):
        session.delete(job)
    logger.info("Job %s deleted by client %s", job_id, caller_id)
