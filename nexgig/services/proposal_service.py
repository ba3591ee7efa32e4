import logging
from typing import List

from sqlmodel import Session, select, update

from nexgig.core.errors import ConflictError, NotFoundError
from nexgig.models.assignment import Assignment
from nexgig.models.job import Job
from nexgig.models.proposal import OPEN_STATUSES, Proposal, ProposalStatus
from nexgig.models.user import User
from nexgig.schemas.proposal import FreelancerProposalRead, JobProposalRead, ProposalCreate
from nexgig.services.authorization import require_job_owner
from nexgig.services.transaction import atomic

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "Already applied"


def submit_proposal(session: Session, job_id: int, freelancer_id: int, proposal_in: ProposalCreate) -> int:
    """Creates a pending proposal and returns its id.

    The existence check gives the common case a clean 409 without touching the
    table; the unique (job_id, freelancer_id) constraint settles concurrent
    submissions that both pass it.
    """
    if session.get(Job, job_id) is None:
        raise NotFoundError("Job not found")

    existing = session.exec(
        select(Proposal.id)
        .where(Proposal.job_id == job_id)
        .where(Proposal.freelancer_id == freelancer_id)
    ).first()
    if existing is not None:
        logger.warning("Freelancer %s already applied to job %s", freelancer_id, job_id)
        raise ConflictError(ALREADY_APPLIED)

    proposal = Proposal(
        job_id=job_id,
        freelancer_id=freelancer_id,
        cover_letter=proposal_in.cover_letter,
        expected_rate=proposal_in.expected_rate,
        timeline=proposal_in.timeline,
        additional_details=proposal_in.additional_details,
        status=ProposalStatus.pending,
    )
    with atomic(session, "submit proposal", conflict=ALREADY_APPLIED):
        session.add(proposal)
    session.refresh(proposal)
    logger.info("Proposal %s submitted by freelancer %s for job %s", proposal.id, freelancer_id, job_id)
    return proposal.id


def list_proposals_for_freelancer(session: Session, freelancer_id: int) -> List[FreelancerProposalRead]:
    rows = session.exec(
        select(Proposal, Job)
        .join(Job, Job.id == Proposal.job_id)
        .where(Proposal.freelancer_id == freelancer_id)
        .order_by(Proposal.submitted_at.desc(), Proposal.id.desc())
    ).all()
    return [
        FreelancerProposalRead(
            id=proposal.id,
            job_id=proposal.job_id,
            cover_letter=proposal.cover_letter,
            expected_rate=proposal.expected_rate,
            timeline=proposal.timeline,
            additional_details=proposal.additional_details,
            status=proposal.status,
            submitted_at=proposal.submitted_at,
            title=job.title,
            budget=job.budget,
            description=job.description,
        )
        for proposal, job in rows
    ]


def list_proposals_for_job(session: Session, job_id: int, caller_id: int) -> List[JobProposalRead]:
    # a missing job and someone else's job look the same to the caller
    require_job_owner(session, caller_id, job_id)

    rows = session.exec(
        select(Proposal, User)
        .join(User, User.id == Proposal.freelancer_id)
        .where(Proposal.job_id == job_id)
        .order_by(Proposal.submitted_at.desc(), Proposal.id.desc())
    ).all()
    return [
        JobProposalRead(
            id=proposal.id,
            cover_letter=proposal.cover_letter,
            expected_rate=proposal.expected_rate,
            timeline=proposal.timeline,
            additional_details=proposal.additional_details,
            status=proposal.status,
            submitted_at=proposal.submitted_at,
            freelancer_name=freelancer.name,
            freelancer_id=freelancer.id,
        )
        for proposal, freelancer in rows
    ]


def _get_owned_proposal(session: Session, proposal_id: int, caller_id: int) -> Proposal:
    proposal = session.get(Proposal, proposal_id)
    if proposal is None:
        raise NotFoundError("Proposal not found")
    require_job_owner(session, caller_id, proposal.job_id)
    return proposal


def _close_proposal(session: Session, proposal: Proposal, status: ProposalStatus) -> None:
    # conditional update: of two concurrent transitions only one can match
    result = session.exec(
        update(Proposal)
        .where(Proposal.id == proposal.id)
        .where(Proposal.status.in_(OPEN_STATUSES))
        .values(status=status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        session.refresh(proposal)
        logger.warning("Proposal %s is already %s", proposal.id, proposal.status.value)
        raise ConflictError(f"Proposal already {proposal.status.value}")


def accept_proposal(session: Session, proposal_id: int, caller_id: int) -> Assignment:
    """Marks the proposal accepted and engages its freelancer on the job.

    The status change and the assignment row are committed together or not
    at all. Accepted and rejected proposals cannot be transitioned again.
    """
    proposal = _get_owned_proposal(session, proposal_id, caller_id)

    assignment = Assignment(job_id=proposal.job_id, freelancer_id=proposal.freelancer_id)
    with atomic(session, "accept proposal"):
        _close_proposal(session, proposal, ProposalStatus.accepted)
        session.add(assignment)
    session.refresh(assignment)
    logger.info(
        "Proposal %s accepted; freelancer %s assigned to job %s",
        proposal_id, assignment.freelancer_id, assignment.job_id,
    )
    return assignment


def reject_proposal(session: Session, proposal_id: int, caller_id: int) -> None:
    proposal = _get_owned_proposal(session, proposal_id, caller_id)

    with atomic(session, "reject proposal"):
        _close_proposal(session, proposal, ProposalStatus.rejected)
    logger.info("Proposal %s rejected", proposal_id)
