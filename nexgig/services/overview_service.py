from sqlmodel import Session, func, or_, select

from nexgig.models.chat import ChatParticipant, Message
from nexgig.models.job import Job
from nexgig.models.proposal import Proposal
from nexgig.schemas.overview import Overview, OverviewStats, RecentJob
from nexgig.services.chat_service import recent_messages


def build_overview(session: Session, user_id: int) -> Overview:
    jobs_count = session.exec(
        select(func.count(Job.id)).where(Job.client_id == user_id)
    ).one()
    proposals_count = session.exec(
        select(func.count(Proposal.id))
        .join(Job, Job.id == Proposal.job_id)
        .where(Job.client_id == user_id)
    ).one()
    my_chats = select(ChatParticipant.chat_id).where(ChatParticipant.user_id == user_id)
    messages_count = session.exec(
        select(func.count(Message.id)).where(
            or_(Message.sender_id == user_id, Message.chat_id.in_(my_chats))
        )
    ).one()

    recent_jobs = session.exec(
        select(Job).where(Job.client_id == user_id).order_by(Job.id.desc()).limit(5)
    ).all()
    latest = recent_messages(session, user_id, limit=3)

    return Overview(
        stats=OverviewStats(
            active_jobs=jobs_count,
            active_proposals=proposals_count,
            messages_count=messages_count,
        ),
        recent_jobs=[RecentJob.model_validate(job) for job in recent_jobs],
        recent_messages=latest,
    )
