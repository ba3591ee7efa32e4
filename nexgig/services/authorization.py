"""Ownership and membership rules shared by the job, proposal and chat services.

Predicates answer yes/no; the ``require_*`` guards raise ``ForbiddenError`` so
callers can use them as a single line at the top of an operation.
"""

import logging
from typing import Optional

from sqlmodel import Session, select

from nexgig.core.errors import ForbiddenError
from nexgig.models.chat import ChatParticipant
from nexgig.models.job import Job
from nexgig.models.user import User, UserRole

logger = logging.getLogger(__name__)


def has_role(user: User, role: UserRole) -> bool:
    return user is not None and user.role == role


def is_job_owner(session: Session, user_id: int, job_id: int) -> bool:
    owner_id: Optional[int] = session.exec(
        select(Job.client_id).where(Job.id == job_id)
    ).first()
    # unowned seed jobs have no owner to match
    return owner_id is not None and owner_id == user_id


def is_chat_participant(session: Session, user_id: int, chat_id: int) -> bool:
    membership = session.exec(
        select(ChatParticipant)
        .where(ChatParticipant.chat_id == chat_id)
        .where(ChatParticipant.user_id == user_id)
    ).first()
    return membership is not None


def require_role(user: User, role: UserRole) -> User:
    if not has_role(user, role):
        logger.warning("User %s denied: requires role %s", getattr(user, "id", None), role.value)
        raise ForbiddenError()
    return user


def require_job_owner(session: Session, user_id: int, job_id: int) -> None:
    if not is_job_owner(session, user_id, job_id):
        logger.warning("User %s denied: not the owner of job %s", user_id, job_id)
        raise ForbiddenError()


def require_chat_participant(session: Session, user_id: int, chat_id: int) -> None:
    if not is_chat_participant(session, user_id, chat_id):
        logger.warning("User %s denied: not a participant of chat %s", user_id, chat_id)
        raise ForbiddenError()
