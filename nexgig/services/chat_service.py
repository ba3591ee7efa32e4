import logging
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlmodel import Session, func, select, update

from nexgig.core.errors import NotFoundError, ValidationFailedError
from nexgig.models.chat import Chat, ChatParticipant, Message
from nexgig.models.user import User
from nexgig.schemas.base import to_epoch_ms
from nexgig.schemas.chat import ChatSummary
from nexgig.schemas.overview import RecentMessage
from nexgig.services.authorization import require_chat_participant
from nexgig.services.transaction import atomic

logger = logging.getLogger(__name__)


def _preview_rows(session: Session, user_id: int, limit: Optional[int] = None):
    """(chat id, chat updated_at, latest message text, latest message created_at) per chat.

    Chats that have messages come first, newest activity first; chats with no
    messages follow with NULL message columns. Chat id (descending) breaks any
    remaining tie.
    """
    # message ids grow with every insert, so the highest id is the latest message
    latest = (
        select(Message.chat_id, func.max(Message.id).label("last_id"))
        .group_by(Message.chat_id)
        .subquery()
    )
    statement = (
        select(Chat.id, Chat.updated_at, Message.text, Message.created_at)
        .select_from(Chat)
        .join(
            ChatParticipant,
            and_(ChatParticipant.chat_id == Chat.id, ChatParticipant.user_id == user_id),
        )
        .outerjoin(latest, latest.c.chat_id == Chat.id)
        .outerjoin(Message, Message.id == latest.c.last_id)
        .order_by(
            latest.c.last_id.is_(None),
            Message.created_at.desc(),
            Message.id.desc(),
            Chat.id.desc(),
        )
    )
    if limit is not None:
        statement = statement.limit(limit)
    return session.exec(statement).all()


def list_chats_for_user(session: Session, user_id: int) -> List[ChatSummary]:
    """Chats the user belongs to, each with its latest message."""
    return [
        ChatSummary(
            id=chat_id,
            last_message=last_text or "",
            updated_at=to_epoch_ms(last_created_at or chat_updated_at),
        )
        for chat_id, chat_updated_at, last_text, last_created_at in _preview_rows(session, user_id)
    ]


def recent_messages(session: Session, user_id: int, limit: int) -> List[RecentMessage]:
    """Latest message per chat; ``time`` stays None for chats with no messages."""
    return [
        RecentMessage(
            chat_id=chat_id,
            last_message=last_text or "",
            time=to_epoch_ms(last_created_at) if last_created_at is not None else None,
        )
        for chat_id, _, last_text, last_created_at in _preview_rows(session, user_id, limit)
    ]


def list_messages(session: Session, chat_id: int, caller_id: int) -> List[Message]:
    require_chat_participant(session, caller_id, chat_id)
    return session.exec(
        select(Message).where(Message.chat_id == chat_id).order_by(Message.id)
    ).all()


def send_message(session: Session, chat_id: int, sender_id: int, text: str) -> Message:
    """Appends a message and bumps the chat's last-activity time in one transaction."""
    require_chat_participant(session, sender_id, chat_id)

    message = Message(chat_id=chat_id, sender_id=sender_id, text=text)
    with atomic(session, "send message"):
        session.add(message)
        session.exec(
            update(Chat).where(Chat.id == chat_id).values(updated_at=message.created_at)
        )
    session.refresh(message)
    logger.info("Message %s sent to chat %s by user %s", message.id, chat_id, sender_id)
    return message


def create_chat(session: Session, creator_id: int, participant_ids: List[int]) -> Tuple[Chat, List[int]]:
    # membership is a set: repeated ids and the creator listing themselves collapse
    members = sorted({creator_id, *participant_ids})
    if len(members) < 2:
        raise ValidationFailedError("A chat needs at least one other participant")

    known = set(session.exec(select(User.id).where(User.id.in_(members))).all())
    missing = [user_id for user_id in members if user_id not in known]
    if missing:
        raise NotFoundError(f"User {missing[0]} not found")

    chat = Chat()
    with atomic(session, "create chat"):
        session.add(chat)
        session.flush()
        for user_id in members:
            session.add(ChatParticipant(chat_id=chat.id, user_id=user_id))
    session.refresh(chat)
    logger.info("Chat %s created by user %s with members %s", chat.id, creator_id, members)
    return chat, members
