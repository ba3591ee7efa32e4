from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from nexgig.api.endpoints.auth import get_current_user
from nexgig.database import get_session
from nexgig.models.user import User
from nexgig.schemas.chat import (
    ChatCreate,
    ChatEnvelope,
    ChatList,
    ChatRead,
    MessageCreate,
    MessageEnvelope,
    MessageList,
    MessageRead,
)
from nexgig.services import chat_service

router = APIRouter()


@router.get("/", response_model=ChatList)
def list_chats(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return {"chats": chat_service.list_chats_for_user(session, current_user.id)}


@router.post("/", response_model=ChatEnvelope, status_code=status.HTTP_201_CREATED)
def create_chat(
    chat_in: ChatCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    chat, members = chat_service.create_chat(session, current_user.id, chat_in.participant_ids)
    return ChatEnvelope(chat=ChatRead(id=chat.id, participant_ids=members))


@router.get("/{chat_id}/messages", response_model=MessageList)
def list_messages(
    chat_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return {"messages": chat_service.list_messages(session, chat_id, current_user.id)}


@router.post("/{chat_id}/messages", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED)
def send_message(
    chat_id: int,
    message_in: MessageCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    message = chat_service.send_message(session, chat_id, current_user.id, message_in.text)
    return MessageEnvelope(message=MessageRead.model_validate(message))
