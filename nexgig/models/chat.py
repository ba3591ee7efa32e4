from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from nexgig.core.clock import UTCDateTime, utcnow


class Chat(SQLModel, table=True):
    __tablename__ = "chats"

    id: Optional[int] = Field(default=None, primary_key=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


class ChatParticipant(SQLModel, table=True):
    __tablename__ = "chat_participants"

    chat_id: int = Field(foreign_key="chats.id", primary_key=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")


class Message(SQLModel, table=True):
    __tablename__ = "messages"

    # ids are assigned by the store and define message order within a chat
    id: Optional[int] = Field(default=None, primary_key=True)
    chat_id: int = Field(foreign_key="chats.id", index=True, ondelete="CASCADE")
    sender_id: int = Field(foreign_key="users.id", ondelete="CASCADE")
    text: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
