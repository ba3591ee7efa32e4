from typing import List
from pydantic import Field, field_validator
from datetime import datetime

from nexgig.schemas.base import CamelModel, to_epoch_ms


class ChatSummary(CamelModel):
    id: int
    last_message: str = ""
    updated_at: int  # epoch ms


class ChatCreate(CamelModel):
    participant_ids: List[int] = Field(min_length=1)


class ChatRead(CamelModel):
    id: int
    participant_ids: List[int]


class MessageCreate(CamelModel):
    text: str = Field(min_length=1)


class MessageRead(CamelModel):
    id: int
    chat_id: int
    sender_id: int
    text: str
    created_at: int  # epoch ms

    @field_validator("created_at", mode="before")
    @classmethod
    def datetime_to_ms(cls, value):
        if isinstance(value, datetime):
            return to_epoch_ms(value)
        return value


class MessageEnvelope(CamelModel):
    message: MessageRead


class ChatList(CamelModel):
    chats: List[ChatSummary]


class ChatEnvelope(CamelModel):
    chat: ChatRead


class MessageList(CamelModel):
    messages: List[MessageRead]
