"""
Conversation models: chats, message entries, media assets.

Persisted as JSON and validated on read.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VOICE = "voice"
    CODING = "coding"


class Language(str, Enum):
    ROMAN_URDU = "roman-urdu"
    URDU = "urdu"
    ENGLISH = "english"


class Role(str, Enum):
    USER = "user"
    BOT = "bot"


class MessageKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VOICE = "voice"
    ERROR = "error"


class MediaKind(str, Enum):
    PHOTO = "photo"
    VOICE = "voice"


class Chat(BaseModel):
    id: str
    display_name: str = Field(alias="name")
    created_at: datetime = Field(alias="date")

    model_config = ConfigDict(populate_by_name=True)


class MessageEntry(BaseModel):
    """One turn in a chat's history. Frozen once created."""
    id: str
    chat_id: str
    role: Role
    kind: MessageKind = MessageKind.TEXT
    payload: str
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class MediaAsset(BaseModel):
    id: str
    chat_id: str = Field(alias="chatId")
    kind: MediaKind = Field(alias="type")
    data: str  # data: URI, base64 payload
    file_name: str = Field(alias="fileName")
    created_at: datetime = Field(alias="timestamp")
    duration: Optional[float] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ChatHistory(BaseModel):
    chat_id: str
    messages: list[MessageEntry] = []
    media: list[MediaAsset] = []

    @property
    def is_empty(self) -> bool:
        return not self.messages and not self.media
