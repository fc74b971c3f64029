"""
ConversationStore — chat registry, per-chat message history and media.

Persisted keys:
    glintChatList        chat registry, newest first
    messages_<chatId>    message history for one chat, append order
    glintMediaStorage    {chatId: [media asset, ...]}

Every operation names its chat explicitly. Reads that hit malformed data
log a warning and behave as if nothing were stored; writes that fail are
logged and dropped.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from glint_chat import ids
from glint_chat.errors import StorageUnavailableError
from glint_chat.models.chat import Chat, ChatHistory, MediaAsset, MediaKind, MessageEntry
from glint_chat.storage import KeyValueStore

logger = logging.getLogger("glint_chat.conversations")

CHAT_LIST_KEY = "glintChatList"
MEDIA_KEY = "glintMediaStorage"
HISTORY_KEY_PREFIX = "messages_"

DEFAULT_MIME_TYPES = {MediaKind.PHOTO: "image/png", MediaKind.VOICE: "audio/wav"}

_chat_list = TypeAdapter(list[Chat])
_message_list = TypeAdapter(list[MessageEntry])
_media_index = TypeAdapter(dict[str, list[MediaAsset]])


def history_key(chat_id: str) -> str:
    return f"{HISTORY_KEY_PREFIX}{chat_id}"


def default_chat_name(now: datetime) -> str:
    return "Nai Chat " + now.strftime("%d %b, %I:%M %p")


def encode_data_uri(raw: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"


class ConversationStore:
    def __init__(self, store: KeyValueStore):
        self._store = store

    # -- raw access --

    def _read(self, key: str, adapter: TypeAdapter, default: Any) -> Any:
        try:
            raw = self._store.get(key)
        except StorageUnavailableError as e:
            logger.error(f"Reading {key} failed: {e}")
            return default
        if raw is None:
            return default
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Stored value for {key} is malformed, treating as empty: {e.error_count()} errors")
            return default

    def _write(self, key: str, adapter: TypeAdapter, value: Any) -> bool:
        try:
            payload = adapter.dump_json(value, by_alias=True).decode("utf-8")
            self._store.set(key, payload)
        except StorageUnavailableError as e:
            logger.error(f"Writing {key} failed: {e}")
            return False
        return True

    # -- chat registry --

    def list_chats(self) -> list[Chat]:
        return self._read(CHAT_LIST_KEY, _chat_list, [])

    def create_chat(self, display_name: Optional[str] = None) -> Chat:
        chats = self.list_chats()
        existing = {c.id for c in chats}
        chat_id = ids.chat_id()
        while chat_id in existing:
            chat_id = ids.chat_id()
        now = datetime.now()
        chat = Chat(id=chat_id, display_name=display_name or default_chat_name(now), created_at=now)
        chats.insert(0, chat)
        self._write(CHAT_LIST_KEY, _chat_list, chats)
        logger.info(f"New chat started: {chat.id}")
        return chat

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        for chat in self.list_chats():
            if chat.id == chat_id:
                return chat
        return None

    def resolve_chat_name(self, chat_id: str) -> Optional[str]:
        chat = self.get_chat(chat_id)
        return chat.display_name if chat else None

    def rename_chat(self, chat_id: str, display_name: str) -> Optional[Chat]:
        chats = self.list_chats()
        for i, chat in enumerate(chats):
            if chat.id == chat_id:
                chats[i] = chat.model_copy(update={"display_name": display_name})
                self._write(CHAT_LIST_KEY, _chat_list, chats)
                return chats[i]
        return None

    # -- messages --

    def messages(self, chat_id: str) -> list[MessageEntry]:
        return self._read(history_key(chat_id), _message_list, [])

    def append_message(self, chat_id: str, entry: MessageEntry) -> MessageEntry:
        """Record ``entry`` as the newest message of ``chat_id``.

        The chat is not looked up in the registry; callers create it first.
        """
        if entry.chat_id != chat_id:
            entry = entry.model_copy(update={"chat_id": chat_id})
        history = self.messages(chat_id)
        history.append(entry)
        self._write(history_key(chat_id), _message_list, history)
        return entry

    def load_chat(self, chat_id: str) -> ChatHistory:
        history = ChatHistory(chat_id=chat_id, messages=self.messages(chat_id), media=self.list_media(chat_id))
        logger.debug(f"Loaded chat {chat_id}: {len(history.messages)} messages, {len(history.media)} media")
        return history

    # -- media --

    def _media_index(self) -> dict[str, list[MediaAsset]]:
        return self._read(MEDIA_KEY, _media_index, {})

    def list_media(self, chat_id: str) -> list[MediaAsset]:
        return self._media_index().get(chat_id, [])

    def get_media(self, chat_id: str, media_id: str) -> Optional[MediaAsset]:
        for asset in self.list_media(chat_id):
            if asset.id == media_id:
                return asset
        return None

    def append_media(
        self, chat_id: str, kind: Union[MediaKind, str], data: str, file_name: str,
    ) -> MediaAsset:
        """Store an already-encoded asset. The announcing message is the caller's job."""
        kind = MediaKind(kind)
        asset = MediaAsset(
            id=ids.media_id(kind.value),
            chat_id=chat_id,
            kind=kind,
            data=data,
            file_name=file_name,
            created_at=datetime.now(),
        )
        index = self._media_index()
        index.setdefault(chat_id, []).append(asset)
        self._write(MEDIA_KEY, _media_index, index)
        logger.info(f"{kind.value.capitalize()} saved: {file_name} (ID: {asset.id})")
        return asset

    async def append_media_bytes(
        self,
        chat_id: str,
        kind: Union[MediaKind, str],
        raw: bytes,
        file_name: str,
        mime_type: Optional[str] = None,
    ) -> MediaAsset:
        """Encode ``raw`` off the event loop, then store it.

        The index is read only after encoding finishes, so concurrent captures
        for the same chat do not overwrite each other.
        """
        kind = MediaKind(kind)
        data = await asyncio.to_thread(encode_data_uri, raw, mime_type or DEFAULT_MIME_TYPES[kind])
        return self.append_media(chat_id, kind, data, file_name)


def dump_history(history: ChatHistory) -> str:
    """Serialize a loaded history, e.g. for export."""
    return json.dumps(history.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2)
