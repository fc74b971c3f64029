"""
ChatSession — one user's view of the conversation store.

Holds the active chat and runs each submitted message through
classify → dispatch (or demo fallback) → store, notifying event handlers
along the way:

    chat      the active chat changed           data: Chat
    message   an entry was appended             data: MessageEntry
    pending   a reply is being resolved         data: {"category", "pending_id"}
    resolved  a pending reply finished          data: {"pending_id", "entry"}
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Union

from glint_chat import ids
from glint_chat.classifier import classify, matched_keyword
from glint_chat.conversations import ConversationStore
from glint_chat.demo import fallback
from glint_chat.errors import GlintError, NoActiveChatError, TransportUnsupportedError
from glint_chat.gateway import ProviderGateway
from glint_chat.keystore import KeyStore
from glint_chat.models.chat import (
    Category,
    Chat,
    ChatHistory,
    MediaAsset,
    MediaKind,
    MessageEntry,
    MessageKind,
    Role,
)
from glint_chat.models.reply import ProviderOptions

logger = logging.getLogger("glint_chat.session")

DEFAULT_REPLY_DELAY_S = 1.0
DEFAULT_CHAT_NAME = "Glint Chat"


class SessionState(str, Enum):
    NO_ACTIVE_CHAT = "no_active_chat"
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class SessionEvent:
    __slots__ = ("type", "chat_id", "data")

    def __init__(self, type: str, chat_id: str, data: Any):
        self.type = type
        self.chat_id = chat_id
        self.data = data

    def __repr__(self) -> str:
        return f"SessionEvent(type={self.type!r}, chat_id={self.chat_id!r})"


EventHandler = Callable[[SessionEvent], None]


def error_text(error: Exception) -> str:
    if isinstance(error, TransportUnsupportedError):
        return error.message
    message = error.message if isinstance(error, GlintError) else str(error)
    return f"❌ API Error: {message}. Please check your API configuration."


class ChatSession:
    def __init__(
        self,
        conversations: ConversationStore,
        keystore: KeyStore,
        gateway: ProviderGateway,
        reply_delay_s: float = DEFAULT_REPLY_DELAY_S,
        options: Optional[ProviderOptions] = None,
    ):
        self._conversations = conversations
        self._keystore = keystore
        self._gateway = gateway
        self._reply_delay_s = reply_delay_s
        self._options = options
        self._active_chat_id: Optional[str] = None
        self._pending: set[asyncio.Task[MessageEntry]] = set()
        self._handlers: list[EventHandler] = []

    # -- state --

    @property
    def active_chat_id(self) -> Optional[str]:
        return self._active_chat_id

    @property
    def state(self) -> SessionState:
        if self._active_chat_id is None:
            return SessionState.NO_ACTIVE_CHAT
        if self._pending:
            return SessionState.AWAITING_REPLY
        return SessionState.IDLE

    def add_event_handler(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler. Returns a function that removes it."""
        self._handlers.append(handler)

        def remove() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass
        return remove

    def _emit(self, type: str, chat_id: str, data: Any) -> None:
        event = SessionEvent(type, chat_id, data)
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Event handler failed for {event!r}")

    # -- chat lifecycle --

    def create_chat(self) -> Chat:
        chat = self._conversations.create_chat()
        self._active_chat_id = chat.id
        self._emit("chat", chat.id, chat)
        return chat

    def load_chat(self, chat_id: str) -> ChatHistory:
        self._active_chat_id = chat_id
        history = self._conversations.load_chat(chat_id)
        chat = self._conversations.get_chat(chat_id)
        if chat is None:
            # history without a registry entry; not persisted
            chat = Chat(id=chat_id, display_name=DEFAULT_CHAT_NAME, created_at=datetime.now())
        self._emit("chat", chat_id, chat)
        return history

    def list_media(self, chat_id: Optional[str] = None) -> list[MediaAsset]:
        chat_id = chat_id or self._active_chat_id
        if chat_id is None:
            return []
        return self._conversations.list_media(chat_id)

    def _require_chat(self) -> str:
        if self._active_chat_id is None:
            raise NoActiveChatError()
        return self._active_chat_id

    def _with_active_chat(self, write: Callable[[str], Any]) -> Any:
        """Run ``write`` against the active chat, creating one first if needed."""
        try:
            return write(self._require_chat())
        except NoActiveChatError:
            logger.warning("No active chat for write; starting a new chat")
            self.create_chat()
            return write(self._require_chat())

    def _append(self, chat_id: str, role: Role, kind: MessageKind, payload: str) -> MessageEntry:
        entry = MessageEntry(
            id=ids.message_id(),
            chat_id=chat_id,
            role=role,
            kind=kind,
            payload=payload,
            timestamp=datetime.now(),
        )
        self._conversations.append_message(chat_id, entry)
        self._emit("message", chat_id, entry)
        return entry

    # -- messages --

    def submit(self, text: str) -> asyncio.Task[MessageEntry]:
        """Append the user's message and start resolving the reply.

        Must be called with a running event loop. The returned task yields
        the bot (or error) entry once it has been stored.
        """
        if not text or not text.strip():
            raise ValueError("Message text is empty")
        user_entry = self._with_active_chat(
            lambda chat_id: self._append(chat_id, Role.USER, MessageKind.TEXT, text)
        )
        chat_id = user_entry.chat_id
        category = classify(text)
        pending_id = ids.new_id("pending")
        self._emit("pending", chat_id, {"category": category, "pending_id": pending_id})

        task = asyncio.get_running_loop().create_task(self._resolve(chat_id, text, category, pending_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def send(self, text: str) -> MessageEntry:
        """Submit and wait for the reply."""
        return await self.submit(text)

    async def _resolve(self, chat_id: str, text: str, category: Category, pending_id: str) -> MessageEntry:
        if self._reply_delay_s > 0:
            await asyncio.sleep(self._reply_delay_s)

        match = matched_keyword(text)
        logger.debug(f"Routing to {category.value} (keyword: {match[1] if match else None})")

        credentials = self._keystore.credentials()
        if category not in credentials:
            demo = fallback(self._keystore.language, category, text)
            entry = self._append(chat_id, Role.BOT, MessageKind.TEXT, demo)
        else:
            try:
                reply = await self._gateway.dispatch(category, text, credentials, self._options)
            except GlintError as e:
                entry = self._append(chat_id, Role.BOT, MessageKind.ERROR, error_text(e))
            except Exception as e:
                logger.exception(f"Unexpected failure resolving {category.value} reply")
                entry = self._append(chat_id, Role.BOT, MessageKind.ERROR, error_text(e))
            else:
                entry = self._append(chat_id, Role.BOT, reply.kind, reply.content)

        self._emit("resolved", chat_id, {"pending_id": pending_id, "entry": entry})
        return entry

    async def wait_idle(self) -> None:
        """Wait for every in-flight reply to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # -- media --

    def _announce(self, chat_id: str, asset: MediaAsset) -> None:
        kind = MessageKind.IMAGE if asset.kind == MediaKind.PHOTO else MessageKind.VOICE
        self._append(chat_id, Role.USER, kind, asset.id)

    def attach_photo(self, data: str, file_name: str) -> MediaAsset:
        """Store an already-encoded photo for the active chat and announce it in the history."""
        def write(chat_id: str) -> MediaAsset:
            asset = self._conversations.append_media(chat_id, MediaKind.PHOTO, data, file_name)
            self._announce(chat_id, asset)
            return asset
        return self._with_active_chat(write)

    async def attach_bytes(
        self, kind: Union[MediaKind, str], raw: bytes, file_name: str, mime_type: Optional[str] = None,
    ) -> MediaAsset:
        """Encode and store captured bytes (photo or voice recording)."""
        chat_id = self._with_active_chat(lambda chat_id: chat_id)
        asset = await self._conversations.append_media_bytes(chat_id, kind, raw, file_name, mime_type)
        self._announce(chat_id, asset)
        return asset

    async def attach_voice(self, raw: bytes, file_name: str, mime_type: Optional[str] = None) -> MediaAsset:
        return await self.attach_bytes(MediaKind.VOICE, raw, file_name, mime_type)
