"""
AsyncGlint wires storage, credentials, the provider gateway and a chat
session into one object for a UI to drive.
"""

from pathlib import Path
from typing import Optional, Union

import httpx

from glint_chat.conversations import ConversationStore
from glint_chat.gateway import ProviderGateway
from glint_chat.keystore import KeyStore
from glint_chat.models.chat import Category, Chat, ChatHistory, Language, MediaAsset, MessageEntry
from glint_chat.models.reply import ProviderOptions
from glint_chat.session import DEFAULT_REPLY_DELAY_S, ChatSession
from glint_chat.storage import DEFAULT_STORE_FILE, JsonFileKeyValueStore, KeyValueStore
from glint_chat.transport.http import DEFAULT_TIMEOUT_S, HttpClient


class AsyncGlint:
    """Async Glint client (primary)."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        store_path: Union[str, Path, None] = None,
        voice_relay_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        reply_delay_s: float = DEFAULT_REPLY_DELAY_S,
        options: Optional[ProviderOptions] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store or JsonFileKeyValueStore(store_path or DEFAULT_STORE_FILE)
        self.keys = KeyStore(self.store)
        self.conversations = ConversationStore(self.store)
        self.http = HttpClient(timeout=timeout, transport=transport)
        self.gateway = ProviderGateway(self.http, language=lambda: self.keys.language, voice_relay_url=voice_relay_url)
        self.session = ChatSession(
            self.conversations, self.keys, self.gateway, reply_delay_s=reply_delay_s, options=options,
        )

    @property
    def active_chat_id(self) -> Optional[str]:
        return self.session.active_chat_id

    def create_chat(self) -> Chat:
        return self.session.create_chat()

    def load_chat(self, chat_id: str) -> ChatHistory:
        return self.session.load_chat(chat_id)

    def list_chats(self) -> list[Chat]:
        return self.conversations.list_chats()

    def list_media(self, chat_id: Optional[str] = None) -> list[MediaAsset]:
        return self.session.list_media(chat_id)

    async def submit(self, text: str) -> MessageEntry:
        """Send a message on the active chat (creating one if needed) and wait for the reply."""
        return await self.session.submit(text)

    def get_credential_status(self, category: Union[Category, str]) -> bool:
        return self.keys.get_credential_status(category)

    def set_credential(self, category: Union[Category, str], value: Optional[str]) -> bool:
        return self.keys.set_credential(category, value)

    @property
    def language(self) -> Language:
        return self.keys.language

    def set_language(self, language: Union[Language, str]) -> Language:
        return self.keys.set_language(language)

    async def close(self) -> None:
        await self.session.wait_idle()
        await self.http.close()

    async def __aenter__(self) -> "AsyncGlint":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
