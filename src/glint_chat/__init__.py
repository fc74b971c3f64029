"""
glint-chat — multi-provider chat client for Python.

Routes messages to text, image, voice or coding providers by keyword and
keeps chat history and media in a local key-value store.
"""

from glint_chat.client import AsyncGlint
from glint_chat.classifier import classify
from glint_chat.conversations import ConversationStore
from glint_chat.gateway import ProviderGateway
from glint_chat.keystore import KeyStore
from glint_chat.session import ChatSession, SessionEvent, SessionState
from glint_chat.storage import JsonFileKeyValueStore, MemoryKeyValueStore
from glint_chat.errors import (
    GlintError,
    ConfigurationError,
    TransportUnsupportedError,
    ProviderError,
    StorageUnavailableError,
    NoActiveChatError,
)
from glint_chat.models import Category, Language, MessageKind, MediaKind, Role

__version__ = "0.1.0"
__all__ = [
    "AsyncGlint",
    "classify",
    "ConversationStore",
    "ProviderGateway",
    "KeyStore",
    "ChatSession",
    "SessionEvent",
    "SessionState",
    "JsonFileKeyValueStore",
    "MemoryKeyValueStore",
    "GlintError",
    "ConfigurationError",
    "TransportUnsupportedError",
    "ProviderError",
    "StorageUnavailableError",
    "NoActiveChatError",
    "Category",
    "Language",
    "MessageKind",
    "MediaKind",
    "Role",
]
