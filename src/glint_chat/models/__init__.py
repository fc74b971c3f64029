from glint_chat.models.chat import (
    Category,
    Chat,
    ChatHistory,
    Language,
    MediaAsset,
    MediaKind,
    MessageEntry,
    MessageKind,
    Role,
)
from glint_chat.models.reply import ProviderOptions, Reply

__all__ = [
    "Category",
    "Chat",
    "ChatHistory",
    "Language",
    "MediaAsset",
    "MediaKind",
    "MessageEntry",
    "MessageKind",
    "Role",
    "ProviderOptions",
    "Reply",
]
