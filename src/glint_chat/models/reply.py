"""
Provider request options and replies.
"""

from typing import Optional

from pydantic import BaseModel

from glint_chat.models.chat import Category, MessageKind


class ProviderOptions(BaseModel):
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    system_prompt_addendum: Optional[str] = None


class Reply(BaseModel):
    """Successful provider reply, tagged with the category that produced it."""
    category: Category
    kind: MessageKind = MessageKind.TEXT  # text, or image/voice when content is a URI
    content: str
