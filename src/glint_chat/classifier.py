"""
Keyword router — picks the provider category for a message.

Rules are checked in order; the first rule with a matching keyword wins.
"""

from typing import Optional

from glint_chat.models.chat import Category

IMAGE_KEYWORDS = (
    "image", "photo", "picture", "generate image", "create image", "draw",
    "visual", "painting", "artwork",
)

VOICE_KEYWORDS = (
    "voice", "speech", "audio", "record", "listen", "speak", "microphone",
    "sound", "text to speech", "tts",
)

CODING_KEYWORDS = (
    "code", "function", "program", "script", "algorithm", "debug", "error",
    "fix", "build", "create", "develop", "write", "make", "javascript",
    "python", "html", "css", "react", "node", "api", "loop", "array",
    "object", "class", "component", "database", "variable", "syntax",
)

RULES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.IMAGE, IMAGE_KEYWORDS),
    (Category.VOICE, VOICE_KEYWORDS),
    (Category.CODING, CODING_KEYWORDS),
)


def matched_keyword(text: str) -> Optional[tuple[Category, str]]:
    """Return the (category, keyword) pair that fires for ``text``, if any."""
    lower = text.lower()
    for category, keywords in RULES:
        for keyword in keywords:
            if keyword in lower:
                return category, keyword
    return None


def classify(text: str) -> Category:
    match = matched_keyword(text)
    return match[0] if match else Category.TEXT
