"""
Identifier generation: ``{prefix}-{ms timestamp}-{counter}``.

The counter is process-wide and monotonic, so two ids minted in the same
millisecond still differ.
"""

import itertools
import time

_counter = itertools.count(1)


def new_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{next(_counter)}"


def chat_id() -> str:
    return new_id("chat")


def message_id() -> str:
    return new_id("msg")


def media_id(kind: str) -> str:
    return new_id(kind)
