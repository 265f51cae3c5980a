"""Pure functions for building the model context window. No I/O."""

from __future__ import annotations

from typing import Iterable

from .messages import AIMessage, CoreMessage
from .taxonomy import is_auxiliary

MAX_CONTEXT_MESSAGES = 6


def build_context_window(
    messages: Iterable[AIMessage],
    max_messages: int = MAX_CONTEXT_MESSAGES,
) -> list[CoreMessage]:
    """
    Select the recent conversational messages handed to the generation controller.

    Args:
        messages: Log entries in insertion order
        max_messages: Window size (most recent entries are kept)

    Returns:
        At most max_messages dicts with role and content, oldest first.
        Tool output, followup/related suggestions and end markers are excluded.
    """
    if max_messages <= 0:
        return []

    eligible = [
        {"role": m.role, "content": m.content} for m in messages if not is_auxiliary(m)
    ]
    return eligible[-max_messages:]
