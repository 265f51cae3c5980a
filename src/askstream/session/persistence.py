"""
Persistence hand-off for finished conversations.

A chat record is built only when the log holds at least one answer. Save
failures are logged and swallowed: the conversation stays usable in memory.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Sequence

from askstream.conversation import AIMessage, Chat, ConversationLog, generate_id
from askstream.conversation.messages import ASSISTANT

from .protocols import ChatStore
from .types import SessionConfig

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


def share_path(chat_id: str, prefix: str = "/search") -> str:
    """Public path of a conversation, e.g. /search/abc123."""
    return f"{prefix.rstrip('/')}/{chat_id}"


def derive_title(messages: Sequence[AIMessage], max_length: int = 100) -> str:
    """
    Title from the first entry's `input` field, truncated to max_length.

    Falls back to "Untitled" when there is no first entry, its content is
    not a JSON object, or `input` is missing/empty/not a string.
    """
    if not messages:
        return UNTITLED

    try:
        payload = json.loads(messages[0].content)
    except (json.JSONDecodeError, TypeError):
        return UNTITLED

    title = payload.get("input") if isinstance(payload, dict) else None
    if not isinstance(title, str) or not title:
        return UNTITLED
    return title[:max_length]


def end_marker() -> AIMessage:
    """Synthetic terminal entry appended to persisted records."""
    return AIMessage(id=generate_id(), role=ASSISTANT, content="end", type="end")


def build_chat_record(
    log: ConversationLog,
    config: SessionConfig | None = None,
    created_at: datetime | None = None,
) -> Chat | None:
    """
    Build the chat record for a log.

    Returns:
        Chat with the log's messages plus a trailing end marker, or None when
        the log has no answer yet.
    """
    if not log.has_answer:
        return None

    config = config or SessionConfig()
    messages = [m for m in log.messages if m.type != "end"]

    return Chat(
        id=log.chat_id,
        created_at=created_at or datetime.now(timezone.utc),
        user_id=config.user_id,
        path=share_path(log.chat_id, config.share_path_prefix),
        title=derive_title(messages, config.title_max_length),
        messages=[*messages, end_marker()],
    )


async def persist_conversation(
    log: ConversationLog,
    store: ChatStore,
    config: SessionConfig | None = None,
) -> bool:
    """
    Hand a conversation to the chat store.

    Returns:
        True if a record was saved, False if there was nothing to save or
        the store failed (failure is logged, never raised).
    """
    chat = build_chat_record(log, config)
    if chat is None:
        logger.debug(f"Conversation {log.chat_id}: no answer yet, not saving")
        return False

    try:
        await store.save_chat(chat)
    except Exception as e:
        logger.error(f"Save chat error for {log.chat_id}: {e}")
        return False

    logger.info(
        f"Saved conversation {chat.id} ({len(chat.messages)} messages): {chat.title!r}"
    )
    return True
