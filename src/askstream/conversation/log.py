"""
Conversation log and its mutable state handle.

ConversationLog is an immutable snapshot: appending returns a new log, so
the projection can read it without locks. ConversationState is the single
write path owned by the generation controller (one active controller per
conversation).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping

from askstream.streaming import InvalidStateError

from .messages import ASSISTANT, AIMessage, Chat, generate_id
from .taxonomy import is_end_marker

logger = logging.getLogger(__name__)

MessageLike = AIMessage | Mapping[str, Any]


def _coerce(message: MessageLike) -> AIMessage:
    if isinstance(message, AIMessage):
        return message
    return AIMessage.model_validate(dict(message))


@dataclass(frozen=True)
class ConversationLog:
    """
    Authoritative, append-only record of one conversation.

    Insertion order is authoritative and never changes. A terminal `end`
    entry, if present, is always the last one.
    """

    chat_id: str
    messages: tuple[AIMessage, ...] = field(default_factory=tuple)
    is_share_page: bool = False

    def __post_init__(self) -> None:
        messages = tuple(_coerce(m) for m in self.messages)
        for message in messages[:-1]:
            if is_end_marker(message):
                raise ValueError(
                    f"Conversation {self.chat_id}: end marker {message.id} "
                    "must be the last entry"
                )
        object.__setattr__(self, "messages", messages)

    @classmethod
    def new(cls) -> "ConversationLog":
        """Start an empty conversation with a fresh chat id."""
        return cls(chat_id=generate_id())

    @classmethod
    def from_chat(cls, chat: Chat, *, share: bool = False) -> "ConversationLog":
        """
        Rebuild a live log from a persisted chat.

        End markers added at save time are dropped so the conversation can
        continue.
        """
        messages = tuple(m for m in chat.messages if not is_end_marker(m))
        return cls(chat_id=chat.id, messages=messages, is_share_page=share)

    @property
    def is_ended(self) -> bool:
        return bool(self.messages) and is_end_marker(self.messages[-1])

    @property
    def has_answer(self) -> bool:
        return any(
            m.role == ASSISTANT and m.type == "answer" for m in self.messages
        )

    def append(self, *messages: MessageLike) -> "ConversationLog":
        """Return a new log with messages appended."""
        if self.is_ended:
            raise InvalidStateError(
                f"Conversation {self.chat_id} is ended; cannot append messages"
            )
        return replace(self, messages=self.messages + tuple(_coerce(m) for m in messages))

    def with_share_mode(self, is_share_page: bool) -> "ConversationLog":
        return replace(self, is_share_page=is_share_page)


class ConversationState:
    """
    Mutable handle over the current ConversationLog snapshot.

    The generation controller appends entries while it streams, then calls
    done() once the turn is complete. done() hands the final snapshot to the
    on_done hook (persistence).

    Example:
        state = ConversationState(on_done=save_hook)
        state.append(AIMessage(id="1", role="user", type="input", content=...))
        await state.done()
    """

    def __init__(
        self,
        log: ConversationLog | None = None,
        on_done: Callable[[ConversationLog], Awaitable[None]] | None = None,
    ):
        self._log = log or ConversationLog.new()
        self._on_done = on_done

    @property
    def chat_id(self) -> str:
        return self._log.chat_id

    def get(self) -> ConversationLog:
        """Current snapshot."""
        return self._log

    def update(self, log: ConversationLog) -> None:
        """Replace the whole log atomically."""
        self._log = log

    def append(self, *messages: MessageLike) -> ConversationLog:
        self._log = self._log.append(*messages)
        return self._log

    async def done(self, log: ConversationLog | None = None) -> None:
        """Final update for the current generation session."""
        if log is not None:
            self._log = log
        logger.debug(
            f"Conversation {self._log.chat_id}: state done "
            f"({len(self._log.messages)} messages)"
        )
        if self._on_done:
            await self._on_done(self._log)

    def reset(self) -> ConversationLog:
        """Start a new conversation: empty log with a fresh chat id."""
        self._log = ConversationLog.new()
        logger.info(f"Started new conversation {self._log.chat_id}")
        return self._log
