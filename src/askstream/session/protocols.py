"""Boundary protocols for the collaborators a ConversationSession talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from askstream.conversation import Chat, ConversationState, CoreMessage

    from .types import GenerationSinks


@runtime_checkable
class Workflow(Protocol):
    """
    Generation session controller. Implemented outside askstream.

    Contract:
    - Append new entries through `state` (never edit existing ones)
    - Drive every sink in `sinks` to done
    - Call `await state.done()` once the turn is complete
    """

    async def __call__(
        self,
        sinks: "GenerationSinks",
        state: "ConversationState",
        messages: "list[CoreMessage]",
        skip: bool,
        model: str,
    ) -> None:
        """
        Run one generation.

        Args:
            sinks: Streaming values for the live turn
            state: Mutable conversation state
            messages: Recent conversational context (bounded window)
            skip: True when the user skipped a clarifying question
            model: Model id, "provider:model"
        """
        ...


@runtime_checkable
class ProviderAvailability(Protocol):
    """Answers whether a model provider is configured."""

    def is_provider_enabled(self, provider_id: str) -> bool: ...


@runtime_checkable
class ChatStore(Protocol):
    """Durable storage for finished conversations."""

    async def save_chat(self, chat: "Chat") -> None:
        """Save (or overwrite) a chat record keyed by chat.id."""
        ...
