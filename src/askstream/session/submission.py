"""
Conversation session - the submission path.

A submission turns form fields into a user entry, checks that the model
provider is configured, builds the bounded context window and hands
everything to the generation controller (Workflow). The controller runs in
a background task; the caller gets the live fragment back immediately and
renders it while generation streams into it.

KEY DESIGN:
    - One ConversationSession per conversation, one active generation at a time
    - A new submission waits for the previous generation to finish
    - Provider errors are raised before the log is touched
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Sequence

from askstream.conversation import (
    AIMessage,
    ConversationLog,
    ConversationState,
    build_context_window,
    generate_id,
)
from askstream.conversation.messages import USER
from askstream.projection import Fragment, RenderedTurn, UIState, get_ui_state, group_turns

from .persistence import persist_conversation, share_path
from .protocols import ChatStore, ProviderAvailability, Workflow
from .types import GenerationSinks, SessionConfig, SubmitForm

logger = logging.getLogger(__name__)

SKIP_CONTENT = '{"action": "skip"}'


class ProviderNotEnabledError(Exception):
    """Raised when the selected model provider is not configured."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(
            f"Provider {provider_id} is not available "
            "(API key not configured or base URL not set)"
        )


def user_message_type(form: SubmitForm) -> str:
    """input / input_related / inquiry, decided by which fields were submitted."""
    if "input" in form:
        return "input"
    if "related_query" in form:
        return "input_related"
    return "inquiry"


def build_user_message(form: SubmitForm | None, skip: bool = False) -> AIMessage | None:
    """
    Build the user entry for a submission.

    Returns:
        The new entry, or None when there is nothing to record (no form and
        not a skip). A skip is recorded without a type so it reaches the
        model context but is never rendered.
    """
    if skip:
        return AIMessage(id=generate_id(), role=USER, content=SKIP_CONTENT)
    if not form:
        return None
    return AIMessage(
        id=generate_id(),
        role=USER,
        content=json.dumps(dict(form)),
        type=user_message_type(form),
    )


class ConversationSession:
    """
    Submission entry point and UI state holder for one conversation.

    Example:
        session = ConversationSession(
            workflow=my_workflow,
            providers=ProviderRegistry.from_env(),
            store=my_store,
        )
        fragment = await session.submit({"input": "What is RAG?"})
        async for components in fragment.component.subscribe():
            draw(components)
        await session.wait()
    """

    def __init__(
        self,
        workflow: Workflow,
        providers: ProviderAvailability,
        store: ChatStore | None = None,
        config: SessionConfig | None = None,
        log: ConversationLog | None = None,
    ):
        """
        Initialize a session.

        Args:
            workflow: Generation controller
            providers: Provider availability check
            store: Chat store for finished conversations (None disables saving)
            config: Optional session configuration
            log: Existing conversation to continue (e.g. loaded from a chat)
        """
        self._workflow = workflow
        self._providers = providers
        self._store = store
        self.config = config or SessionConfig()
        self.state = ConversationState(log, on_done=self._on_state_done)
        self.ui_state: UIState = get_ui_state(self.state.get())
        self._generation: asyncio.Task[None] | None = None

    @property
    def chat_id(self) -> str:
        return self.state.chat_id

    @property
    def share_path(self) -> str:
        return share_path(self.chat_id, self.config.share_path_prefix)

    @property
    def is_generating(self) -> bool:
        return self._generation is not None and not self._generation.done()

    def turns(self) -> list[RenderedTurn]:
        """Current UI state grouped into rendered turns."""
        return group_turns(self.ui_state)

    def refresh(self) -> UIState:
        """Rebuild UI state from the log (replay, no live values)."""
        self.ui_state = get_ui_state(self.state.get())
        return self.ui_state

    def new_conversation(self) -> str:
        """Drop the current conversation and start a fresh one."""
        if self.is_generating:
            raise RuntimeError(
                f"Conversation {self.chat_id} is still generating; wait() first"
            )
        self.state.reset()
        self.ui_state = []
        return self.chat_id

    async def submit(
        self,
        form: SubmitForm | None = None,
        skip: bool = False,
        retry_messages: Sequence[AIMessage] | None = None,
    ) -> Fragment:
        """
        Submit a user turn and start generation.

        Args:
            form: Submitted fields ("input", "related_query" or inquiry answers,
                optional "model")
            skip: Skip the pending clarifying question
            retry_messages: Use these entries instead of the log as context

        Returns:
            Live fragment: component is the turn's ui stream, plus the
            is_collapsed and is_generating flags.

        Raises:
            ProviderNotEnabledError: If the model's provider is not configured
        """
        await self._wait_previous()

        sinks = GenerationSinks()
        try:
            model = (form or {}).get("model") or self.config.default_model
            provider_id = model.split(":")[0]
            if not self._providers.is_provider_enabled(provider_id):
                raise ProviderNotEnabledError(provider_id)

            history = list(
                retry_messages
                if retry_messages is not None
                else self.state.get().messages
            )
            message = build_user_message(form, skip)
            if message is not None:
                self.state.append(message)
                history.append(message)

            context = build_context_window(history, self.config.max_context_messages)
        except Exception as e:
            logger.error(f"Submit error: {e}")
            sinks.is_generating.done(False)
            raise

        logger.debug(
            f"Conversation {self.chat_id}: submitting to {model} "
            f"with {len(context)} context messages (skip={skip})"
        )
        self._generation = asyncio.create_task(
            self._run_workflow(sinks, context, skip, model)
        )

        fragment = Fragment(
            id=generate_id(),
            component=sinks.ui_stream,
            is_collapsed=sinks.is_collapsed,
            is_generating=sinks.is_generating,
        )
        self.ui_state.append(fragment)
        return fragment

    async def wait(self) -> None:
        """
        Wait for the current generation to finish.

        Raises:
            Exception: Whatever the workflow raised
        """
        if self._generation is not None:
            await self._generation

    async def _wait_previous(self) -> None:
        # Queued submissions wake together; loop until no generation is running
        while (task := self._generation) is not None and not task.done():
            logger.debug(f"Conversation {self.chat_id}: waiting for previous generation")
            await asyncio.wait({task})
        if (task := self._generation) is not None and not task.cancelled():
            # Done here; errors were already reported by _run_workflow, mark them retrieved
            task.exception()

    async def _run_workflow(
        self,
        sinks: GenerationSinks,
        context: list[dict[str, str]],
        skip: bool,
        model: str,
    ) -> None:
        try:
            await self._workflow(sinks, self.state, context, skip, model)
        except Exception as e:
            logger.error(f"Generation error in conversation {self.chat_id}: {e}")
            if not sinks.ui_stream.is_done:
                sinks.ui_stream.error(e)
            sinks.close_open()
            raise
        sinks.close_open()

    async def _on_state_done(self, log: ConversationLog) -> None:
        if self._store is None:
            return
        await persist_conversation(log, self._store, self.config)
