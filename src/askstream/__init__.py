"""
askstream - Conversation state and streaming projection for search assistants.

Streaming Layer:
    StreamableValue: Single-writer, multi-reader incremental value
    InvalidStateError: Write after a value is closed

Conversation Layer:
    AIMessage: Log entry (wire model)
    ConversationLog: Immutable, append-only conversation snapshot
    ConversationState: Mutable handle used by the generation controller
    classify: Message taxonomy

Projection Layer:
    project / get_ui_state: Log -> ordered UI fragments
    group_turns: Fragments -> one RenderedTurn per id
    render_turns: Both steps at once

Session Layer:
    ConversationSession: Submission path + generation hand-off
    ProviderRegistry: Environment-backed provider check
    SessionConfig: Session configuration

Example:
    from askstream import ConversationSession, ProviderRegistry

    session = ConversationSession(
        workflow=my_workflow,
        providers=ProviderRegistry.from_env(),
        store=my_chat_store,
    )
    live = await session.submit({"input": "Who maintains CPython?"})
    for turn in session.turns():
        render(turn)
"""

# Streaming layer
from .streaming import InvalidStateError, StreamableValue

# Conversation layer
from .conversation import (
    AIMessage,
    Chat,
    ConversationLog,
    ConversationState,
    build_context_window,
    classify,
)

# Projection layer
from .projection import (
    Fragment,
    RenderedTurn,
    UIState,
    get_ui_state,
    group_turns,
    project,
    render_turns,
)

# Session layer
from .session import (
    ChatStore,
    ConversationSession,
    GenerationSinks,
    ProviderNotEnabledError,
    SessionConfig,
    Workflow,
)
from .providers import ProviderRegistry

__all__ = [
    # Streaming
    "StreamableValue",
    "InvalidStateError",
    # Conversation
    "AIMessage",
    "Chat",
    "ConversationLog",
    "ConversationState",
    "classify",
    "build_context_window",
    # Projection
    "project",
    "get_ui_state",
    "group_turns",
    "render_turns",
    "Fragment",
    "RenderedTurn",
    "UIState",
    # Session
    "ConversationSession",
    "ProviderNotEnabledError",
    "SessionConfig",
    "GenerationSinks",
    "Workflow",
    "ChatStore",
    "ProviderRegistry",
]

__version__ = "0.0.1"
