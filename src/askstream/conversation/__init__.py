"""
Conversation log, message taxonomy and context window.

The flow is:

    AIMessage (wire) -> ConversationLog (snapshot) -> classify() -> projection

Example:
    from askstream.conversation import ConversationLog, AIMessage

    log = ConversationLog.new().append(
        AIMessage(id="1", role="user", type="input", content='{"input": "hi"}')
    )
"""

from .context import MAX_CONTEXT_MESSAGES, build_context_window
from .log import ConversationLog, ConversationState
from .messages import AIMessage, Chat, CoreMessage, generate_id
from .taxonomy import (
    AUXILIARY_TYPES,
    SHARE_REDACTED_TYPES,
    TOOL_NAMES,
    AssistantAnswer,
    AssistantFollowup,
    AssistantRelated,
    ClassifiedMessage,
    EndMarker,
    Skip,
    ToolResult,
    UserInput,
    UserInquiry,
    UserRelatedInput,
    classify,
    is_auxiliary,
    is_end_marker,
)

__all__ = [
    # Wire models
    "AIMessage",
    "Chat",
    "CoreMessage",
    "generate_id",
    # Log
    "ConversationLog",
    "ConversationState",
    # Taxonomy
    "classify",
    "is_auxiliary",
    "is_end_marker",
    "ClassifiedMessage",
    "UserInput",
    "UserRelatedInput",
    "UserInquiry",
    "AssistantAnswer",
    "AssistantRelated",
    "AssistantFollowup",
    "EndMarker",
    "ToolResult",
    "Skip",
    "TOOL_NAMES",
    "AUXILIARY_TYPES",
    "SHARE_REDACTED_TYPES",
    # Context window
    "build_context_window",
    "MAX_CONTEXT_MESSAGES",
]
