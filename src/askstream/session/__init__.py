"""
Conversation sessions - submission, generation hand-off and persistence.

Components:
    ConversationSession: Submission entry point and UI state holder
    Workflow: Generation controller protocol (implemented outside askstream)
    ChatStore: Durable storage protocol
    ProviderAvailability: Provider check protocol

Utilities:
    persistence: Chat record building and save hand-off
"""

from .persistence import (
    build_chat_record,
    derive_title,
    end_marker,
    persist_conversation,
    share_path,
)
from .protocols import ChatStore, ProviderAvailability, Workflow
from .submission import (
    SKIP_CONTENT,
    ConversationSession,
    ProviderNotEnabledError,
    build_user_message,
    user_message_type,
)
from .types import GenerationSinks, SessionConfig, SubmitForm

__all__ = [
    # Session
    "ConversationSession",
    "ProviderNotEnabledError",
    "build_user_message",
    "user_message_type",
    "SKIP_CONTENT",
    # Types
    "SessionConfig",
    "GenerationSinks",
    "SubmitForm",
    # Protocols
    "Workflow",
    "ChatStore",
    "ProviderAvailability",
    # Persistence
    "build_chat_record",
    "derive_title",
    "end_marker",
    "persist_conversation",
    "share_path",
]
