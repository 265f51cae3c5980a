"""
Wire models for conversation messages and persisted chats.

Using Pydantic for validation at the boundary where logs are loaded from
storage or handed in by the generation controller. Unknown roles and types
are accepted here and skipped later by the taxonomy, so a newer producer
never breaks an older renderer.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

USER = "user"
ASSISTANT = "assistant"
TOOL = "tool"

# Context window entry handed to the generation controller: {"role", "content"}
CoreMessage = dict[str, str]


def generate_id() -> str:
    """Generate a short random identifier for messages and chats."""
    return uuid.uuid4().hex[:16]


class AIMessage(BaseModel):
    """One entry of the conversation log. Immutable once created."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    role: str
    content: str = ""
    type: str | None = None
    name: str | None = None  # tool name, only set when role == "tool"


class Chat(BaseModel):
    """Finished conversation record handed to the chat store."""

    model_config = ConfigDict(extra="allow")

    id: str
    created_at: datetime
    user_id: str
    path: str
    title: str
    messages: list[AIMessage]
