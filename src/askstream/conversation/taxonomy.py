"""
Message taxonomy using tagged union pattern.

classify() maps every log entry to exactly one variant. Each variant carries
only the fields valid for its (role, type) pair, which lets the projection
dispatch with a single match statement:

    role       type            variant
    user       input           UserInput
    user       input_related   UserRelatedInput
    user       inquiry         UserInquiry
    assistant  answer          AssistantAnswer
    assistant  related         AssistantRelated
    assistant  followup        AssistantFollowup
    assistant  end             EndMarker
    tool       (by name)       ToolResult (search / retrieve / videoSearch)

Anything else, including entries with an empty type, becomes Skip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, get_args

from .messages import ASSISTANT, TOOL, USER, AIMessage

ToolName = Literal["search", "retrieve", "videoSearch"]
TOOL_NAMES: tuple[str, ...] = get_args(ToolName)

END_TYPE = "end"

# Continuation affordances hidden on public share pages
SHARE_REDACTED_TYPES = frozenset({"related", "followup"})

# Entries never sent back to the model as conversational context
AUXILIARY_TYPES = frozenset({"followup", "related", END_TYPE})


@dataclass(frozen=True)
class UserInput:
    """Free-text query typed by the user."""

    kind: Literal["input"] = field(default="input", init=False)
    id: str
    content: str


@dataclass(frozen=True)
class UserRelatedInput:
    """Query picked from a suggested related-query list."""

    kind: Literal["input_related"] = field(default="input_related", init=False)
    id: str
    content: str


@dataclass(frozen=True)
class UserInquiry:
    """Clarifying sub-question payload."""

    kind: Literal["inquiry"] = field(default="inquiry", init=False)
    id: str
    content: str


@dataclass(frozen=True)
class AssistantAnswer:
    kind: Literal["answer"] = field(default="answer", init=False)
    id: str
    content: str


@dataclass(frozen=True)
class AssistantRelated:
    """JSON-encoded list of suggested follow-up queries."""

    kind: Literal["related"] = field(default="related", init=False)
    id: str
    content: str


@dataclass(frozen=True)
class AssistantFollowup:
    kind: Literal["followup"] = field(default="followup", init=False)
    id: str


@dataclass(frozen=True)
class EndMarker:
    """Terminal marker appended when a conversation is persisted."""

    kind: Literal["end"] = field(default="end", init=False)
    id: str


@dataclass(frozen=True)
class ToolResult:
    """Structured JSON result of one tool invocation."""

    kind: Literal["tool"] = field(default="tool", init=False)
    id: str
    name: ToolName
    content: str


@dataclass(frozen=True)
class Skip:
    """Entry this renderer does not know about."""

    kind: Literal["skip"] = field(default="skip", init=False)
    id: str
    reason: str


ClassifiedMessage = (
    UserInput
    | UserRelatedInput
    | UserInquiry
    | AssistantAnswer
    | AssistantRelated
    | AssistantFollowup
    | EndMarker
    | ToolResult
    | Skip
)

_USER_VARIANTS: dict[str, type[UserInput | UserRelatedInput | UserInquiry]] = {
    "input": UserInput,
    "input_related": UserRelatedInput,
    "inquiry": UserInquiry,
}

_ASSISTANT_VARIANTS: dict[str, type[AssistantAnswer | AssistantRelated]] = {
    "answer": AssistantAnswer,
    "related": AssistantRelated,
}


def classify(message: AIMessage) -> ClassifiedMessage:
    """
    Classify a log entry. Pure and total: never raises.

    Args:
        message: Log entry to classify

    Returns:
        The matching variant, or Skip for unknown/untyped entries.
    """
    role, type_ = message.role, message.type

    if not type_:
        return Skip(id=message.id, reason="missing type")

    if role == USER and type_ in _USER_VARIANTS:
        return _USER_VARIANTS[type_](id=message.id, content=message.content)

    if role == ASSISTANT:
        if type_ in _ASSISTANT_VARIANTS:
            return _ASSISTANT_VARIANTS[type_](id=message.id, content=message.content)
        if type_ == "followup":
            return AssistantFollowup(id=message.id)
        if type_ == END_TYPE:
            return EndMarker(id=message.id)

    if role == TOOL and message.name in TOOL_NAMES:
        return ToolResult(id=message.id, name=message.name, content=message.content)

    return Skip(
        id=message.id,
        reason=f"unknown entry role={role} type={type_} name={message.name}",
    )


def is_end_marker(message: AIMessage) -> bool:
    return message.type == END_TYPE


def is_auxiliary(message: AIMessage) -> bool:
    """Tool output, follow-up/related suggestions and end markers are not context."""
    return message.role == TOOL or message.type in AUXILIARY_TYPES
