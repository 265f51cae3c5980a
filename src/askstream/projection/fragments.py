"""
Renderable payloads produced by the projection.

Components are plain data: the presentation layer decides how to draw them.
Streaming fields hold a StreamableValue so the same component type serves
both replayed (already done) and live (still generating) turns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from askstream.streaming import StreamableValue


@dataclass(frozen=True)
class UserMessage:
    kind: Literal["user_message"] = field(default="user_message", init=False)
    message: str
    chat_id: str
    show_share: bool = False


@dataclass(frozen=True)
class InquiryDisplay:
    """Clarifying question shown to the user (raw payload)."""

    kind: Literal["inquiry"] = field(default="inquiry", init=False)
    content: str


@dataclass(frozen=True)
class AnswerSection:
    kind: Literal["answer"] = field(default="answer", init=False)
    result: StreamableValue[str]


@dataclass(frozen=True)
class RelatedQueries:
    kind: Literal["related"] = field(default="related", init=False)
    related_queries: StreamableValue[Any]


@dataclass(frozen=True)
class FollowupPanel:
    kind: Literal["followup"] = field(default="followup", init=False)
    title: str = "Follow-up"


@dataclass(frozen=True)
class SearchSection:
    """Search results; result is the JSON-encoded tool output."""

    kind: Literal["search"] = field(default="search", init=False)
    result: StreamableValue[str]


@dataclass(frozen=True)
class RetrieveSection:
    kind: Literal["retrieve"] = field(default="retrieve", init=False)
    data: Any


@dataclass(frozen=True)
class VideoSearchSection:
    kind: Literal["video_search"] = field(default="video_search", init=False)
    result: StreamableValue[str]


# Union type for all projected components
Component = (
    UserMessage
    | InquiryDisplay
    | AnswerSection
    | RelatedQueries
    | FollowupPanel
    | SearchSection
    | RetrieveSection
    | VideoSearchSection
)


@dataclass(frozen=True)
class Fragment:
    """
    One UI state entry.

    Projected fragments keep the id of their source message. Live fragments
    returned by a submission carry an opaque streaming component and the
    is_generating flag.
    """

    id: str
    component: Any
    is_collapsed: StreamableValue[bool] | None = None
    is_generating: StreamableValue[bool] | None = None


@dataclass(frozen=True)
class RenderedTurn:
    """All fragments sharing one id, combined into a single visual block."""

    id: str
    components: tuple[Any, ...]
    is_collapsed: StreamableValue[bool] | None = None
    is_last: bool = False


# Ordered UI state: what the presentation layer holds between renders
UIState = list[Fragment]
