"""
Projection of conversation logs into renderable UI state.

    ConversationLog -> project() -> UIState (list[Fragment]) -> group_turns() -> list[RenderedTurn]

Example:
    from askstream.projection import render_turns

    for turn in render_turns(log):
        for component in turn.components:
            draw(component)
"""

from .engine import MalformedFragmentError, get_ui_state, project, render_turns
from .fragments import (
    AnswerSection,
    Component,
    FollowupPanel,
    Fragment,
    InquiryDisplay,
    RelatedQueries,
    RenderedTurn,
    RetrieveSection,
    SearchSection,
    UIState,
    UserMessage,
    VideoSearchSection,
)
from .grouping import group_turns

__all__ = [
    # Engine
    "project",
    "get_ui_state",
    "render_turns",
    "group_turns",
    "MalformedFragmentError",
    # UI state
    "Fragment",
    "RenderedTurn",
    "UIState",
    # Components
    "Component",
    "UserMessage",
    "InquiryDisplay",
    "AnswerSection",
    "RelatedQueries",
    "FollowupPanel",
    "SearchSection",
    "RetrieveSection",
    "VideoSearchSection",
]
