"""
Projection engine - maps a conversation log to UI state.

This is the single source of truth for:
- Which log entries are visible (end markers and untyped entries never are)
- Share-page redaction (no related/followup affordances on public links)
- Decoding entry payloads into renderable components

Projection is pure and reentrant: it reads one immutable snapshot and
builds new fragments (and new, already-done streaming values) every pass.
A malformed entry is logged and dropped without aborting the pass.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from askstream.conversation import (
    SHARE_REDACTED_TYPES,
    AssistantAnswer,
    AssistantFollowup,
    AssistantRelated,
    ClassifiedMessage,
    ConversationLog,
    EndMarker,
    Skip,
    ToolResult,
    UserInput,
    UserInquiry,
    UserRelatedInput,
    classify,
)
from askstream.streaming import StreamableValue

from .fragments import (
    AnswerSection,
    Fragment,
    FollowupPanel,
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

logger = logging.getLogger(__name__)


class MalformedFragmentError(ValueError):
    """Entry payload could not be decoded into a component."""

    pass


def project(log: ConversationLog) -> UIState:
    """
    Project a conversation log into ordered UI fragments.

    Args:
        log: Conversation snapshot (share mode is read from log.is_share_page)

    Returns:
        One fragment per visible entry, in log order, each keeping the id of
        its source entry.

    Example:
        >>> log = ConversationLog(chat_id="c1", messages=[
        ...     {"id": "1", "role": "user", "type": "input", "content": '{"input": "hi"}'},
        ...     {"id": "1", "role": "assistant", "type": "answer", "content": "hello"},
        ... ])
        >>> [f.component.kind for f in project(log)]
        ['user_message', 'answer']
    """
    fragments: UIState = []

    for index, message in enumerate(log.messages):
        classified = classify(message)
        try:
            fragment = _project_entry(classified, index, log)
        except MalformedFragmentError as e:
            logger.warning(
                f"Skipping malformed {classified.kind} entry {classified.id}: {e}"
            )
            continue
        if fragment is not None:
            fragments.append(fragment)

    return fragments


# Same projection, named after what the presentation layer asks for
get_ui_state = project


def render_turns(log: ConversationLog) -> list[RenderedTurn]:
    """Project the log and group fragments into one turn per id."""
    return group_turns(project(log))


def _project_entry(
    classified: ClassifiedMessage,
    index: int,
    log: ConversationLog,
) -> Fragment | None:
    if log.is_share_page and classified.kind in SHARE_REDACTED_TYPES:
        return None

    match classified:
        case UserInput(id=entry_id, content=content):
            text = _extract_text(content, "input")
            return _user_fragment(entry_id, text, index, log)
        case UserRelatedInput(id=entry_id, content=content):
            text = _extract_text(content, "related_query")
            return _user_fragment(entry_id, text, index, log)
        case UserInquiry(id=entry_id, content=content):
            return Fragment(id=entry_id, component=InquiryDisplay(content=content))
        case AssistantAnswer(id=entry_id, content=content):
            return Fragment(
                id=entry_id,
                component=AnswerSection(result=StreamableValue.resolved(content)),
            )
        case AssistantRelated(id=entry_id, content=content):
            queries = _parse_json(content)
            return Fragment(
                id=entry_id,
                component=RelatedQueries(
                    related_queries=StreamableValue.resolved(queries)
                ),
            )
        case AssistantFollowup(id=entry_id):
            return Fragment(id=entry_id, component=FollowupPanel())
        case ToolResult():
            return _tool_fragment(classified)
        case EndMarker() | Skip():
            return None


def _user_fragment(
    entry_id: str, text: str, index: int, log: ConversationLog
) -> Fragment:
    return Fragment(
        id=entry_id,
        component=UserMessage(
            message=text,
            chat_id=log.chat_id,
            show_share=index == 0 and not log.is_share_page,
        ),
    )


def _tool_fragment(result: ToolResult) -> Fragment:
    output = _parse_json(result.content)
    # Tool output starts collapsed on replay
    is_collapsed = StreamableValue.resolved(True)

    if result.name == "search":
        component: Any = SearchSection(
            result=StreamableValue.resolved(json.dumps(output))
        )
    elif result.name == "retrieve":
        component = RetrieveSection(data=output)
    else:
        component = VideoSearchSection(
            result=StreamableValue.resolved(json.dumps(output))
        )

    return Fragment(id=result.id, component=component, is_collapsed=is_collapsed)


def _parse_json(content: str) -> Any:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedFragmentError(f"invalid JSON ({e}): {content[:100]!r}") from e


def _extract_text(content: str, key: str) -> str:
    payload = _parse_json(content)
    if not isinstance(payload, dict):
        raise MalformedFragmentError(
            f"expected JSON object, got {type(payload).__name__}"
        )
    value = payload.get(key)
    if not isinstance(value, str):
        raise MalformedFragmentError(f"missing string field {key!r}")
    return value
