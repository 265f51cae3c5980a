"""
Turn grouping - folds UI fragments into one rendered turn per id.

A single logical turn (e.g. a tool call followed by its answer) is stored as
several log entries sharing one id. Grouping lets the renderer draw them as
one block while each component keeps streaming independently.
"""

from __future__ import annotations

from typing import Any, Iterable

from askstream.streaming import StreamableValue

from .fragments import Fragment, RenderedTurn


def group_turns(fragments: Iterable[Fragment]) -> list[RenderedTurn]:
    """
    Group fragments by id, preserving first-seen order.

    Components of fragments sharing an id are concatenated in input order.
    is_collapsed is fixed by the first fragment of each id. Fragments with an
    empty id are dropped; fragments without a component still open a turn.

    Args:
        fragments: Ordered UI state

    Returns:
        One RenderedTurn per distinct id. is_last marks the turn whose id
        matches the final fragment.
    """
    fragments = list(fragments)
    if not fragments:
        return []

    last_id = fragments[-1].id
    # dict keeps insertion order: the first occurrence of an id fixes its position
    turns: dict[str, _TurnAccumulator] = {}

    for fragment in fragments:
        if not fragment.id:
            continue

        turn = turns.get(fragment.id)
        if turn is None:
            turn = _TurnAccumulator(fragment.id, fragment.is_collapsed)
            turns[fragment.id] = turn

        if fragment.component is not None:
            turn.components.append(fragment.component)

    return [turn.build(is_last=turn.id == last_id) for turn in turns.values()]


class _TurnAccumulator:
    """Internal: components collected for one id."""

    __slots__ = ("id", "components", "is_collapsed")

    def __init__(self, turn_id: str, is_collapsed: StreamableValue[bool] | None):
        self.id = turn_id
        self.components: list[Any] = []
        self.is_collapsed = is_collapsed

    def build(self, is_last: bool) -> RenderedTurn:
        return RenderedTurn(
            id=self.id,
            components=tuple(self.components),
            is_collapsed=self.is_collapsed,
            is_last=is_last,
        )
