"""
Session types for askstream.

Data structures shared by the submission path, persistence and config.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from askstream.streaming import StreamableValue

# Submitted form fields, e.g. {"input": "...", "model": "openai:gpt-4o-mini"}
SubmitForm = Mapping[str, str]


@dataclass
class SessionConfig:
    """Configuration for a ConversationSession."""

    max_context_messages: int = 6
    default_model: str = "openai:gpt-4o-mini"
    user_id: str = "anonymous"
    title_max_length: int = 100
    share_path_prefix: str = "/search"

    def __post_init__(self) -> None:
        if self.max_context_messages < 0:
            raise ValueError("max_context_messages must be >= 0")
        if self.title_max_length <= 0:
            raise ValueError("title_max_length must be > 0")
        if ":" not in self.default_model:
            raise ValueError(
                f"default_model must look like 'provider:model', got {self.default_model!r}"
            )


@dataclass
class GenerationSinks:
    """
    Streaming values a generation controller drives for one submission.

    ui_stream carries the live components of the turn; is_collapsed and
    is_generating are UI flags. All three are created pending/open and must
    reach done by the end of the generation.
    """

    ui_stream: StreamableValue[Any] = field(default_factory=StreamableValue)
    is_collapsed: StreamableValue[bool] = field(
        default_factory=lambda: StreamableValue(False)
    )
    is_generating: StreamableValue[bool] = field(
        default_factory=lambda: StreamableValue(True)
    )

    def close_open(self) -> None:
        """Finish any sink the controller left open."""
        if not self.ui_stream.is_done:
            self.ui_stream.done()
        if not self.is_collapsed.is_done:
            self.is_collapsed.done()
        if not self.is_generating.is_done:
            self.is_generating.done(False)
