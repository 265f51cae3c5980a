"""
Streaming values shared between generation and rendering.

Usage:
    from askstream.streaming import StreamableValue, InvalidStateError

    is_generating = StreamableValue(True)
    is_generating.done(False)
"""

from .value import InvalidStateError, StreamableValue, StreamStatus

__all__ = ["StreamableValue", "InvalidStateError", "StreamStatus"]
