"""Streaming response pipeline.

This layer handles:
- Framing raw transport bytes into event payloads
- Decoding payloads into typed results or errors
- Per-stream lifecycle and ordered callback delivery
- Bookkeeping of in-flight streams per client
"""

from .decoder import EventDecoder, decode_api_error
from .framing import FrameDecoder
from .iterators import AsyncResultStream, ResultStream
from .registry import SessionRegistry
from .session import SessionState, StreamingSession

__all__ = [
    "EventDecoder",
    "decode_api_error",
    "FrameDecoder",
    "AsyncResultStream",
    "ResultStream",
    "SessionRegistry",
    "SessionState",
    "StreamingSession",
]
