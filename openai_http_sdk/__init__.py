"""
OpenAI HTTP SDK - typed client for the OpenAI HTTP API.

This package provides:
- Callback-based operations for completions, chat, edits, embeddings,
  images, audio, moderations and models
- A streaming pipeline that decodes server-sent events into typed results
  as they arrive
- Blocking and async iterator facades over streaming calls
- Pluggable transport (httpx by default)
"""

__version__ = "0.1.0"

from .client import OpenAI
from .config import APIPaths, Configuration
from .errors import (
    APIError,
    ClientError,
    EmptyDataError,
    PayloadDecodeError,
    StreamCancelledError,
    TransportError,
)
from .http import HTTPXTransport, JSONRequest, MultipartFormDataRequest, Transport
from .models import (
    ChatMessage,
    ChatQuery,
    ChatRole,
    ChatStreamResult,
    CompletionsQuery,
    CompletionsResult,
    Result,
    StreamRequest,
)
from .streaming import ResultStream, AsyncResultStream, SessionState, StreamingSession

__all__ = [
    # Main client
    "OpenAI",

    # Configuration
    "Configuration",
    "APIPaths",

    # Errors
    "ClientError",
    "TransportError",
    "EmptyDataError",
    "PayloadDecodeError",
    "APIError",
    "StreamCancelledError",

    # Transport and requests
    "Transport",
    "HTTPXTransport",
    "JSONRequest",
    "MultipartFormDataRequest",
    "StreamRequest",

    # Streaming
    "StreamingSession",
    "SessionState",
    "ResultStream",
    "AsyncResultStream",

    # Models
    "Result",
    "ChatMessage",
    "ChatRole",
    "ChatQuery",
    "ChatStreamResult",
    "CompletionsQuery",
    "CompletionsResult",
]
