"""Fake transports and wire-format helpers for tests."""

import json
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from openai_http_sdk.http.transport import HTTPResponse, Transport


def chat_chunk(chunk_id: str, content: Optional[str] = None, finish_reason: Optional[str] = None) -> Dict[str, Any]:
    """A chat.completion.chunk event body."""
    return {
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [
            {"index": 0, "delta": {"content": content}, "finish_reason": finish_reason}
        ],
    }


def sse(*events: Any, done: bool = True) -> bytes:
    """Encode events as the wire format; dicts are JSON-encoded, bytes/str sent raw."""
    lines = []
    for event in events:
        if isinstance(event, dict):
            event = json.dumps(event, ensure_ascii=False)
        if isinstance(event, bytes):
            event = event.decode("utf-8")
        lines.append(f"data: {event}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def split_randomly(data: bytes, rng: random.Random, max_size: int = 7) -> List[bytes]:
    """Split bytes into random-sized pieces (1..max_size)."""
    pieces = []
    i = 0
    while i < len(data):
        size = rng.randint(1, max_size)
        pieces.append(data[i:i + size])
        i += size
    return pieces


class ScriptedTransport(Transport):
    """Delivers a fixed script synchronously inside ``open``/``send``."""

    def __init__(self, chunks: Optional[List[bytes]] = None, error: Optional[BaseException] = None,
                 responses: Optional[List[Tuple[Optional[HTTPResponse], Optional[BaseException]]]] = None):
        self.chunks = list(chunks or [])
        self.error = error
        self.responses = list(responses or [])
        self.opened = []
        self.sent = []
        self.closed = False

    def open(self, request, on_bytes, on_done, cancel_event=None):
        self.opened.append(request)
        for chunk in self.chunks:
            if cancel_event is not None and cancel_event.is_set():
                break
            on_bytes(chunk)
        on_done(self.error)

    def send(self, request, on_response):
        self.sent.append(request)
        response, error = self.responses.pop(0)
        on_response(response, error)

    def close(self):
        self.closed = True


@dataclass
class ManualStream:
    """Callbacks captured by ManualTransport for one opened stream."""
    request: Any
    on_bytes: Callable[[bytes], None]
    on_done: Callable[[Optional[BaseException]], None]
    cancel_event: Any = None

    def push(self, *chunks: bytes) -> None:
        for chunk in chunks:
            self.on_bytes(chunk)

    def done(self, error: Optional[BaseException] = None) -> None:
        self.on_done(error)


@dataclass
class ManualTransport(Transport):
    """Records calls so a test can drive delivery step by step."""
    streams: List[ManualStream] = field(default_factory=list)
    sends: List[Tuple[Any, Callable]] = field(default_factory=list)
    closed: bool = False

    def open(self, request, on_bytes, on_done, cancel_event=None):
        self.streams.append(ManualStream(request, on_bytes, on_done, cancel_event))

    def send(self, request, on_response):
        self.sends.append((request, on_response))

    def close(self):
        self.closed = True


class FailingTransport(Transport):
    """Raises when asked to open or send."""

    def __init__(self, error: BaseException):
        self.error = error

    def open(self, request, on_bytes, on_done, cancel_event=None):
        raise self.error

    def send(self, request, on_response):
        raise self.error


class Recorder:
    """Collects on_result / on_complete calls."""

    def __init__(self):
        self.results = []
        self.completions = []

    def on_result(self, result):
        self.results.append(result)

    def on_complete(self, error):
        self.completions.append(error)

    @property
    def values(self):
        return [r.value for r in self.results if r.is_success]

    @property
    def ids(self):
        return [r.value.id for r in self.results if r.is_success]
