"""
Streaming session: the lifecycle of one in-flight event stream.

States::

    IDLE --perform()--> ACTIVE --terminator / end-of-data--> COMPLETING
      ACTIVE | COMPLETING --transport done / failure / cancel--> DONE

Every chunk is processed under the session lock, so ``on_result`` and
``on_complete`` calls for one session are strictly ordered and never overlap,
whatever thread the transport delivers on. ``on_complete`` fires exactly once.
"""

from __future__ import annotations

import itertools
import threading
import time
from enum import Enum
from typing import Callable, Generic, Optional, Type, TypeVar

from pydantic import BaseModel

from ..errors import ClientError, StreamCancelledError, TransportError
from ..http.transport import Transport
from ..models.result import Result
from ..models.streaming import StreamRequest
from ..observability.logging import ClientLogger
from .decoder import EventDecoder, decode_api_error
from .framing import FrameDecoder
from .helpers import safe_invoke

T = TypeVar("T", bound=BaseModel)

_session_ids = itertools.count(1)
_session_ids_lock = threading.Lock()


def _next_session_id() -> int:
    with _session_ids_lock:
        return next(_session_ids)


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETING = "completing"
    DONE = "done"


class StreamingSession(Generic[T]):
    """
    Decodes one streamed response and delivers it through callbacks.

    Args:
        request: Fully built request descriptor
        transport: Transport used to open the connection
        result_type: Model each event payload decodes into
        on_result: Called with a Result for every payload, success or failure
        on_error: Optional mirror of failure results (the error only)
        on_complete: Called once with the terminal error, or None
    """

    def __init__(
        self,
        request: StreamRequest,
        transport: Transport,
        result_type: Type[T],
        on_result: Optional[Callable[[Result[T]], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_complete: Optional[Callable[[Optional[BaseException]], None]] = None,
    ):
        self.session_id = _next_session_id()
        self.request = request
        self.on_result = on_result
        self.on_error = on_error
        self.on_complete = on_complete

        self._transport = transport
        self._frames = FrameDecoder()
        self._decoder: EventDecoder[T] = EventDecoder(result_type)
        self._state = SessionState.IDLE
        self._completed = False
        self._lock = threading.RLock()
        self._cancel_event = threading.Event()
        self._log = ClientLogger("session")

        self._results = 0
        self._failures = 0
        self._started_at: Optional[float] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def perform(self) -> None:
        """Open the stream. Returns once the transport call is started."""
        with self._lock:
            if self._state is not SessionState.IDLE:
                raise RuntimeError(f"Session {self.session_id} already performed")
            self._state = SessionState.ACTIVE
            self._started_at = time.time()

        self._log.debug("Opening stream", session_id=self.session_id,
                        method=self.request.method, url=self.request.url)
        try:
            self._transport.open(self.request, self._receive, self._finish, cancel_event=self._cancel_event)
        except Exception as e:
            self._finish(e)

    def cancel(self) -> None:
        """Stop delivering results and complete with StreamCancelledError."""
        if self._completed:
            return
        self._cancel_event.set()
        self._finish(StreamCancelledError())
        try:
            self._transport.cancel(self._cancel_event)
        except Exception as e:
            self._log.warning("Transport failed to abort cancelled stream", session_id=self.session_id,
                              error_type=type(e).__name__, error_msg=str(e))

    def _receive(self, chunk: bytes) -> None:
        with self._lock:
            if self._state is not SessionState.ACTIVE or self._cancel_event.is_set():
                return

            for payload in self._frames.feed(chunk):
                if self._cancel_event.is_set():
                    break
                self._deliver(self._decoder.decode(payload))

            if self._frames.terminated and self._state is SessionState.ACTIVE:
                self._state = SessionState.COMPLETING
                self._log.debug("Terminator received", session_id=self.session_id)

    def _finish(self, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if self._completed:
                return
            self._completed = True

            if error is None:
                self._state = SessionState.COMPLETING
                self._flush_trailing()
            else:
                error = self._resolve_error(error)

            self._state = SessionState.DONE
            duration = time.time() - self._started_at if self._started_at else 0.0
            self._log.log_stream_summary(self.session_id, self._results, self._failures, duration, error)
            safe_invoke(self.on_complete, error, self._log, session_id=self.session_id)

    def _flush_trailing(self) -> None:
        # Trailing bytes that do not decode are dropped, not reported
        for payload in self._frames.finish():
            result = self._decoder.decode(payload)
            if result.is_success:
                self._deliver(result)
            else:
                self._log.debug("Dropping undecodable trailing payload", session_id=self.session_id)

    def _deliver(self, result: Result[T]) -> None:
        if result.is_success:
            self._results += 1
        else:
            self._failures += 1
            self._log.debug("Payload failed to decode", session_id=self.session_id,
                            error_type=type(result.error).__name__)

        safe_invoke(self.on_result, result, self._log, session_id=self.session_id)
        if not result.is_success:
            safe_invoke(self.on_error, result.error, self._log, session_id=self.session_id)

    def _resolve_error(self, error: BaseException) -> BaseException:
        if isinstance(error, TransportError) and error.body:
            api_error = decode_api_error(error.body, error.status_code)
            if api_error is not None:
                return api_error
        if not isinstance(error, ClientError):
            return TransportError(f"Stream failed: {error}", original_error=error)
        return error

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"session_id={self.session_id}, "
            f"state={self._state.value}, "
            f"url={self.request.url!r})"
        )
