"""
HTTP transport.

The transport is the only component that touches the network. Streaming
calls receive bytes through ``on_bytes`` as they arrive and exactly one
``on_done``; plain calls receive the whole response through ``on_response``.
"""

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import httpx

from ..errors import TransportError
from ..models.streaming import StreamRequest
from ..observability.logging import ClientLogger

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """Whole response of a non-streaming call."""
    status_code: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


OnBytes = Callable[[bytes], None]
OnDone = Callable[[Optional[BaseException]], None]
OnResponse = Callable[[Optional[HTTPResponse], Optional[BaseException]], None]


class Transport(ABC):
    """Byte-level connection abstraction consumed by the client."""

    @abstractmethod
    def open(
        self,
        request: StreamRequest,
        on_bytes: OnBytes,
        on_done: OnDone,
        cancel_event: Optional[threading.Event] = None
    ) -> None:
        """
        Start a streaming request without blocking.

        ``on_bytes`` is called any number of times, in order; ``on_done`` is
        called exactly once, with None on a clean end of data. A non-2xx
        status is reported through ``on_done`` as a TransportError carrying
        the response body. When ``cancel_event`` is set the transport stops
        reading and closes the connection.
        """
        pass

    @abstractmethod
    def send(self, request: StreamRequest, on_response: OnResponse) -> None:
        """Start a plain request without blocking; ``on_response`` fires once."""
        pass

    def cancel(self, cancel_event: threading.Event) -> None:
        """Abort the stream opened with ``cancel_event`` without waiting for its next chunk."""
        pass

    def close(self) -> None:
        """Release connections and worker threads."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class HTTPXTransport(Transport):
    """
    Transport backed by a shared ``httpx.Client`` and a worker pool.

    Each call runs on its own worker thread, so callbacks arrive off the
    caller's thread. Calls still queued when the transport closes are
    reported as failed rather than dropped.

    Args:
        client: Optional preconfigured httpx client (owned by the caller)
        max_workers: Maximum concurrent calls
    """

    def __init__(self, client: Optional[httpx.Client] = None, max_workers: int = 8):
        self._client = client or httpx.Client()
        self._owns_client = client is None
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="openai-http")
        self._log = ClientLogger("transport")

        self._lock = threading.Lock()
        self._closed = False
        # Queued or running jobs, with the callback that reports them as aborted
        self._pending: Dict[Future, Callable[[TransportError], None]] = {}
        # Open responses of running streams, by cancel event
        self._responses: Dict[threading.Event, httpx.Response] = {}

    def open(self, request, on_bytes, on_done, cancel_event=None) -> None:
        self._submit(on_done, self._run_stream, request, on_bytes, on_done, cancel_event)

    def send(self, request, on_response) -> None:
        self._submit(lambda error: on_response(None, error), self._run_send, request, on_response)

    def cancel(self, cancel_event: threading.Event) -> None:
        with self._lock:
            response = self._responses.pop(cancel_event, None)
        if response is not None:
            self._log.debug("Closing cancelled stream", url=str(response.request.url))
            response.close()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            pending = list(self._pending.items())

        aborted = 0
        for future, report in pending:
            if future.cancel():
                aborted += 1
                report(TransportError("Transport closed before the request was sent"))
        if aborted:
            self._log.info("Aborted queued requests on close", count=aborted)

        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_client:
            self._client.close()

    def _submit(self, report: Callable[[TransportError], None], fn, *args) -> None:
        with self._lock:
            if self._closed:
                raise TransportError("Transport is closed")
            future = self._executor.submit(fn, *args)
            self._pending[future] = report
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.pop(future, None)

    def _run_stream(self, request: StreamRequest, on_bytes: OnBytes, on_done: OnDone,
                    cancel_event: Optional[threading.Event]) -> None:
        error: Optional[BaseException] = None
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
                timeout=request.timeout
            ) as response:
                if response.status_code >= 400:
                    body = response.read()
                    error = TransportError(
                        f"HTTP {response.status_code}",
                        status_code=response.status_code,
                        body=body
                    )
                else:
                    self._read_stream(response, on_bytes, cancel_event)
        except httpx.HTTPError as e:
            error = TransportError.from_httpx(e)
        except Exception as e:
            logger.exception("Unexpected failure while streaming")
            error = TransportError(f"Stream aborted: {e}", original_error=e)
        on_done(error)

    def _read_stream(self, response: httpx.Response, on_bytes: OnBytes,
                     cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is None:
            for chunk in response.iter_bytes():
                on_bytes(chunk)
            return

        with self._lock:
            self._responses[cancel_event] = response
        try:
            if cancel_event.is_set():
                return
            for chunk in response.iter_bytes():
                if cancel_event.is_set():
                    self._log.debug("Stream cancelled, closing connection", url=str(response.request.url))
                    break
                on_bytes(chunk)
        except Exception:
            # cancel() closed the response under an in-flight read
            if not cancel_event.is_set():
                raise
        finally:
            with self._lock:
                self._responses.pop(cancel_event, None)

    def _run_send(self, request: StreamRequest, on_response: OnResponse) -> None:
        try:
            with self._log.track_request(request.method, request.url):
                response = self._client.request(
                    request.method,
                    request.url,
                    headers=dict(request.headers),
                    content=request.body,
                    timeout=request.timeout
                )
        except httpx.HTTPError as e:
            on_response(None, TransportError.from_httpx(e))
            return
        except Exception as e:
            on_response(None, TransportError(f"Request failed: {e}", original_error=e))
            return
        on_response(HTTPResponse(response.status_code, response.content, dict(response.headers)), None)
