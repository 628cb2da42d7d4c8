"""
Iterator facades over callback-driven streaming sessions.

``ResultStream`` blocks the consuming thread on a queue; ``AsyncResultStream``
hands results to an event loop with ``call_soon_threadsafe``. Both yield
``Result`` values, end when the session completes, and raise the terminal
error (other than a caller cancellation) once iteration reaches the end.
"""

import asyncio
import queue
from typing import Generic, Optional, TypeVar

from ..errors import StreamCancelledError
from ..models.result import Result
from .session import StreamingSession

T = TypeVar("T")


class _Completion:
    __slots__ = ("error",)

    def __init__(self, error: Optional[BaseException]):
        self.error = error


class _StreamBridge(Generic[T]):
    """Shared session handling for the iterator facades."""

    def __init__(self):
        self._session: Optional[StreamingSession] = None
        self._finished = False
        self.error: Optional[BaseException] = None

    def attach(self, session: Optional[StreamingSession]) -> None:
        self._session = session

    @property
    def session(self) -> Optional[StreamingSession]:
        return self._session

    def cancel(self) -> None:
        """Cancel the underlying session, if still running."""
        if self._session is not None:
            self._session.cancel()

    def _end(self, completion: _Completion) -> None:
        self._finished = True
        self.error = completion.error
        if completion.error is not None and not isinstance(completion.error, StreamCancelledError):
            raise completion.error


class ResultStream(_StreamBridge[T]):
    """Blocking iterator of stream results.

    Example:
        >>> with client.stream_chats(query) as stream:
        ...     for result in stream:
        ...         print(result.unwrap().get_text(), end="")
    """

    def __init__(self):
        super().__init__()
        self._queue: "queue.Queue" = queue.Queue()

    def on_result(self, result: Result[T]) -> None:
        self._queue.put(result)

    def on_complete(self, error: Optional[BaseException]) -> None:
        self._queue.put(_Completion(error))

    def __iter__(self) -> "ResultStream[T]":
        return self

    def __next__(self) -> Result[T]:
        if self._finished:
            raise StopIteration
        item = self._queue.get()
        if isinstance(item, _Completion):
            self._end(item)
            raise StopIteration
        return item

    def __enter__(self) -> "ResultStream[T]":
        return self

    def __exit__(self, *args) -> None:
        if not self._finished:
            self.cancel()


class AsyncResultStream(_StreamBridge[T]):
    """Async iterator of stream results, bound to the running event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self._loop = loop or asyncio.get_running_loop()
        self._queue: "asyncio.Queue" = asyncio.Queue()

    def on_result(self, result: Result[T]) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, result)

    def on_complete(self, error: Optional[BaseException]) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, _Completion(error))

    def __aiter__(self) -> "AsyncResultStream[T]":
        return self

    async def __anext__(self) -> Result[T]:
        if self._finished:
            raise StopAsyncIteration
        item = await self._queue.get()
        if isinstance(item, _Completion):
            self._end(item)
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        if not self._finished:
            self.cancel()

    async def __aenter__(self) -> "AsyncResultStream[T]":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
