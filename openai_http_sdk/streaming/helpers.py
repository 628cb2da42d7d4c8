"""Helpers shared by sessions, stream iterators and the client."""

from typing import Any, Callable, Optional

from ..observability.logging import ClientLogger


def safe_invoke(callback: Optional[Callable[[Any], Any]], value: Any, log: ClientLogger, **fields) -> None:
    """
    Call a user callback with one argument.

    Exceptions raised by the callback are logged and not propagated: the
    caller is a transport worker that must still deliver the completion
    signal.
    """
    if callback is None:
        return
    try:
        callback(value)
    except Exception as e:
        log.error("Callback raised", error=e, callback=getattr(callback, "__name__", repr(callback)), **fields)
