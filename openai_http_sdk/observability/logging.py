"""
Structured logging utility for the client and streaming sessions.

Log lines carry standard fields (component, endpoint, request_id, session_id)
in a ``[key=value ...] message`` prefix so calls can be followed across the
transport worker threads.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Optional


class ClientLogger:
    """Structured logger bound to one SDK component."""

    def __init__(self, component: str):
        """
        Initialize logger for a component.

        Args:
            component: Component name (e.g., "client", "session")
        """
        self.component = component
        self.logger = logging.getLogger(f"openai_http_sdk.{component}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"component={self.component}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, **kwargs):
        """Log debug message with structured fields."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log error message with structured fields."""
        if error is not None:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, **kwargs))

    @contextmanager
    def track_request(self, method: str, url: str, request_id: Optional[str] = None):
        """
        Context manager to time a request and log its outcome.

        Args:
            method: HTTP method
            url: Target URL
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.time()
        self.debug("Starting request", method=method, url=url, request_id=request_id)

        metadata = {
            'request_id': request_id,
            'method': method,
            'url': url,
            'start_time': start_time
        }

        try:
            yield metadata

            duration = time.time() - start_time
            self.debug(
                "Completed request",
                method=method,
                url=url,
                request_id=request_id,
                duration_ms=int(duration * 1000)
            )

        except Exception as e:
            duration = time.time() - start_time
            self.error(
                "Failed request",
                method=method,
                url=url,
                request_id=request_id,
                duration_ms=int(duration * 1000),
                error=e
            )
            raise

    def log_stream_summary(self, session_id: int, results: int, failures: int,
                           duration: float, error: Optional[BaseException] = None):
        """Log the outcome of a finished stream."""
        fields = dict(
            session_id=session_id,
            results=results,
            failures=failures,
            duration_ms=int(duration * 1000)
        )
        if error is None:
            self.info("Stream completed", **fields)
        else:
            self.warning(
                "Stream ended with error",
                error_type=type(error).__name__,
                error_msg=str(error),
                **fields
            )
