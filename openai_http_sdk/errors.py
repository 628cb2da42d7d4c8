"""
Error types for the OpenAI HTTP SDK.

Every failure surfaced to callers derives from ClientError. Streaming calls
never raise these across the callback boundary; they are delivered inside
``Result`` values or passed to the completion callback.
"""

from typing import Any, Dict, Optional

import httpx


class ClientError(Exception):
    """
    Base exception for all SDK errors.

    Attributes:
        message: Error message
        status_code: HTTP status code if applicable
        original_error: The wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original_error = original_error


class TransportError(ClientError):
    """
    Connection-level failure (DNS, TLS, reset, timeout) or a non-2xx status.

    Terminal for a stream. For HTTP status failures the raw response body is
    kept so the structured API error can be recovered from it.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message, status_code=status_code, original_error=original_error)
        self.body = body

    @classmethod
    def from_httpx(cls, error: httpx.HTTPError) -> "TransportError":
        """Map an httpx exception onto a TransportError."""
        if isinstance(error, httpx.TimeoutException):
            message = f"Request timed out: {error}"
        elif isinstance(error, httpx.ConnectError):
            message = f"Failed to connect: {error}"
        else:
            message = f"Request failed: {error}"
        return cls(message, original_error=error)


class EmptyDataError(ClientError):
    """A non-streaming response arrived without a body."""

    def __init__(self, message: str = "Response contained no data"):
        super().__init__(message)


class PayloadDecodeError(ClientError):
    """
    A payload matched neither the expected result schema nor the API error
    schema. Non-terminal when raised for a single stream event.
    """

    def __init__(self, message: str, payload: bytes, original_error: Optional[BaseException] = None):
        super().__init__(message, original_error=original_error)
        self.payload = payload


class APIError(ClientError):
    """Structured error object returned by the API."""

    def __init__(
        self,
        message: str,
        error_type: Optional[str] = None,
        param: Optional[str] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, status_code=status_code)
        self.error_type = error_type
        self.param = param
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "type": self.error_type,
            "param": self.param,
            "code": self.code,
            "status_code": self.status_code,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"type={self.error_type!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class StreamCancelledError(ClientError):
    """The caller cancelled an active stream."""

    def __init__(self, message: str = "Stream cancelled by caller"):
        super().__init__(message)
