"""
Event decoder: one payload in, one Result out.

Decoding is all-or-nothing. A payload that does not match the expected model
is tried as an API error envelope before being reported as undecodable.
"""

from typing import Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import APIError, PayloadDecodeError
from ..models.responses import APIErrorResponse
from ..models.result import Result

T = TypeVar("T", bound=BaseModel)


def decode_api_error(payload: bytes, status_code: Optional[int] = None) -> Optional[APIError]:
    """Decode an ``{"error": {...}}`` envelope, or return None."""
    try:
        response = APIErrorResponse.model_validate_json(payload)
    except ValidationError:
        return None

    detail = response.error
    return APIError(
        message=detail.message,
        error_type=detail.type,
        param=detail.param,
        code=detail.code,
        status_code=status_code
    )


class EventDecoder(Generic[T]):
    """Decodes payloads into ``result_type`` instances."""

    def __init__(self, result_type: Type[T]):
        self.result_type = result_type

    def decode(self, payload: bytes, status_code: Optional[int] = None) -> Result[T]:
        """
        Decode a single payload.

        Args:
            payload: Bytes of one JSON document
            status_code: HTTP status attached to a recovered APIError

        Returns:
            Result holding the decoded model, an APIError, or a
            PayloadDecodeError wrapping the original validation failure
        """
        try:
            return Result.success(self.result_type.model_validate_json(payload))
        except ValidationError as decode_error:
            api_error = decode_api_error(payload, status_code)
            if api_error is not None:
                return Result.failure(api_error)
            return Result.failure(
                PayloadDecodeError(
                    f"Failed to decode {self.result_type.__name__}: {decode_error.error_count()} error(s)",
                    payload=payload,
                    original_error=decode_error
                )
            )
