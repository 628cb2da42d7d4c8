"""Tagged success/failure union delivered for every result unit."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a decoded value or the exception that prevented decoding.

    Attributes:
        value: The decoded value on success
        error: The failure on error
    """
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value
