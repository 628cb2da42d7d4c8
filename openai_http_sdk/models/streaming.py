"""
Outbound request descriptor.

A StreamRequest is produced once by a request builder and handed unchanged
to the transport, for streaming and plain calls alike.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class StreamRequest:
    """
    Fully constructed HTTP request.

    Headers are frozen into a read-only mapping so the descriptor cannot be
    mutated after it is built.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: float = 60.0

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def with_headers(self, **headers: str) -> "StreamRequest":
        """Return a copy with extra headers merged in."""
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)
