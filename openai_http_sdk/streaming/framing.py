"""
Frame decoder for server-sent event streams.

Splits raw bytes into event payloads. The wire format is newline-delimited:

    data: {"id": "1"}\\n
    \\n
    data: [DONE]\\n

Buffering is done on bytes, never on decoded text, so a chunk boundary that
falls inside a multi-byte UTF-8 sequence or between ``\\r`` and ``\\n`` never
produces a short or corrupted payload.
"""

from typing import List
import json
import logging

from ..config.constants import EVENT_PREFIX, STREAM_TERMINATOR

logger = logging.getLogger(__name__)


class FrameDecoder:
    """
    Incremental line framer.

    ``feed`` returns the payloads completed by a chunk, in arrival order.
    Once the terminator line is seen ``terminated`` is set and all further
    input is ignored.
    """

    def __init__(self, prefix: bytes = EVENT_PREFIX, terminator: bytes = STREAM_TERMINATOR):
        self.prefix = prefix
        self.terminator = terminator
        self.terminated = False
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet framed."""
        return len(self._buffer)

    def feed(self, chunk: bytes) -> List[bytes]:
        """Buffer a chunk and return every payload it completes."""
        if self.terminated or not chunk:
            return []

        # The residual buffer holds no newline, only the new bytes need scanning
        search_from = len(self._buffer)
        self._buffer.extend(chunk)

        payloads = []
        start = 0
        while not self.terminated:
            newline = self._buffer.find(b"\n", max(start, search_from))
            if newline < 0:
                break
            payload = self._parse_line(bytes(self._buffer[start:newline]))
            start = newline + 1
            if payload is not None:
                payloads.append(payload)

        if self.terminated:
            self._buffer.clear()
        else:
            del self._buffer[:start]
        return payloads

    def finish(self) -> List[bytes]:
        """
        Flush at transport end-of-data.

        An unterminated last line is kept only when it carries a complete
        JSON document; anything else left in the buffer is dropped.
        """
        if self.terminated or not self._buffer:
            self._buffer.clear()
            return []

        residual = bytes(self._buffer)
        self._buffer.clear()

        payload = self._parse_line(residual)
        if payload is None:
            return []
        try:
            json.loads(payload)
        except ValueError:
            logger.debug(f"Discarding {len(residual)} trailing bytes without a complete payload")
            return []
        return [payload]

    def _parse_line(self, line: bytes):
        if line.endswith(b"\r"):
            line = line[:-1]
        if not line.strip():
            return None

        if not line.startswith(self.prefix):
            logger.debug(f"Dropping non-data line: {line[:40]!r}")
            return None

        payload = line[len(self.prefix):]
        if payload.startswith(b" "):
            payload = payload[1:]

        if payload.strip() == self.terminator:
            self.terminated = True
            return None
        if not payload.strip():
            return None
        return payload
