"""
Registry of in-flight streaming sessions.

The registry is the long-lived owner of every active session, so a stream
keeps running even after the caller drops its handle. Entries are keyed by
the session's monotonic id. Only the collection is locked; decode work in
the sessions never runs under this lock.
"""

import threading
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from .session import StreamingSession


class SessionRegistry:
    """Thread-safe set of active sessions."""

    def __init__(self):
        self._sessions: Dict[int, "StreamingSession"] = {}
        self._lock = threading.Lock()

    def add(self, session: "StreamingSession") -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def remove(self, session: "StreamingSession") -> bool:
        """Remove a session. Removing an unknown session is a no-op.

        Returns:
            True if the session was registered
        """
        with self._lock:
            return self._sessions.pop(session.session_id, None) is not None

    def drain(self) -> List["StreamingSession"]:
        """Atomically remove and return all sessions (client teardown)."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        return sessions

    def __contains__(self, session: "StreamingSession") -> bool:
        with self._lock:
            return session.session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
