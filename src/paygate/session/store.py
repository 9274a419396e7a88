"""Session store — order id to issued payment token.

A session exists from a successful gateway initialization until the payer's
browser return consumes it. Consumption is read-and-delete under one lock so
at most one caller ever observes a given order's token.
"""

import threading
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Session:
    """One initiated payment attempt."""

    order_id: str
    token: str
    expiration: str | None = None


class SessionStore:
    """In-memory session store.

    Entries are never expired proactively; they leave the store when consumed
    or when the process exits.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def put(self, order_id: str, token: str, expiration: str | None = None) -> Session:
        """Create or overwrite the session for ``order_id``."""
        session = Session(order_id=order_id, token=token, expiration=expiration)
        with self._lock:
            self._sessions[order_id] = session
        logger.debug("session_stored", order_id=order_id, expiration=expiration)
        return session

    def take_by_order_id(self, order_id: str) -> Session | None:
        """Return and remove the session for ``order_id``, or None."""
        with self._lock:
            session = self._sessions.pop(order_id, None)
        if session is not None:
            logger.debug("session_consumed", order_id=order_id)
        return session

    def get(self, order_id: str) -> Session | None:
        """Return the session without consuming it."""
        with self._lock:
            return self._sessions.get(order_id)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
