"""Registry of live booking sessions, one wizard each.

Sessions expire after a period without access.
"""

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from loguru import logger

from clinic.core.exceptions import SessionNotFoundError
from clinic.services.booking import BookingWizard


@dataclass
class BookingSession:
    """A wizard bound to a session id."""

    session_id: str
    wizard: BookingWizard
    created_at: float
    last_seen: float = field(default=0.0)


class BookingSessionRegistry:
    """Async-safe session registry with idle expiry."""

    def __init__(
        self,
        ttl_seconds: int,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize session registry.

        Args:
            ttl_seconds: Expire sessions idle for longer than this
            clock: Monotonic time source (tests)
        """
        self._sessions: Dict[str, BookingSession] = {}
        self._lock = asyncio.Lock()
        self._ttl = ttl_seconds
        self._clock = clock or time.monotonic

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, session: BookingSession, now: float) -> bool:
        return now - session.last_seen > self._ttl

    async def create(self, wizard: BookingWizard) -> BookingSession:
        """Register a wizard under a fresh session id."""
        now = self._clock()
        session = BookingSession(
            session_id=uuid.uuid4().hex, wizard=wizard, created_at=now, last_seen=now
        )
        async with self._lock:
            self._sessions[session.session_id] = session
        logger.info(f"Booking session created: {session.session_id}")
        return session

    async def get(self, session_id: str) -> BookingSession:
        """
        Look up a session and mark it as used.

        Raises:
            SessionNotFoundError: If unknown or expired
        """
        now = self._clock()
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and self._expired(session, now):
                del self._sessions[session_id]
                logger.info(f"Booking session expired: {session_id}")
                session = None
            if session is None:
                raise SessionNotFoundError(session_id)
            session.last_seen = now
            return session

    async def remove(self, session_id: str) -> bool:
        """Drop a session; returns False if it did not exist."""
        async with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Booking session closed: {session_id}")
        return removed

    async def purge_expired(self) -> int:
        """Remove every expired session and return how many were removed."""
        now = self._clock()
        async with self._lock:
            expired = [sid for sid, s in self._sessions.items() if self._expired(s, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info(f"Purged {len(expired)} expired booking sessions")
        return len(expired)
