"""
Session store - signed-in admin sessions with an inactivity timeout.
Runs a sweeper as an asyncio background task alongside the web server.
"""

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from core.domain.constants import SESSION_SWEEP_SECONDS, SESSION_TOMBSTONE_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class Session:
    token: str
    last_activity: float
    user_id: Optional[str] = None
    email: Optional[str] = None
    access_token: Optional[str] = None
    is_admin: bool = False
    # [(level, text), ...] shown once on the next page
    flashes: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def signed_in(self) -> bool:
        return self.user_id is not None


class SessionStore:
    """In-memory sessions keyed by an opaque cookie token"""

    def __init__(self, timeout_minutes: int = 30, clock: Callable[[], float] = time.monotonic):
        self.timeout_seconds = timeout_minutes * 60
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        # Swept signed-in tokens -> when they were swept, so the next request still learns it timed out
        self._timed_out: Dict[str, float] = {}
        self._running = False

    def create(self) -> Session:
        session = Session(token=secrets.token_urlsafe(32), last_activity=self._clock())
        self._sessions[session.token] = session
        return session

    def expired(self, session: Session) -> bool:
        return self._clock() - session.last_activity >= self.timeout_seconds

    def get(self, token: Optional[str]) -> Tuple[Optional[Session], bool]:
        """
        Look up a session and reset its inactivity timer.
        Returns: (session or None, timed_out) - timed_out is True when a
        signed-in session had gone idle too long, whether or not the sweeper got to it first.
        """
        if not token:
            return None, False
        session = self._sessions.get(token)
        if session is None:
            return None, self._timed_out.pop(token, None) is not None
        if self.expired(session):
            self.destroy(token)
            return None, session.signed_in
        session.last_activity = self._clock()
        return session, False

    def destroy(self, token: Optional[str]) -> None:
        if token:
            self._sessions.pop(token, None)
            self._timed_out.pop(token, None)

    @staticmethod
    def flash(session: Session, text: str, level: str = "info") -> None:
        session.flashes.append((level, text))

    @staticmethod
    def pop_flashes(session: Optional[Session]) -> List[Tuple[str, str]]:
        if session is None:
            return []
        flashes, session.flashes = session.flashes, []
        return flashes

    def sweep(self) -> int:
        """
        Drop every expired session. Returns how many were dropped.
        Signed-in tokens are remembered for a while so get() can still report the timeout.
        """
        now = self._clock()
        stale = [token for token, s in self._sessions.items() if self.expired(s)]
        for token in stale:
            session = self._sessions.pop(token)
            if session.signed_in:
                self._timed_out[token] = now
        for token in [t for t, swept_at in self._timed_out.items() if now - swept_at >= SESSION_TOMBSTONE_SECONDS]:
            del self._timed_out[token]
        return len(stale)

    async def run(self, interval: float = SESSION_SWEEP_SECONDS):
        """Sweeper loop"""
        self._running = True
        logger.info(f"[SESSIONS] Sweeper started, timeout {self.timeout_seconds // 60} min")
        while self._running:
            await asyncio.sleep(interval)
            try:
                dropped = self.sweep()
                if dropped:
                    logger.info(f"[SESSIONS] Expired {dropped} idle sessions")
            except Exception as e:
                logger.error(f"[SESSIONS] Sweep failed: {e}", exc_info=True)

    async def stop(self):
        self._running = False

    def __len__(self) -> int:
        return len(self._sessions)
