"""In-process registry of open split sessions, keyed by session id."""
import logging
from typing import Dict, Optional

from cashsplit.core.config import settings
from cashsplit.services.split_service import SplitSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Keeps at most ``max_sessions`` sessions; adding past that drops the oldest."""

    def __init__(self, max_sessions: int = settings.MAX_OPEN_SESSIONS):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: Dict[str, SplitSession] = {}

    def add(self, session: SplitSession) -> SplitSession:
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info("Dropped session %s, store holds %d", oldest, self.max_sessions)
        return session

    def get(self, session_id: str) -> Optional[SplitSession]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


sessions = SessionStore()
