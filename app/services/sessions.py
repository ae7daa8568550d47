"""
Per-tab portal state, keyed by the session header.
Idle sessions expire and the registry holds at most a fixed number,
dropping the least recently used first.
"""
import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from app.config.settings import settings
from app.services.form_builder import FormBuilder
from app.services.form_store import FormStore
from app.services.navigation import Navigator
from app.services.submission import SubmissionSession

logger = logging.getLogger(__name__)


class PortalSession:
    def __init__(self, session_id: str, store: FormStore):
        self.id = session_id
        self.navigator = Navigator()
        self.builder = FormBuilder(store)
        self.submission: Optional[SubmissionSession] = None
        self.last_seen = 0.0


class SessionRegistry:
    def __init__(
        self,
        store: FormStore,
        max_sessions: int = settings.SESSION_MAX_ACTIVE,
        idle_seconds: float = settings.SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.max_sessions = max_sessions
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, PortalSession]" = OrderedDict()

    def _expire(self, now: float) -> None:
        # Oldest first; stop at the first session still in use
        while self._sessions:
            session = next(iter(self._sessions.values()))
            if now - session.last_seen < self.idle_seconds:
                break
            self._sessions.popitem(last=False)
            logger.info("⌛ Session %s expired", session.id)

    def get_or_create(self, session_id: Optional[str] = None) -> PortalSession:
        now = self._clock()
        self._expire(now)

        session = self._sessions.get(session_id) if session_id else None
        if session is None:
            session = PortalSession(session_id or uuid.uuid4().hex, self.store)
            self._sessions[session.id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("🧹 Session %s evicted", evicted)
        else:
            self._sessions.move_to_end(session.id)

        session.last_seen = now
        return session

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
