"""Session repositories for prompt refinement sessions."""

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime

from prompt_refiner_api.models.refinement_session import RefinementSession

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class RefinementSessionNotFoundError(Exception):
    """Raised when a refinement session is missing or has expired."""

    pass


class SessionRepository(ABC):
    """Storage contract for refinement sessions.

    Expired sessions are treated as nonexistent by every read.
    """

    @abstractmethod
    def add(self, session: RefinementSession) -> RefinementSession:
        pass

    @abstractmethod
    def get(self, session_id: str) -> RefinementSession:
        """Raises RefinementSessionNotFoundError if missing or expired."""
        pass

    @abstractmethod
    def update(self, session: RefinementSession) -> RefinementSession:
        """Raises RefinementSessionNotFoundError if missing or expired."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        pass

    @abstractmethod
    def purge_expired(self) -> int:
        pass

    @abstractmethod
    def list_all(self) -> list[RefinementSession]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class InMemorySessionRepository(SessionRepository):
    """Process-local session store with time-based expiry.

    Sessions are stored and returned as deep copies, so callers must call
    ``update`` for a mutation to become visible. Expired sessions are evicted
    lazily on ``get`` and in bulk by ``purge_expired``.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        """Initialize the repository.

        Args:
            clock: Returns the current time. Replaced in tests.
        """
        self._sessions: dict[str, RefinementSession] = {}
        self._clock = clock

    def add(self, session: RefinementSession) -> RefinementSession:
        self._sessions[session.id] = copy.deepcopy(session)
        logger.debug("Stored session %s (expires %s)", session.id, session.expires_at)
        return copy.deepcopy(session)

    def get(self, session_id: str) -> RefinementSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise RefinementSessionNotFoundError(f"Session {session_id} not found")
        if session.is_expired(self._clock()):
            # A concurrent sweep or read may already have evicted it
            if self._sessions.pop(session_id, None) is not None:
                logger.info("Session %s expired and was evicted", session_id)
            raise RefinementSessionNotFoundError(f"Session {session_id} not found")
        return copy.deepcopy(session)

    def update(self, session: RefinementSession) -> RefinementSession:
        """Replace a stored session and stamp its ``updated_at``."""
        # Raises for missing or expired sessions
        self.get(session.id)
        session.updated_at = self._clock()
        self._sessions[session.id] = copy.deepcopy(session)
        return copy.deepcopy(session)

    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        """Remove every expired session.

        Returns:
            Number of sessions removed.
        """
        now = self._clock()
        # Snapshot: request threads may add sessions while this runs
        expired = [
            sid for sid, session in list(self._sessions.items()) if session.is_expired(now)
        ]
        removed = sum(1 for sid in expired if self._sessions.pop(sid, None) is not None)
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed

    def list_all(self) -> list[RefinementSession]:
        now = self._clock()
        return [
            copy.deepcopy(session)
            for session in list(self._sessions.values())
            if not session.is_expired(now)
        ]

    def count(self) -> int:
        return len(self.list_all())
