"""
In-memory Workout Log Repository.

Implements the WorkoutLogRepository protocol with a dict keyed by
session ID. Insertion order is preserved so sessions logged on the same
date keep their logged order.
"""
from typing import Dict, List, Optional
import logging

from domain.models import Session

logger = logging.getLogger(__name__)


class InMemoryWorkoutLogRepository:
    """
    In-memory implementation of WorkoutLogRepository.

    Saving a session with an existing ID replaces it in place.
    """

    def __init__(self, sessions: Optional[List[Session]] = None):
        """
        Initialize the log.

        Args:
            sessions: Optional initial sessions
        """
        self._sessions: Dict[str, Session] = {}
        for session in sessions or []:
            self._sessions[session.id] = session

    def list_completed_sessions(self) -> List[Session]:
        """Get completed, non-template sessions in logged order."""
        return [s for s in self._sessions.values() if s.is_completed]

    def get_session(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def save_session(self, session: Session) -> Session:
        is_update = session.id in self._sessions
        self._sessions[session.id] = session
        logger.debug(f"Session {'updated' if is_update else 'saved'}: {session.id}")
        return session

    def delete_session(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None
