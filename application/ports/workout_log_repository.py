"""
Workout Log Repository Interface (Port).

This module defines the abstract interface for the training log owned by
the surrounding application. The progress engine only calls
list_completed_sessions(); the write methods are used by the session
use cases, which must invalidate the timeline cache afterwards.
"""
from typing import List, Optional, Protocol

from domain.models import Session


class WorkoutLogRepository(Protocol):
    """
    Abstract interface for workout log access.

    Implementations raise WorkoutLogError when the log cannot be read.
    """

    def list_completed_sessions(self) -> List[Session]:
        """
        Get all completed sessions.

        Templates and sessions still in progress are excluded. Order is not
        guaranteed; callers sort by date as needed.

        Returns:
            List of completed Session models
        """
        ...

    def get_session(self, session_id: str) -> Optional[Session]:
        """
        Get a session by ID.

        Args:
            session_id: Session identifier

        Returns:
            Session or None if not found
        """
        ...

    def save_session(self, session: Session) -> Session:
        """
        Create or replace a session.

        Args:
            session: Session to store (replaces any session with the same ID)

        Returns:
            The stored session
        """
        ...

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session.

        Args:
            session_id: Session identifier

        Returns:
            True if a session was deleted, False if it did not exist
        """
        ...
