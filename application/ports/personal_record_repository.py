"""
Personal Record Repository Interface (Port).

This module defines the abstract interface for storing the standing
personal record of each exercise. Records are keyed by normalized
exercise name; there is at most one per name.
"""
from typing import List, Optional, Protocol

from domain.models import PersonalRecord


class PersonalRecordRepository(Protocol):
    """
    Abstract interface for personal record persistence.

    All methods raise RecordStoreError when the store is unavailable.
    Writes are synchronous: when persist() returns, the record is durable.
    """

    def get(self, exercise_name: str) -> Optional[PersonalRecord]:
        """
        Get the record for an exercise.

        Args:
            exercise_name: Normalized exercise name

        Returns:
            PersonalRecord or None if no record exists
        """
        ...

    def list_all(self) -> List[PersonalRecord]:
        """
        Get every stored record.

        Returns:
            List of PersonalRecord models (no particular order)
        """
        ...

    def persist(self, record: PersonalRecord) -> PersonalRecord:
        """
        Create or overwrite the record for record.exercise_name.

        Args:
            record: Record to store

        Returns:
            The stored record
        """
        ...

    def delete(self, exercise_name: str) -> bool:
        """
        Delete the record for an exercise.

        Args:
            exercise_name: Normalized exercise name

        Returns:
            True if a record was deleted, False if none existed
        """
        ...
