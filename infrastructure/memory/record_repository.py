"""
In-memory Personal Record Repository.

Implements the PersonalRecordRepository protocol with one record per
normalized exercise name.
"""
from typing import Dict, List, Optional

from domain.models import PersonalRecord


class InMemoryPersonalRecordRepository:
    """In-memory implementation of PersonalRecordRepository."""

    def __init__(self):
        self._records: Dict[str, PersonalRecord] = {}

    def get(self, exercise_name: str) -> Optional[PersonalRecord]:
        return self._records.get(exercise_name)

    def list_all(self) -> List[PersonalRecord]:
        return list(self._records.values())

    def persist(self, record: PersonalRecord) -> PersonalRecord:
        """Insert or replace the record for record.exercise_name."""
        self._records[record.exercise_name] = record
        return record

    def delete(self, exercise_name: str) -> bool:
        return self._records.pop(exercise_name, None) is not None
