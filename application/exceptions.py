"""
Application-layer exceptions.

These exceptions are raised by infrastructure adapters and handled (or
propagated) by the core services.
"""


class RecordStoreError(Exception):
    """Personal record store is unavailable or rejected a write.

    PersonalRecordService turns this into a failed RecordCheckResult so
    callers can retry; in-memory state is left untouched.
    """

    pass


class WorkoutLogError(Exception):
    """The workout log could not be read or contains malformed data.

    Propagated to callers of history and timeline queries rather than
    being hidden behind an empty result.
    """

    pass
