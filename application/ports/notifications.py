"""
Rest Completion Notifier Interface (Port).

Delivery of haptics, local notifications or live-activity updates is the
surrounding application's concern. The rest timer only announces that a
rest period finished.
"""
from typing import Protocol


class RestCompletionNotifier(Protocol):
    """Receives rest-complete events from the rest timer."""

    def rest_completed(self, target_id: str) -> None:
        """
        Called once when a running rest period reaches zero.

        Args:
            target_id: Exercise the rest period belonged to
        """
        ...
