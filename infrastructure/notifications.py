"""
Logging adapter for the RestCompletionNotifier port.

The server has no device to buzz, so completions are logged. Hosts that
deliver haptics or push notifications provide their own notifier and
override api.deps.get_rest_notifier.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class LoggingRestNotifier:
    """Logs rest-complete events and remembers the most recent target."""

    def __init__(self) -> None:
        self.last_completed: Optional[str] = None
        self.completed_count = 0

    def rest_completed(self, target_id: str) -> None:
        self.last_completed = target_id
        self.completed_count += 1
        logger.info(f"Rest period finished for {target_id}")
