"""
Rest Timer state machine.

Offers a rest period after a set is logged and counts it down:

    idle -> offering -> running -> complete -> idle
                           |
                           +-- skip/stop --> idle

- offer() is ignored while a rest period is running (no preemption)
- the suggested duration can be adjusted only while offering
- ticks run at 1 Hz through the injected Scheduler
- on completion the notifier fires and the timer returns to idle after a
  2 second grace period, unless dismissed first
- periodic callbacks do not fire while the app is suspended, so
  enter_background()/enter_foreground() correct remaining time from the
  wall clock

The timer is an ordinary object: whoever owns the screen lifecycle
constructs it and hands it to consumers (see api.deps.get_rest_timer).
"""

import logging
from datetime import datetime
from typing import Optional

from application.ports import Clock, RestCompletionNotifier, ScheduledCall, Scheduler
from domain.models import TimerPhase, TimerState, format_seconds

logger = logging.getLogger(__name__)

MIN_REST_SECONDS = 15
MAX_REST_SECONDS = 600
TICK_INTERVAL_SECONDS = 1
COMPLETION_GRACE_SECONDS = 2


def clamp_rest_seconds(seconds: int) -> int:
    """Clamp a rest duration to [MIN_REST_SECONDS, MAX_REST_SECONDS]."""
    return max(MIN_REST_SECONDS, min(int(seconds), MAX_REST_SECONDS))


class RestTimer:
    """
    Countdown timer for rest periods between sets.

    All methods are safe to call from any state; calls that do not apply
    to the current phase are no-ops.

    Usage:
        >>> timer = RestTimer(clock=SystemClock(), scheduler=AsyncioScheduler())
        >>> timer.offer("bench-press", 90)
        >>> timer.adjust_suggested(30)
        >>> timer.start()
        >>> timer.formatted_time
        '2:00'
    """

    def __init__(
        self,
        clock: Clock,
        scheduler: Scheduler,
        notifier: Optional[RestCompletionNotifier] = None,
    ):
        """
        Initialize an idle timer.

        Args:
            clock: Wall clock used for background/foreground correction
            scheduler: Runs the 1 Hz tick and the completion grace period
            notifier: Receives rest-complete events (haptics, notifications)
        """
        self._clock = clock
        self._scheduler = scheduler
        self._notifier = notifier

        self._phase = TimerPhase.IDLE
        self._target_id: Optional[str] = None
        self._total_seconds = 0
        self._remaining_seconds = 0
        self._suggested_seconds = 0
        self._paused = False

        self._tick_call: Optional[ScheduledCall] = None
        self._grace_call: Optional[ScheduledCall] = None
        self._backgrounded_at: Optional[datetime] = None

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> TimerState:
        """Immutable snapshot of the timer."""
        return TimerState(
            phase=self._phase,
            active_target_id=self._target_id,
            total_seconds=self._total_seconds,
            remaining_seconds=self._remaining_seconds,
            suggested_seconds=self._suggested_seconds,
            is_paused=self._paused,
        )

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def active_target_id(self) -> Optional[str]:
        return self._target_id

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def suggested_seconds(self) -> int:
        return self._suggested_seconds

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def progress(self) -> float:
        return self.state.progress

    @property
    def formatted_time(self) -> str:
        return format_seconds(self._remaining_seconds)

    @property
    def is_complete(self) -> bool:
        return self._phase == TimerPhase.COMPLETE

    def is_running_for(self, target_id: str) -> bool:
        return self._phase == TimerPhase.RUNNING and self._target_id == target_id

    def is_offering_for(self, target_id: str) -> bool:
        return self._phase == TimerPhase.OFFERING and self._target_id == target_id

    def should_show_for(self, target_id: str) -> bool:
        """Whether the rest UI belongs under this exercise."""
        return self._phase != TimerPhase.IDLE and self._target_id == target_id

    # =========================================================================
    # Offering
    # =========================================================================

    def offer(self, target_id: str, suggested_seconds: int, auto_start: bool = False) -> None:
        """
        Offer a rest period after a set.

        Ignored while a rest period is running. A completed timer still in
        its grace period is replaced by the new offer.

        Args:
            target_id: Exercise the rest belongs to
            suggested_seconds: Suggested duration (clamped to 15..600)
            auto_start: Start counting down immediately
        """
        if self._phase == TimerPhase.RUNNING:
            logger.debug(f"Rest offer for {target_id} ignored: timer running for {self._target_id}")
            return

        self._cancel_grace()
        self._phase = TimerPhase.OFFERING
        self._target_id = target_id
        self._suggested_seconds = clamp_rest_seconds(suggested_seconds)
        self._total_seconds = 0
        self._remaining_seconds = 0
        self._paused = False

        if auto_start:
            self.start()

    def adjust_suggested(self, delta_seconds: int) -> None:
        """Adjust the offered duration by delta_seconds (offering only)."""
        if self._phase != TimerPhase.OFFERING:
            return
        self._suggested_seconds = clamp_rest_seconds(self._suggested_seconds + delta_seconds)

    def set_suggested(self, seconds: int) -> None:
        """Replace the offered duration, e.g. from a preset (offering only)."""
        if self._phase != TimerPhase.OFFERING:
            return
        self._suggested_seconds = clamp_rest_seconds(seconds)

    # =========================================================================
    # Running
    # =========================================================================

    def start(self) -> None:
        """Start counting down the offered duration."""
        if self._phase != TimerPhase.OFFERING or self._target_id is None:
            return

        self._phase = TimerPhase.RUNNING
        self._total_seconds = self._suggested_seconds
        self._remaining_seconds = self._suggested_seconds
        self._paused = False
        self._schedule_tick()

        logger.info(f"Rest started for {self._target_id}: {self.formatted_time}")

    def tick(self) -> None:
        """Count down one second; completes the rest period at zero."""
        if self._phase != TimerPhase.RUNNING or self._paused:
            return

        self._remaining_seconds = max(self._remaining_seconds - 1, 0)
        if self._remaining_seconds == 0:
            self._complete()

    def add_seconds(self, seconds: int) -> None:
        """
        Extend a running rest period.

        Remaining time is capped at MAX_REST_SECONDS; the total grows when
        the remaining time exceeds it, keeping progress within 0..1.
        """
        if self._phase != TimerPhase.RUNNING or seconds <= 0:
            return

        self._remaining_seconds = min(self._remaining_seconds + seconds, MAX_REST_SECONDS)
        self._total_seconds = max(self._total_seconds, self._remaining_seconds)

    def pause(self) -> None:
        """Stop the countdown without losing remaining time."""
        if self._phase != TimerPhase.RUNNING or self._paused:
            return

        self._paused = True
        self._cancel_tick()
        logger.debug(f"Rest paused with {self._remaining_seconds}s remaining")

    def resume(self) -> None:
        """Resume a paused countdown if time remains."""
        if self._phase != TimerPhase.RUNNING or not self._paused:
            return

        self._paused = False
        if self._remaining_seconds > 0 and self._backgrounded_at is None:
            self._schedule_tick()

    # =========================================================================
    # Ending
    # =========================================================================

    def skip(self) -> None:
        """Skip the rest period and return to idle."""
        if self._phase != TimerPhase.IDLE:
            logger.info(f"Rest skipped for {self._target_id}")
        self._reset()

    def stop(self) -> None:
        """Stop the timer and return to idle (e.g. when the workout ends)."""
        self._reset()

    def dismiss(self) -> None:
        """Dismiss an offer or the completion banner."""
        if self._phase in (TimerPhase.OFFERING, TimerPhase.COMPLETE):
            self._reset()

    # =========================================================================
    # App lifecycle
    # =========================================================================

    def enter_background(self) -> None:
        """Suspend ticking and remember when the app went to the background."""
        if self._phase != TimerPhase.RUNNING or self._paused:
            return

        self._cancel_tick()
        self._backgrounded_at = self._clock.now()

    def enter_foreground(self) -> None:
        """
        Apply the real time spent in the background.

        Remaining time is reduced by the elapsed wall-clock seconds (never
        below zero); the timer then resumes ticking or completes at once.
        """
        backgrounded_at = self._backgrounded_at
        self._backgrounded_at = None
        if backgrounded_at is None or self._phase != TimerPhase.RUNNING:
            return

        elapsed = int((self._clock.now() - backgrounded_at).total_seconds())
        self._remaining_seconds = max(self._remaining_seconds - max(elapsed, 0), 0)
        logger.debug(f"Foregrounded after {elapsed}s, {self._remaining_seconds}s remaining")

        if self._remaining_seconds == 0:
            self._complete()
        elif not self._paused:
            self._schedule_tick()

    # =========================================================================
    # Internals
    # =========================================================================

    def _complete(self) -> None:
        self._cancel_tick()
        self._phase = TimerPhase.COMPLETE
        self._remaining_seconds = 0
        self._paused = False
        target_id = self._target_id

        logger.info(f"Rest complete for {target_id}")
        if self._notifier is not None and target_id is not None:
            try:
                self._notifier.rest_completed(target_id)
            except Exception as e:
                logger.exception(f"Rest completion notifier failed: {e}")

        self._cancel_grace()
        self._grace_call = self._scheduler.call_later(
            COMPLETION_GRACE_SECONDS, self._on_grace_elapsed
        )

    def _on_grace_elapsed(self) -> None:
        self._grace_call = None
        if self._phase == TimerPhase.COMPLETE:
            self._reset()

    def _on_tick(self) -> None:
        self._tick_call = None
        self.tick()
        if self._phase == TimerPhase.RUNNING and not self._paused:
            self._schedule_tick()

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick_call = self._scheduler.call_later(TICK_INTERVAL_SECONDS, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._tick_call is not None:
            self._tick_call.cancel()
            self._tick_call = None

    def _cancel_grace(self) -> None:
        if self._grace_call is not None:
            self._grace_call.cancel()
            self._grace_call = None

    def _reset(self) -> None:
        self._cancel_tick()
        self._cancel_grace()
        self._phase = TimerPhase.IDLE
        self._target_id = None
        self._total_seconds = 0
        self._remaining_seconds = 0
        self._suggested_seconds = 0
        self._paused = False
        self._backgrounded_at = None
