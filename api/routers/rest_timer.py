"""
Rest timer router.

Drives the process-wide RestTimer. Endpoints are async so ticks scheduled
through AsyncioScheduler land on the server's event loop.

Every command returns the resulting timer state. Commands that do not
apply to the current phase are no-ops, not errors.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_rest_timer, get_settings
from backend.core.rest_suggestions import suggest_rest_seconds
from backend.core.rest_timer import RestTimer
from backend.settings import Settings
from domain.models import TimerPhase

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rest-timer",
    tags=["Rest Timer"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class TimerStateResponse(BaseModel):
    """Response model for the rest timer state."""
    phase: TimerPhase
    active_target_id: Optional[str] = None
    total_seconds: int
    remaining_seconds: int
    suggested_seconds: int
    is_paused: bool
    progress: float
    formatted_time: str
    formatted_suggested_time: str


class OfferRestRequest(BaseModel):
    """Offer a rest period after a set."""
    target_id: str = Field(..., min_length=1, description="Exercise the rest belongs to")
    exercise_name: Optional[str] = Field(
        default=None, description="Used to suggest a duration when seconds is omitted"
    )
    seconds: Optional[int] = Field(default=None, description="Suggested duration")
    auto_start: Optional[bool] = Field(
        default=None, description="Start immediately (default from settings)"
    )


class SecondsRequest(BaseModel):
    seconds: int


def _state_response(timer: RestTimer) -> TimerStateResponse:
    state = timer.state
    return TimerStateResponse(
        phase=state.phase,
        active_target_id=state.active_target_id,
        total_seconds=state.total_seconds,
        remaining_seconds=state.remaining_seconds,
        suggested_seconds=state.suggested_seconds,
        is_paused=state.is_paused,
        progress=state.progress,
        formatted_time=state.formatted_time,
        formatted_suggested_time=state.formatted_suggested_time,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=TimerStateResponse)
async def get_state(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    return _state_response(timer)


@router.post("/offer", response_model=TimerStateResponse)
async def offer_rest(
    request: OfferRestRequest,
    timer: RestTimer = Depends(get_rest_timer),
    settings: Settings = Depends(get_settings),
) -> TimerStateResponse:
    """
    Offer a rest period.

    Without explicit seconds the duration is suggested from the exercise
    name, falling back to the configured default rest.
    """
    seconds = request.seconds
    if seconds is None:
        seconds = suggest_rest_seconds(
            request.exercise_name or "",
            settings.default_rest_seconds,
        )
    auto_start = request.auto_start
    if auto_start is None:
        auto_start = settings.auto_start_rest_timer

    timer.offer(request.target_id, seconds, auto_start=auto_start)
    return _state_response(timer)


@router.post("/start", response_model=TimerStateResponse)
async def start(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.start()
    return _state_response(timer)


@router.post("/pause", response_model=TimerStateResponse)
async def pause(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.pause()
    return _state_response(timer)


@router.post("/resume", response_model=TimerStateResponse)
async def resume(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.resume()
    return _state_response(timer)


@router.post("/adjust", response_model=TimerStateResponse)
async def adjust(
    request: SecondsRequest,
    timer: RestTimer = Depends(get_rest_timer),
) -> TimerStateResponse:
    """Adjust the offered duration by a signed number of seconds."""
    timer.adjust_suggested(request.seconds)
    return _state_response(timer)


@router.post("/set", response_model=TimerStateResponse)
async def set_suggested(
    request: SecondsRequest,
    timer: RestTimer = Depends(get_rest_timer),
) -> TimerStateResponse:
    """Replace the offered duration (preset buttons)."""
    timer.set_suggested(request.seconds)
    return _state_response(timer)


@router.post("/add", response_model=TimerStateResponse)
async def add_seconds(
    request: SecondsRequest,
    timer: RestTimer = Depends(get_rest_timer),
) -> TimerStateResponse:
    """Extend a running rest period."""
    timer.add_seconds(request.seconds)
    return _state_response(timer)


@router.post("/skip", response_model=TimerStateResponse)
async def skip(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.skip()
    return _state_response(timer)


@router.post("/stop", response_model=TimerStateResponse)
async def stop(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.stop()
    return _state_response(timer)


@router.post("/dismiss", response_model=TimerStateResponse)
async def dismiss(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.dismiss()
    return _state_response(timer)


@router.post("/background", response_model=TimerStateResponse)
async def enter_background(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.enter_background()
    return _state_response(timer)


@router.post("/foreground", response_model=TimerStateResponse)
async def enter_foreground(timer: RestTimer = Depends(get_rest_timer)) -> TimerStateResponse:
    timer.enter_foreground()
    return _state_response(timer)
