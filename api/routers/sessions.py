"""
Sessions router for workout log writes.

Every write goes through a use case so personal records and the timeline
cache stay consistent with the log.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field

from api.deps import get_delete_session_use_case, get_log_session_use_case
from application.use_cases import DeleteSessionUseCase, LogSessionUseCase
from domain.models import Session

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


class LogSessionResponse(BaseModel):
    """Response model for logging a session."""
    session_id: str
    new_record_exercises: List[str] = Field(default_factory=list)
    replaced_existing: bool = Field(default=False, description="An earlier version of the session was replaced")


class DeleteSessionResponse(BaseModel):
    """Response model for deleting a session."""
    session_id: str
    recalculated: List[str] = Field(default_factory=list)
    error: Optional[str] = None


@router.post("", response_model=LogSessionResponse, status_code=201)
async def log_session(
    session: Session,
    use_case: LogSessionUseCase = Depends(get_log_session_use_case),
) -> LogSessionResponse:
    """
    Log a completed session.

    Checks every set for personal records and returns the exercises that
    set a new one. Posting an existing session ID replaces that session and
    recalculates the records of every exercise in either version.
    """
    if not session.is_completed:
        raise HTTPException(
            status_code=400,
            detail="Only completed, non-template sessions can be logged",
        )

    result = use_case.execute(session)
    if not result.success:
        raise HTTPException(status_code=503, detail=result.error)

    return LogSessionResponse(
        session_id=result.session_id,
        new_record_exercises=result.new_record_exercises,
        replaced_existing=result.replaced_existing,
    )


@router.delete("/{session_id}", response_model=DeleteSessionResponse)
async def delete_session(
    session_id: str = Path(..., min_length=1, description="Session ID"),
    use_case: DeleteSessionUseCase = Depends(get_delete_session_use_case),
) -> DeleteSessionResponse:
    """
    Delete a session and recalculate the records of its exercises.
    """
    result = use_case.execute(session_id)
    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    if not result.success and not result.recalculated:
        raise HTTPException(status_code=503, detail=result.error)

    return DeleteSessionResponse(
        session_id=session_id,
        recalculated=result.recalculated,
        error=result.error,
    )
