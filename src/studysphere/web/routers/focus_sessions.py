from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from studysphere.core.modules.focus.models import (
    FocusSession,
    FocusSessionInput,
    FocusSessionUpdate,
    FocusStats,
    StatsPeriod,
)
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["focus-sessions"])


@router.get(
    "/focus-sessions",
    summary="List focus sessions",
    description=(
        "Most recent focus sessions of the current user. When both `start_date` and `end_date` "
        "are given, only sessions starting in `[start_date, end_date)` are returned."
    ),
    operation_id="listFocusSessions",
    responses={
        400: {"model": ErrorResponse, "description": "start_date is not before end_date"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_focus_sessions(
    app: AppDep,
    token: SessionTokenDep,
    limit: Annotated[int, Query(ge=1, le=500, description="Maximum items to return")] = 10,
    start_date: Annotated[datetime | None, Query(description="Range start (inclusive)")] = None,
    end_date: Annotated[datetime | None, Query(description="Range end (exclusive)")] = None,
) -> list[FocusSession]:
    return await app.list_focus_sessions(token, limit, start_date, end_date)


@router.get(
    "/focus-sessions/stats",
    summary="Focus statistics",
    description=(
        "Totals, breakdowns by type and mood, and study streaks. `day`, `month` and `year` "
        "start at local midnight in the user's timezone; `week` covers the last seven days."
    ),
    operation_id="getFocusStats",
    responses={
        400: {"model": ErrorResponse, "description": "Stored session data is invalid"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_focus_stats(
    app: AppDep,
    token: SessionTokenDep,
    period: Annotated[StatsPeriod, Query(description="Reporting period")] = StatsPeriod.WEEK,
) -> FocusStats:
    return await app.get_focus_stats(token, period)


@router.post(
    "/focus-sessions",
    summary="Record focus session",
    operation_id="createFocusSession",
    status_code=201,
    responses={
        201: {"description": "Focus session recorded"},
        400: {"model": ErrorResponse, "description": "Invalid session data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_focus_session(request: FocusSessionInput, app: AppDep, token: SessionTokenDep) -> FocusSession:
    return await app.create_focus_session(token, request)


@router.get(
    "/focus-sessions/{session_id}",
    summary="Get focus session",
    operation_id="getFocusSession",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Focus session not found"},
    },
)
async def get_focus_session(session_id: UUID, app: AppDep, token: SessionTokenDep) -> FocusSession:
    return await app.get_focus_session(token, session_id)


@router.patch(
    "/focus-sessions/{session_id}",
    summary="Update focus session",
    description="Partial update; only fields present in the body change.",
    operation_id="updateFocusSession",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid session data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Focus session not found"},
    },
)
async def update_focus_session(
    session_id: UUID, request: FocusSessionUpdate, app: AppDep, token: SessionTokenDep
) -> FocusSession:
    return await app.update_focus_session(token, session_id, request)


@router.delete(
    "/focus-sessions/{session_id}",
    summary="Delete focus session",
    operation_id="deleteFocusSession",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Focus session not found"},
    },
)
async def delete_focus_session(session_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.delete_focus_session(token, session_id)
