from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query

from studysphere.core.modules.review.models import DailyReview, DailyReviewInput
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["daily-reviews"])


@router.get(
    "/daily-reviews",
    summary="List daily reviews",
    description=(
        "Without `date`, the latest reviews. With `date`, every review of that day "
        "in the user's timezone."
    ),
    operation_id="listDailyReviews",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_daily_reviews(
    app: AppDep,
    token: SessionTokenDep,
    day: Annotated[date | None, Query(alias="date", description="Day to fetch, YYYY-MM-DD")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Maximum items when no date is given")] = 10,
) -> list[DailyReview]:
    return await app.list_daily_reviews(token, day, limit)


@router.post(
    "/daily-reviews",
    summary="Create daily review",
    operation_id="createDailyReview",
    status_code=201,
    responses={
        201: {"description": "Review saved"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_daily_review(request: DailyReviewInput, app: AppDep, token: SessionTokenDep) -> DailyReview:
    return await app.create_daily_review(token, request)
