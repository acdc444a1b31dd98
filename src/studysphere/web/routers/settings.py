from fastapi import APIRouter

from studysphere.core.modules.settings.models import SettingsUpdate, UserSettings
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["settings"])


@router.get(
    "/user-settings",
    summary="Get productivity settings",
    description="Settings of the current user; created with defaults on first access.",
    operation_id="getUserSettings",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def get_settings(app: AppDep, token: SessionTokenDep) -> UserSettings:
    return await app.get_settings(token)


@router.put(
    "/user-settings",
    summary="Update productivity settings",
    description="Partial update; only provided fields change. `timezone` sets day boundaries for streaks.",
    operation_id="updateUserSettings",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown timezone"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def update_settings(request: SettingsUpdate, app: AppDep, token: SessionTokenDep) -> UserSettings:
    return await app.update_settings(token, request)
