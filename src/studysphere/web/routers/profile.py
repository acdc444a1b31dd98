from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from studysphere.core.modules.settings.models import NotificationPreferences
from studysphere.core.modules.user.models import ProfileView
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse
from studysphere.web.session_cookie import clear_session_cookie, set_session_cookie

router: APIRouter = APIRouter(tags=["profile"])


class UpdateProfileRequest(BaseModel):
    """Profile fields to change; omitted fields are kept."""

    name: str | None = Field(None, min_length=1)
    display_name: str | None = None
    bio: str | None = Field(None, max_length=1000)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password, at least 6 characters")
    confirm_password: str = Field(..., description="Must equal new_password")


@router.get(
    "/profile",
    summary="Get profile",
    description="Profile of the current user with note, task and focus statistics.",
    operation_id="getProfile",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def get_profile(app: AppDep, token: SessionTokenDep) -> ProfileView:
    return await app.get_profile(token)


@router.put(
    "/profile",
    summary="Update profile",
    operation_id="updateProfile",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def update_profile(request: UpdateProfileRequest, app: AppDep, token: SessionTokenDep) -> ProfileView:
    return await app.update_profile(token, request.name, request.display_name, request.bio)


@router.delete(
    "/profile",
    summary="Delete account",
    description="Delete the account with all notes, tasks, focus sessions and settings, and clear the cookie.",
    operation_id="deleteAccount",
    status_code=204,
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def delete_account(app: AppDep, token: SessionTokenDep, response: Response) -> None:
    await app.delete_account(token)
    clear_session_cookie(response, app.config)


@router.put(
    "/profile/password",
    summary="Change password",
    description=(
        "Change the password. Every previously issued session token stops working; "
        "a new session cookie is set for the current client."
    ),
    operation_id="changePassword",
    status_code=204,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed or current password is incorrect"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def change_password(request: ChangePasswordRequest, app: AppDep, token: SessionTokenDep, response: Response) -> None:
    new_token = await app.change_password(
        token, request.current_password, request.new_password, request.confirm_password
    )
    set_session_cookie(response, new_token, app.config)


@router.get(
    "/profile/settings",
    summary="Get notification preferences",
    operation_id="getNotificationPreferences",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def get_notification_preferences(app: AppDep, token: SessionTokenDep) -> NotificationPreferences:
    return await app.get_notification_preferences(token)


@router.put(
    "/profile/settings",
    summary="Update notification preferences",
    operation_id="updateNotificationPreferences",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def update_notification_preferences(
    request: NotificationPreferences, app: AppDep, token: SessionTokenDep
) -> NotificationPreferences:
    return await app.update_notification_preferences(token, request)
