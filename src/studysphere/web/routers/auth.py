from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from studysphere.core.modules.session.models import SessionView
from studysphere.core.modules.user.models import UserView
from studysphere.web.deps import AppDep, OptionalSessionTokenDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse
from studysphere.web.session_cookie import clear_session_cookie, set_session_cookie

router: APIRouter = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Email address, used to log in")
    password: str = Field(..., min_length=1, description="Password, at least 6 characters")
    name: str = Field(..., min_length=1, description="Full name")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class AuthResponse(BaseModel):
    """Signed-in user; the session itself travels in the `session` cookie."""

    message: str
    user: UserView


class MessageResponse(BaseModel):
    message: str


@router.post(
    "/auth/register",
    summary="Register",
    description="Create an account and start a session (sets the `session` cookie).",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Invalid input or email already registered"},
    },
)
async def register(request: RegisterRequest, app: AppDep, response: Response) -> AuthResponse:
    user, token = await app.register(request.email, request.password, request.name)
    set_session_cookie(response, token, app.config)
    return AuthResponse(message="User created successfully", user=user)


@router.post(
    "/auth/login",
    summary="Log in",
    description="Authenticate with email and password; sets the `session` cookie for 24 hours.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(request: LoginRequest, app: AppDep, response: Response) -> AuthResponse:
    user, token = await app.login(request.email, request.password)
    set_session_cookie(response, token, app.config)
    return AuthResponse(message="Login successful", user=user)


@router.post(
    "/auth/logout",
    summary="Log out",
    description=(
        "Delete the session cookie. The token is not revoked server-side and stays valid "
        "until it expires if it is sent again."
    ),
    operation_id="logout",
)
async def logout(app: AppDep, token: OptionalSessionTokenDep, response: Response) -> MessageResponse:
    await app.logout(token)
    clear_session_cookie(response, app.config)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/auth/session",
    summary="Current session",
    description="Identity carried by the session cookie.",
    operation_id="getSession",
    responses={
        200: {"description": "Current session"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_session(app: AppDep, token: SessionTokenDep) -> SessionView:
    return await app.get_session(token)
