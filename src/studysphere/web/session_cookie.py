"""Writing and clearing the session cookie."""

from fastapi import Response

from studysphere.config import Config
from studysphere.core.modules.session.models import SESSION_COOKIE_NAME, SessionToken


def set_session_cookie(response: Response, token: SessionToken, config: Config) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=config.session_max_age,
        path="/",
        secure=config.secure_cookies,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response, config: Config) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        secure=config.secure_cookies,
        httponly=True,
        samesite="lax",
    )
