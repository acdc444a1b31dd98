from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from studysphere.app import App
from studysphere.core.modules.session.models import SESSION_COOKIE_NAME, SessionToken
from studysphere.errors import AuthenticationError

cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_token(
    app: Annotated[App, Depends(get_app)],
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> SessionToken:
    """Read the session cookie and reject it early if the signature or expiry is bad.

    Revocation is checked later by the App facade, which needs the database.
    """
    if token_cookie and app.verify_session(token_cookie) is not None:
        return SessionToken(token_cookie)
    raise AuthenticationError


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[SessionToken, Depends(get_session_token)]
OptionalSessionTokenDep = Annotated[str | None, Depends(cookie_scheme)]
