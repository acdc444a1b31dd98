"""Signing and verification of session tokens.

Tokens are HS256 JWTs carrying `userId`, `email` and `ver` plus the
standard `iat`/`exp` claims. Verification either yields the full claims or
nothing: a token is never partially trusted.
"""

from datetime import datetime, timedelta

import jwt
import pydantic
import structlog

from studysphere.core.modules.session.models import SessionClaims, SessionToken
from studysphere.utils import now

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
DEFAULT_MAX_AGE = 24 * 60 * 60


def issue_token(
    user_id: int,
    email: str,
    secret: str,
    *,
    version: int = 0,
    max_age: int = DEFAULT_MAX_AGE,
    issued_at: datetime | None = None,
) -> SessionToken:
    """Sign a new session token valid for `max_age` seconds from `issued_at`."""
    issued_at = issued_at or now()
    payload = {
        "userId": user_id,
        "email": email,
        "ver": version,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(seconds=max_age)).timestamp()),
    }
    return SessionToken(jwt.encode(payload, secret, algorithm=ALGORITHM))


def verify_token(token: str | None, secret: str) -> SessionClaims | None:
    """Return the claims of a valid token, or None.

    Missing, malformed, tampered and expired tokens are all rejected the same
    way; the reason is only logged.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat", "userId", "email"]},
        )
        return SessionClaims.model_validate(payload)
    except jwt.PyJWTError as e:
        logger.debug("session_token_rejected", reason=type(e).__name__)
    except pydantic.ValidationError:
        logger.debug("session_token_rejected", reason="invalid_claims")
    return None
