"""Session token models."""

from datetime import UTC, datetime
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field, field_validator

SessionToken = NewType("SessionToken", str)

SESSION_COOKIE_NAME = "session"


class SessionClaims(BaseModel):
    """Decoded payload of a session token.

    Serialized with the wire names (`userId`, `email`, `ver`, `iat`, `exp`)
    so the JWT payload and the `/auth/session` response share one shape.
    """

    user_id: int = Field(..., alias="userId", strict=True)
    email: str
    version: int = Field(0, alias="ver")
    issued_at: datetime = Field(..., alias="iat")
    expires_at: datetime = Field(..., alias="exp")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("issued_at", "expires_at", mode="before")
    @classmethod
    def _from_epoch(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, UTC)
        return value


class SessionView(BaseModel):
    """Identity of the current session (API representation)."""

    user_id: int = Field(..., serialization_alias="userId", description="Authenticated user ID")
    email: str = Field(..., description="Email the session was issued for")
