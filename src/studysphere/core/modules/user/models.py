from datetime import datetime

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import now


class User(MongoModel):
    """User domain model with credentials."""

    # Sequential integer issued by CounterService, not a UUID
    id: int = Field(alias="_id", serialization_alias="id")  # type: ignore[assignment]
    email: str
    name: str
    password_hash: str  # bcrypt hash
    display_name: str | None = None
    bio: str | None = None
    last_sign_in: datetime | None = None
    token_version: int = 0  # Embedded in session tokens; bumping it revokes every issued token
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: int = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Full name")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        return cls(id=user.id, email=user.email, name=user.name)


class ProfileView(BaseModel):
    """Profile of the current user with study statistics."""

    id: int
    email: str
    name: str
    display_name: str | None
    bio: str | None
    last_sign_in: datetime | None
    created_at: datetime
    study_streak: int = Field(..., description="Current focus-session streak in days")
    total_notes: int
    total_tasks: int
    completed_tasks: int
    total_study_time: int = Field(..., description="Minutes spent in completed focus sessions")
