from typing import Any

import bcrypt
import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from studysphere.core.core import Service
from studysphere.core.modules.counter.models import CounterType
from studysphere.core.modules.user.models import User
from studysphere.core.modules.user.validators import normalize_email, validate_name, validate_password
from studysphere.errors import AuthenticationError, NotFoundError, ValidationError
from studysphere.utils import now

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    return bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))


class UserService(Service):
    """Manages user accounts and credentials."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        await self._collection.create_index([("email", 1)], unique=True)

    async def find_user(self, user_id: int) -> User | None:
        doc = await self._collection.find_one({"_id": user_id})
        return User.model_validate(doc) if doc else None

    async def get_user(self, user_id: int) -> User:
        """Get user by ID."""
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, email: str, password: str, name: str) -> User:
        """Register a new account with a hashed password."""
        email = normalize_email(email)
        name = validate_name(name)
        validate_password(password)
        if await self._collection.count_documents({"email": email}, limit=1):
            raise ValidationError("User already exists")

        user_id = await self.core.services.counter.get_next_sequence(CounterType.USER)
        user = User(id=user_id, email=email, name=name, password_hash=hash_password(password))
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Concurrent registration with the same email won the unique index
            raise ValidationError("User already exists") from e
        logger.info("user_registered", user_id=user_id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and record the sign-in time."""
        doc = await self._collection.find_one({"email": email.strip().lower()})
        if doc is None or not check_password(password, doc["password_hash"]):
            raise AuthenticationError("Invalid credentials")

        updated = await self._collection.find_one_and_update(
            {"_id": doc["_id"]},
            {"$set": {"last_sign_in": now()}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise AuthenticationError("Invalid credentials")
        return User.model_validate(updated)

    async def update_profile(self, user_id: int, name: str | None, display_name: str | None, bio: str | None) -> User:
        """Update editable profile fields; `None` leaves a field unchanged."""
        changes: dict[str, Any] = {"updated_at": now()}
        if name is not None:
            changes["name"] = validate_name(name)
        if display_name is not None:
            changes["display_name"] = display_name
        if bio is not None:
            changes["bio"] = bio

        doc = await self._collection.find_one_and_update(
            {"_id": user_id}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("User not found")
        return User.model_validate(doc)

    async def change_password(self, user_id: int, current_password: str, new_password: str, confirm_password: str) -> User:
        """Change password and revoke all session tokens issued before the change."""
        if not current_password or not new_password or not confirm_password:
            raise ValidationError("All fields are required")
        if new_password != confirm_password:
            raise ValidationError("New passwords do not match")
        validate_password(new_password)
        if current_password == new_password:
            raise ValidationError("New password must be different from current password")

        user = await self.get_user(user_id)
        if not check_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        doc = await self._collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"password_hash": hash_password(new_password), "updated_at": now()}, "$inc": {"token_version": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("User not found")
        logger.info("password_changed", user_id=user_id)
        return User.model_validate(doc)

    async def delete_user(self, user_id: int) -> None:
        """Delete the account document; owned records are removed by the caller."""
        result = await self._collection.delete_one({"_id": user_id})
        if result.deleted_count == 0:
            raise NotFoundError("User not found")
        logger.info("user_deleted", user_id=user_id)
