from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime
from uuid import UUID

import structlog

from studysphere.config import Config
from studysphere.core.core import Core
from studysphere.core.modules.bookmark.models import Bookmark, BookmarkedNote
from studysphere.core.modules.dashboard.models import DashboardStats
from studysphere.core.modules.deck.models import Deck, DeckInput, DeckUpdate
from studysphere.core.modules.flashcard.models import Flashcard, FlashcardBulkInput, FlashcardInput, FlashcardUpdate
from studysphere.core.modules.focus.models import (
    FocusSession,
    FocusSessionInput,
    FocusSessionUpdate,
    FocusStats,
    StatsPeriod,
)
from studysphere.core.modules.note.models import Note, NoteInput, NoteUpdate
from studysphere.core.modules.review.models import DailyReview, DailyReviewInput
from studysphere.core.modules.session.models import SessionClaims, SessionToken, SessionView
from studysphere.core.modules.settings.models import NotificationPreferences, SettingsUpdate, UserSettings
from studysphere.core.modules.task.models import Task, TaskInput, TaskStatus, TaskUpdate
from studysphere.core.modules.user.models import ProfileView, User, UserView
from studysphere.core.pagination import PaginationResult

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations.

    Every operation on user data starts with `access.ensure_authenticated`,
    and the resulting user id is the only owner key passed to services.
    """

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def verify_session(self, token: str | None) -> SessionClaims | None:
        """Signature and expiry check without touching the database."""
        return self._core.services.session.verify_session(token)

    # === Auth ===
    async def register(self, email: str, password: str, name: str) -> tuple[UserView, SessionToken]:
        """Create an account and sign the new user in."""
        user = await self._core.services.user.create_user(email, password, name)
        return UserView.from_domain(user), self._core.services.session.issue_session(user)

    async def login(self, email: str, password: str) -> tuple[UserView, SessionToken]:
        user = await self._core.services.user.authenticate(email, password)
        logger.info("user_logged_in", user_id=user.id)
        return UserView.from_domain(user), self._core.services.session.issue_session(user)

    async def logout(self, token: str | None) -> None:
        """Nothing to clear server-side; the caller deletes the cookie."""
        claims = self.verify_session(token)
        if claims is not None:
            logger.info("user_logged_out", user_id=claims.user_id)

    async def get_session(self, token: str | None) -> SessionView:
        claims = await self._core.services.access.ensure_authenticated(token)
        return SessionView(user_id=claims.user_id, email=claims.email)

    # === Profile ===
    async def get_profile(self, token: str | None) -> ProfileView:
        user = await self._core.services.access.ensure_user(token)
        return await self._build_profile(user)

    async def update_profile(
        self, token: str | None, name: str | None, display_name: str | None, bio: str | None
    ) -> ProfileView:
        claims = await self._core.services.access.ensure_authenticated(token)
        user = await self._core.services.user.update_profile(claims.user_id, name, display_name, bio)
        return await self._build_profile(user)

    async def change_password(
        self, token: str | None, current_password: str, new_password: str, confirm_password: str
    ) -> SessionToken:
        """Change password and return a fresh token; every earlier token stops working."""
        claims = await self._core.services.access.ensure_authenticated(token)
        user = await self._core.services.user.change_password(
            claims.user_id, current_password, new_password, confirm_password
        )
        return self._core.services.session.issue_session(user)

    async def delete_account(self, token: str | None) -> None:
        """Delete the user and everything they own."""
        claims = await self._core.services.access.ensure_authenticated(token)
        services = self._core.services
        # Dependent records first, the account last
        await services.bookmark.delete_bookmarks_by_user(claims.user_id)
        await services.flashcard.delete_flashcards_by_user(claims.user_id)
        await services.deck.delete_decks_by_user(claims.user_id)
        await services.review.delete_reviews_by_user(claims.user_id)
        await services.note.delete_notes_by_user(claims.user_id)
        await services.task.delete_tasks_by_user(claims.user_id)
        await services.focus.delete_sessions_by_user(claims.user_id)
        await services.settings.delete_settings_by_user(claims.user_id)
        await services.user.delete_user(claims.user_id)

    async def get_notification_preferences(self, token: str | None) -> NotificationPreferences:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.settings.get_notification_preferences(claims.user_id)

    async def update_notification_preferences(
        self, token: str | None, preferences: NotificationPreferences
    ) -> NotificationPreferences:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.settings.update_notification_preferences(claims.user_id, preferences)

    # === Settings ===
    async def get_settings(self, token: str | None) -> UserSettings:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.settings.get_settings(claims.user_id)

    async def update_settings(self, token: str | None, data: SettingsUpdate) -> UserSettings:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.settings.update_settings(claims.user_id, data)

    # === Notes ===
    async def list_notes(
        self, token: str | None, limit: int = 50, offset: int = 0, category: str | None = None
    ) -> PaginationResult[Note]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.note.list_notes(claims.user_id, limit, offset, category)

    async def get_note(self, token: str | None, note_id: UUID) -> Note:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.note.get_note(claims.user_id, note_id)

    async def create_note(self, token: str | None, data: NoteInput) -> Note:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.note.create_note(claims.user_id, data)

    async def update_note(self, token: str | None, note_id: UUID, data: NoteUpdate) -> Note:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.note.update_note(claims.user_id, note_id, data)

    async def delete_note(self, token: str | None, note_id: UUID) -> None:
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.note.delete_note(claims.user_id, note_id)

    async def list_bookmarks(self, token: str | None) -> list[BookmarkedNote]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.bookmark.list_bookmarks(claims.user_id)

    async def add_bookmark(self, token: str | None, note_id: UUID) -> Bookmark:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.bookmark.add_bookmark(claims.user_id, note_id)

    async def remove_bookmark(self, token: str | None, note_id: UUID) -> None:
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.bookmark.remove_bookmark(claims.user_id, note_id)

    # === Tasks ===
    async def list_tasks(
        self, token: str | None, limit: int = 50, offset: int = 0, status: TaskStatus | None = None
    ) -> PaginationResult[Task]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.task.list_tasks(claims.user_id, limit, offset, status)

    async def get_task(self, token: str | None, task_id: UUID) -> Task:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.task.get_task(claims.user_id, task_id)

    async def create_task(self, token: str | None, data: TaskInput) -> Task:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.task.create_task(claims.user_id, data)

    async def update_task(self, token: str | None, task_id: UUID, data: TaskUpdate) -> Task:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.task.update_task(claims.user_id, task_id, data)

    async def delete_task(self, token: str | None, task_id: UUID) -> None:
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.task.delete_task(claims.user_id, task_id)

    # === Focus sessions ===
    async def list_focus_sessions(
        self, token: str | None, limit: int = 10, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> list[FocusSession]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.focus.list_sessions(claims.user_id, limit, start_date, end_date)

    async def get_focus_session(self, token: str | None, session_id: UUID) -> FocusSession:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.focus.get_session(claims.user_id, session_id)

    async def create_focus_session(self, token: str | None, data: FocusSessionInput) -> FocusSession:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.focus.create_session(claims.user_id, data)

    async def update_focus_session(self, token: str | None, session_id: UUID, data: FocusSessionUpdate) -> FocusSession:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.focus.update_session(claims.user_id, session_id, data)

    async def delete_focus_session(self, token: str | None, session_id: UUID) -> None:
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.focus.delete_session(claims.user_id, session_id)

    async def get_focus_stats(self, token: str | None, period: StatsPeriod) -> FocusStats:
        claims = await self._core.services.access.ensure_authenticated(token)
        tz = await self._core.services.settings.resolve_timezone(claims.user_id)
        return await self._core.services.focus.get_stats(claims.user_id, period, tz)

    # === Decks and flashcards ===
    async def list_decks(self, token: str | None) -> list[Deck]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.deck.list_decks(claims.user_id)

    async def get_deck(self, token: str | None, deck_id: UUID) -> Deck:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.deck.get_deck(claims.user_id, deck_id)

    async def create_deck(self, token: str | None, data: DeckInput) -> Deck:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.deck.create_deck(claims.user_id, data)

    async def update_deck(self, token: str | None, deck_id: UUID, data: DeckUpdate) -> Deck:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.deck.update_deck(claims.user_id, deck_id, data)

    async def delete_deck(self, token: str | None, deck_id: UUID) -> None:
        """Delete a deck and all of its flashcards."""
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.deck.delete_deck(claims.user_id, deck_id)

    async def list_deck_flashcards(self, token: str | None, deck_id: UUID) -> list[Flashcard]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.list_deck_flashcards(claims.user_id, deck_id)

    async def list_flashcards(self, token: str | None, deck_id: UUID | None = None) -> list[Flashcard]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.list_flashcards(claims.user_id, deck_id)

    async def get_flashcard(self, token: str | None, flashcard_id: UUID) -> Flashcard:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.get_flashcard(claims.user_id, flashcard_id)

    async def create_flashcard(self, token: str | None, data: FlashcardInput) -> Flashcard:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.create_flashcard(claims.user_id, data)

    async def create_flashcards(self, token: str | None, data: FlashcardBulkInput) -> list[Flashcard]:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.create_flashcards(claims.user_id, data)

    async def update_flashcard(self, token: str | None, flashcard_id: UUID, data: FlashcardUpdate) -> Flashcard:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.flashcard.update_flashcard(claims.user_id, flashcard_id, data)

    async def delete_flashcard(self, token: str | None, flashcard_id: UUID) -> None:
        claims = await self._core.services.access.ensure_authenticated(token)
        await self._core.services.flashcard.delete_flashcard(claims.user_id, flashcard_id)

    # === Daily reviews ===
    async def list_daily_reviews(self, token: str | None, day: date | None = None, limit: int = 10) -> list[DailyReview]:
        """Latest reviews, or every review of `day` in the user's timezone."""
        claims = await self._core.services.access.ensure_authenticated(token)
        if day is None:
            return await self._core.services.review.list_reviews(claims.user_id, limit)
        tz = await self._core.services.settings.resolve_timezone(claims.user_id)
        return await self._core.services.review.get_reviews_for_day(claims.user_id, day, tz)

    async def create_daily_review(self, token: str | None, data: DailyReviewInput) -> DailyReview:
        claims = await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.review.create_review(claims.user_id, data)

    # === Dashboard ===
    async def get_dashboard_stats(self, token: str | None) -> DashboardStats:
        claims = await self._core.services.access.ensure_authenticated(token)
        services = self._core.services
        tz = await services.settings.resolve_timezone(claims.user_id)
        streaks = await services.focus.get_streaks(claims.user_id, tz)
        return DashboardStats(
            total_notes=await services.note.count_notes(claims.user_id),
            total_tasks=await services.task.count_tasks(claims.user_id),
            completed_tasks=await services.task.count_tasks(claims.user_id, TaskStatus.COMPLETED),
            total_focus_sessions=await services.focus.count_sessions(claims.user_id),
            total_study_time=await services.focus.get_total_study_minutes(claims.user_id),
            streak_days=streaks.current_streak,
            longest_streak=streaks.longest_streak,
        )

    # === Private helpers ===
    async def _build_profile(self, user: User) -> ProfileView:
        services = self._core.services
        tz = await services.settings.resolve_timezone(user.id)
        streaks = await services.focus.get_streaks(user.id, tz)
        return ProfileView(
            id=user.id,
            email=user.email,
            name=user.name,
            display_name=user.display_name,
            bio=user.bio,
            last_sign_in=user.last_sign_in,
            created_at=user.created_at,
            study_streak=streaks.current_streak,
            total_notes=await services.note.count_notes(user.id),
            total_tasks=await services.task.count_tasks(user.id),
            completed_tasks=await services.task.count_tasks(user.id, TaskStatus.COMPLETED),
            total_study_time=await services.focus.get_total_study_minutes(user.id),
        )
