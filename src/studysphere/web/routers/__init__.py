from studysphere.web.routers.auth import router as auth_router
from studysphere.web.routers.bookmarks import router as bookmarks_router
from studysphere.web.routers.daily_reviews import router as daily_reviews_router
from studysphere.web.routers.dashboard import router as dashboard_router
from studysphere.web.routers.decks import router as decks_router
from studysphere.web.routers.flashcards import router as flashcards_router
from studysphere.web.routers.focus_sessions import router as focus_sessions_router
from studysphere.web.routers.notes import router as notes_router
from studysphere.web.routers.profile import router as profile_router
from studysphere.web.routers.settings import router as settings_router
from studysphere.web.routers.tasks import router as tasks_router

__all__ = [
    "auth_router",
    "bookmarks_router",
    "daily_reviews_router",
    "dashboard_router",
    "decks_router",
    "flashcards_router",
    "focus_sessions_router",
    "notes_router",
    "profile_router",
    "settings_router",
    "tasks_router",
]
