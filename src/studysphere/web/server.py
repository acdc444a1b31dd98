from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studysphere.app import App
from studysphere.config import Config
from studysphere.errors import UserError
from studysphere.web.error_handlers import general_exception_handler, user_error_handler
from studysphere.web.openapi import set_custom_openapi
from studysphere.web.routers import (
    auth_router,
    bookmarks_router,
    daily_reviews_router,
    dashboard_router,
    decks_router,
    flashcards_router,
    focus_sessions_router,
    notes_router,
    profile_router,
    settings_router,
    tasks_router,
)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Study Sphere API", lifespan=lifespan)
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(profile_router, prefix="/api/v1")
    app.include_router(settings_router, prefix="/api/v1")
    # Before notes_router so /notes/bookmarks is not captured by /notes/{note_id}
    app.include_router(bookmarks_router, prefix="/api/v1")
    app.include_router(notes_router, prefix="/api/v1")
    app.include_router(tasks_router, prefix="/api/v1")
    app.include_router(focus_sessions_router, prefix="/api/v1")
    app.include_router(decks_router, prefix="/api/v1")
    app.include_router(flashcards_router, prefix="/api/v1")
    app.include_router(daily_reviews_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
