from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.config import Config


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that imports and initializes every service module."""

    from studysphere.core.modules.access.service import AccessService  # noqa: PLC0415
    from studysphere.core.modules.bookmark.service import BookmarkService  # noqa: PLC0415
    from studysphere.core.modules.counter.service import CounterService  # noqa: PLC0415
    from studysphere.core.modules.deck.service import DeckService  # noqa: PLC0415
    from studysphere.core.modules.flashcard.service import FlashcardService  # noqa: PLC0415
    from studysphere.core.modules.focus.service import FocusService  # noqa: PLC0415
    from studysphere.core.modules.note.service import NoteService  # noqa: PLC0415
    from studysphere.core.modules.review.service import DailyReviewService  # noqa: PLC0415
    from studysphere.core.modules.session.service import SessionService  # noqa: PLC0415
    from studysphere.core.modules.settings.service import SettingsService  # noqa: PLC0415
    from studysphere.core.modules.task.service import TaskService  # noqa: PLC0415
    from studysphere.core.modules.user.service import UserService  # noqa: PLC0415

    counter: CounterService
    user: UserService
    session: SessionService
    access: AccessService
    settings: SettingsService
    note: NoteService
    bookmark: BookmarkService
    task: TaskService
    focus: FocusService
    deck: DeckService
    flashcard: FlashcardService
    review: DailyReviewService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []
        self._database = database

        # (attribute_name, module_path, class_name); counter must start before user
        service_configs = [
            ("counter", "studysphere.core.modules.counter.service", "CounterService"),
            ("user", "studysphere.core.modules.user.service", "UserService"),
            ("session", "studysphere.core.modules.session.service", "SessionService"),
            ("access", "studysphere.core.modules.access.service", "AccessService"),
            ("settings", "studysphere.core.modules.settings.service", "SettingsService"),
            ("note", "studysphere.core.modules.note.service", "NoteService"),
            ("bookmark", "studysphere.core.modules.bookmark.service", "BookmarkService"),
            ("task", "studysphere.core.modules.task.service", "TaskService"),
            ("focus", "studysphere.core.modules.focus.service", "FocusService"),
            ("deck", "studysphere.core.modules.deck.service", "DeckService"),
            ("flashcard", "studysphere.core.modules.flashcard.service", "FlashcardService"),
            ("review", "studysphere.core.modules.review.service", "DailyReviewService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, MongoDB, and auto-register services."""
        self.config = config
        # tz_aware so that stored timestamps come back as UTC-aware datetimes
        self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
