"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from asset_expiry.core.config import Settings, get_settings
from asset_expiry.infrastructure.database.session import build_engine, build_session_factory
from asset_expiry.infrastructure.events import EventBus
from asset_expiry.modules.assets.queries import NamedQueryRegistry, default_registry
from asset_expiry.modules.expiration.service import ExpirationService
from asset_expiry.modules.expiration.trigger import ExpirationTrigger


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    bus: EventBus
    queries: NamedQueryRegistry
    expiration: ExpirationService
    trigger: ExpirationTrigger = field(init=False)

    def __post_init__(self) -> None:
        self.trigger = ExpirationTrigger(self.expiration)


def build_container(
    settings: Settings,
    *,
    engine: AsyncEngine | None = None,
    bus: EventBus | None = None,
    queries: NamedQueryRegistry | None = None,
) -> ApplicationContainer:
    engine = engine or build_engine(settings)
    session_factory = build_session_factory(engine)
    bus = bus or EventBus()
    if queries is None:
        queries = default_registry()
    return ApplicationContainer(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        bus=bus,
        queries=queries,
        expiration=ExpirationService.from_settings(settings, session_factory, bus, queries),
    )


@lru_cache()
def get_container() -> ApplicationContainer:
    return build_container(get_settings())


__all__ = ["ApplicationContainer", "build_container", "get_container"]
