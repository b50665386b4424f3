from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from asset_expiry.db.models import Asset as AssetModel
from asset_expiry.infrastructure.database import build_session_factory, init_db, unit_of_work
from asset_expiry.infrastructure.events import EventBus
from asset_expiry.modules.expiration import AssetExpired, AssetUnexpired
from asset_expiry.modules.expiration.service import ExpirationService

NOW = datetime(2026, 10, 19, 12, 0, 0)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=1)


def memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
async def engine():
    engine = memory_engine()
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def bus():
    return EventBus()


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of(self, event_type):
        return [event for event in self.events if isinstance(event, event_type)]

    def ids(self, event_type):
        return [event.asset.id for event in self.of(event_type)]


@pytest.fixture
def recorder(bus):
    rec = Recorder()
    bus.subscribe(AssetExpired, rec)
    bus.subscribe(AssetUnexpired, rec)
    return rec


@pytest.fixture
def add_asset(session_factory):
    async def _add(name, *, expires_at=None, expired=False, asset_id=None):
        async with unit_of_work(session_factory) as session:
            model = AssetModel(name=name, expires_at=expires_at, expired=expired)
            if asset_id is not None:
                model.id = asset_id
            session.add(model)
            await session.flush()
            return model.id

    return _add


@pytest.fixture
def make_service(session_factory, bus):
    def _make(**kwargs):
        kwargs.setdefault("clock", lambda: NOW)
        return ExpirationService(session_factory, bus, **kwargs)

    return _make
