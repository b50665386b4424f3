import pytest
from sqlalchemy import select, text

from asset_expiry.db.models import Asset as AssetModel
from asset_expiry.infrastructure.database.repositories import SqlAssetRepository
from asset_expiry.modules.assets import (
    EXPIRING,
    UNEXPIRING,
    AssetCreateInput,
    NamedQuery,
    NamedQueryRegistry,
    default_registry,
)
from asset_expiry.modules.expiration import ConfigurationError, QueryError

from tests.conftest import FUTURE, NOW, PAST, memory_engine


async def test_named_selections_follow_predicates(session_factory, add_asset):
    due = await add_asset("due", expires_at=PAST)
    await add_asset("not-due", expires_at=FUTURE)
    await add_asset("forever", expires_at=None)
    await add_asset("already-expired", expires_at=PAST, expired=True)
    revived = await add_asset("revived", expires_at=FUTURE, expired=True)
    unbounded = await add_asset("unbounded", expires_at=None, expired=True)

    async with session_factory() as session:
        repository = SqlAssetRepository(session, default_registry())
        expiring = await repository.list_named(EXPIRING, NOW)
        unexpiring = await repository.list_named(UNEXPIRING, NOW)

    assert [asset.id for asset in expiring] == [due]
    assert {asset.id for asset in unexpiring} == {revived, unbounded}


async def test_expiring_selection_is_ordered_by_boundary(session_factory, add_asset):
    later = await add_asset("later", expires_at=PAST.replace(hour=5))
    earlier = await add_asset("earlier", expires_at=PAST.replace(hour=1))

    async with session_factory() as session:
        assets = await SqlAssetRepository(session, default_registry()).list_named(EXPIRING, NOW)

    assert [asset.id for asset in assets] == [earlier, later]


async def test_list_named_unknown_query(session_factory):
    async with session_factory() as session:
        repository = SqlAssetRepository(session, NamedQueryRegistry())
        with pytest.raises(QueryError):
            await repository.list_named(EXPIRING, NOW)


async def test_list_named_wraps_execution_errors(session_factory):
    registry = NamedQueryRegistry(
        [NamedQuery(EXPIRING, lambda now: select(AssetModel).where(text("no_such_column = 1")))]
    )
    async with session_factory() as session:
        with pytest.raises(QueryError) as excinfo:
            await SqlAssetRepository(session, registry).list_named(EXPIRING, NOW)
    assert excinfo.value.__cause__ is not None


async def test_list_named_wraps_builder_errors(session_factory):
    def broken(now):
        raise ValueError("bad definition")

    registry = NamedQueryRegistry([NamedQuery(EXPIRING, broken)])
    async with session_factory() as session:
        with pytest.raises(QueryError) as excinfo:
            await SqlAssetRepository(session, registry).list_named(EXPIRING, NOW)
    assert isinstance(excinfo.value.__cause__, ValueError)


async def test_resolve_unknown_column(session_factory):
    registry = NamedQueryRegistry(
        [NamedQuery(EXPIRING, lambda now: select(AssetModel).where(text("no_such_column = 1")))]
    )
    async with session_factory() as session:
        with pytest.raises(ConfigurationError) as excinfo:
            await SqlAssetRepository(session, registry).resolve(EXPIRING)
    assert excinfo.value.__cause__ is not None


async def test_resolve_known_queries(session_factory):
    async with session_factory() as session:
        repository = SqlAssetRepository(session, default_registry())
        await repository.resolve(EXPIRING)
        await repository.resolve(UNEXPIRING)


async def test_resolve_unknown_query(session_factory):
    async with session_factory() as session:
        with pytest.raises(ConfigurationError):
            await SqlAssetRepository(session, NamedQueryRegistry()).resolve(EXPIRING)


async def test_resolve_malformed_definition(session_factory):
    def broken(now):
        raise ValueError("bad definition")

    registry = NamedQueryRegistry([NamedQuery(EXPIRING, broken)])
    async with session_factory() as session:
        with pytest.raises(ConfigurationError) as excinfo:
            await SqlAssetRepository(session, registry).resolve(EXPIRING)
    assert isinstance(excinfo.value.__cause__, ValueError)


async def test_resolve_missing_table():
    from asset_expiry.infrastructure.database import build_session_factory

    engine = memory_engine()
    try:
        async with build_session_factory(engine)() as session:
            with pytest.raises(ConfigurationError, match="missing table"):
                await SqlAssetRepository(session, default_registry()).resolve(EXPIRING)
    finally:
        await engine.dispose()


async def test_create_get_list_and_record_state(session_factory):
    async with session_factory() as session:
        repository = SqlAssetRepository(session, default_registry())
        created = await repository.create(AssetCreateInput(name="poster", expires_at=FUTURE))
        await session.commit()

    assert created.expired is False
    assert created.expires_at == FUTURE

    async with session_factory() as session:
        repository = SqlAssetRepository(session, default_registry())
        fetched = await repository.get_by_id(created.id)
        assets, total = await repository.list_assets(0, 10)
        updated = await repository.set_expired(created.id, True)
        missing = await repository.set_expired("does-not-exist", True)

    assert fetched.name == "poster"
    assert total == 1
    assert [asset.id for asset in assets] == [created.id]
    assert updated.expired is True
    assert missing is None
