"""SQLAlchemy powered repository for asset persistence and named selections."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import Table, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from asset_expiry.db.models import Asset as AssetModel
from asset_expiry.modules.assets.models import Asset, AssetCreateInput, as_naive_utc, utcnow
from asset_expiry.modules.assets.queries import NamedQueryRegistry, UnknownQueryError
from asset_expiry.modules.expiration.exceptions import ConfigurationError, QueryError

logger = logging.getLogger(__name__)


def _missing_tables(session: Session, table_names: list[str]) -> list[str]:
    inspector = inspect(session.connection())
    return [name for name in table_names if not inspector.has_table(name)]


class SqlAssetRepository:
    def __init__(self, session: AsyncSession, queries: NamedQueryRegistry) -> None:
        self._session = session
        self._queries = queries

    async def list_named(self, query_name: str, now: datetime) -> list[Asset]:
        try:
            query = self._queries.get(query_name)
        except UnknownQueryError as exc:
            raise QueryError(str(exc)) from exc

        try:
            stmt = query.build(now)
        except Exception as exc:  # pylint: disable=broad-except
            raise QueryError(f"Named query {query_name!r} could not be built: {exc}") from exc

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise QueryError(f"Named query {query_name!r} failed: {exc}") from exc
        return [self._to_domain(model) for model in result.scalars().all()]

    async def resolve(self, query_name: str) -> None:
        """Check that ``query_name`` builds, reads existing tables and prepares against the store.

        The statement is executed with ``LIMIT 0`` so unknown columns or broken
        predicates surface here rather than on the first run. No rows are read.
        """
        try:
            query = self._queries.get(query_name)
            stmt = query.build(utcnow())
            stmt.compile(dialect=self._session.bind.dialect)
            tables = [
                from_.name for from_ in stmt.get_final_froms() if isinstance(from_, Table)
            ]
            missing = await self._session.run_sync(_missing_tables, tables)
        except Exception as exc:  # pylint: disable=broad-except
            raise ConfigurationError(
                f"Named query {query_name!r} cannot be resolved: {exc}"
            ) from exc

        if missing:
            raise ConfigurationError(
                f"Named query {query_name!r} reads missing table(s): {', '.join(missing)}"
            )

        try:
            await self._session.execute(stmt.limit(0))
        except SQLAlchemyError as exc:
            raise ConfigurationError(
                f"Named query {query_name!r} is rejected by the store: {exc}"
            ) from exc
        logger.debug("Named query %s resolved against %s", query_name, ", ".join(tables))

    async def create(self, data: AssetCreateInput) -> Asset:
        model = AssetModel(
            name=data.name,
            expires_at=as_naive_utc(data.expires_at) if data.expires_at else None,
            expired=False,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def get_by_id(self, asset_id: str) -> Asset | None:
        stmt = select(AssetModel).where(AssetModel.id == asset_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_assets(self, skip: int, limit: int) -> tuple[list[Asset], int]:
        query = select(AssetModel).order_by(AssetModel.created_at.desc(), AssetModel.id)
        if skip:
            query = query.offset(skip)
        if limit:
            query = query.limit(limit)

        result = await self._session.execute(query)
        assets = [self._to_domain(model) for model in result.scalars().all()]
        total = (await self._session.execute(select(func.count(AssetModel.id)))).scalar() or 0
        return assets, int(total)

    async def set_expired(self, asset_id: str, expired: bool) -> Asset | None:
        model = await self._session.get(AssetModel, asset_id)
        if model is None:
            return None
        model.expired = expired
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: AssetModel) -> Asset:
        return Asset(
            id=str(model.id),
            name=model.name,
            expires_at=model.expires_at,
            expired=bool(model.expired),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
