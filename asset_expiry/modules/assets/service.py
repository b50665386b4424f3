"""Asset service handling registration and recorded lifecycle state."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from asset_expiry.infrastructure.database.repositories import SqlAssetRepository

from .exceptions import AssetNotFoundError
from .models import Asset, AssetCreateInput
from .queries import NamedQueryRegistry, default_registry
from .repository import AssetRepository


@dataclass(slots=True)
class AssetService:
    repository: AssetRepository

    @classmethod
    def with_session(
        cls, session: AsyncSession, queries: NamedQueryRegistry | None = None
    ) -> "AssetService":
        return cls(SqlAssetRepository(session, queries or default_registry()))

    async def create_asset(self, data: AssetCreateInput) -> Asset:
        return await self.repository.create(data)

    async def get_asset(self, asset_id: str) -> Asset:
        asset = await self.repository.get_by_id(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return asset

    async def list_assets(self, skip: int = 0, limit: int = 50) -> tuple[list[Asset], int]:
        return await self.repository.list_assets(skip, limit)

    async def record_state(self, asset_id: str, *, expired: bool) -> Asset:
        """Record the lifecycle state a consumer has observed for an asset."""
        asset = await self.repository.set_expired(asset_id, expired)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return asset
