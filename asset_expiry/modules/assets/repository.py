"""Repository protocol for asset persistence and named selections."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import Asset, AssetCreateInput


class AssetRepository(Protocol):
    async def list_named(self, query_name: str, now: datetime) -> list[Asset]:
        ...

    async def resolve(self, query_name: str) -> None:
        ...

    async def create(self, data: AssetCreateInput) -> Asset:
        ...

    async def get_by_id(self, asset_id: str) -> Asset | None:
        ...

    async def list_assets(self, skip: int, limit: int) -> tuple[list[Asset], int]:
        ...

    async def set_expired(self, asset_id: str, expired: bool) -> Asset | None:
        ...
