"""Lifecycle notifications published by the expiration check."""

from __future__ import annotations

from dataclasses import dataclass

from asset_expiry.modules.assets.models import Asset


@dataclass(frozen=True, slots=True)
class AssetExpired:
    asset: Asset


@dataclass(frozen=True, slots=True)
class AssetUnexpired:
    asset: Asset
