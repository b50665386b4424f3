"""Domain models for time-bound assets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as naive UTC, matching how ``expires_at`` is stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(slots=True)
class Asset:
    id: str
    name: str
    expires_at: Optional[datetime]
    expired: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class AssetCreateInput:
    name: str
    expires_at: Optional[datetime] = None


def is_expiring(asset: Asset, now: datetime) -> bool:
    """Validity has ended but nobody has recorded the asset as expired yet."""
    if asset.expired or asset.expires_at is None:
        return False
    return as_naive_utc(asset.expires_at) <= as_naive_utc(now)


def is_unexpiring(asset: Asset, now: datetime) -> bool:
    """Recorded as expired, yet valid again (boundary moved or cleared)."""
    if not asset.expired:
        return False
    return asset.expires_at is None or as_naive_utc(asset.expires_at) > as_naive_utc(now)
