"""SQLAlchemy-backed repository implementations."""

from .asset_repository import SqlAssetRepository

__all__ = [
    "SqlAssetRepository",
]
