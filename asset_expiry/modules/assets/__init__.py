"""Asset domain exports."""

from .exceptions import AssetError, AssetNotFoundError
from .models import Asset, AssetCreateInput, is_expiring, is_unexpiring, utcnow
from .queries import EXPIRING, UNEXPIRING, NamedQuery, NamedQueryRegistry, default_registry

__all__ = [
    "Asset",
    "AssetCreateInput",
    "AssetError",
    "AssetNotFoundError",
    "EXPIRING",
    "UNEXPIRING",
    "NamedQuery",
    "NamedQueryRegistry",
    "default_registry",
    "is_expiring",
    "is_unexpiring",
    "utcnow",
]
