"""Expiration check exports.

The checker itself lives in :mod:`asset_expiry.modules.expiration.service`.
"""

from .events import AssetExpired, AssetUnexpired
from .exceptions import (
    ConfigurationError,
    EventDispatchError,
    ExpirationError,
    InvariantViolation,
    NotValidatedError,
    QueryError,
    RunInProgressError,
)

__all__ = [
    "AssetExpired",
    "AssetUnexpired",
    "ConfigurationError",
    "EventDispatchError",
    "ExpirationError",
    "InvariantViolation",
    "NotValidatedError",
    "QueryError",
    "RunInProgressError",
]
