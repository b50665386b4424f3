"""Named selection queries over the asset table.

A named query maps a well-known string key to a statement builder taking the
reference time of the run. The store resolves names through a
:class:`NamedQueryRegistry`, so deployments can swap definitions without
touching the checker.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable

from sqlalchemy import Select, or_, select

from asset_expiry.db.models import Asset as AssetModel

EXPIRING = "expiring-assets"
UNEXPIRING = "unexpiring-assets"


@dataclass(frozen=True, slots=True)
class NamedQuery:
    name: str
    build: Callable[[datetime], Select]


class UnknownQueryError(LookupError):
    """Raised when a query name has no registered definition."""


class NamedQueryRegistry:
    def __init__(self, queries: Iterable[NamedQuery] = ()) -> None:
        self._queries: dict[str, NamedQuery] = {}
        for query in queries:
            self.register(query)

    def register(self, query: NamedQuery) -> None:
        self._queries[query.name] = query

    def get(self, name: str) -> NamedQuery:
        try:
            return self._queries[name]
        except KeyError:
            raise UnknownQueryError(f"No named query registered as {name!r}") from None

    def names(self) -> list[str]:
        return list(self._queries)


def select_expiring(now: datetime) -> Select:
    return (
        select(AssetModel)
        .where(
            AssetModel.expired.is_(False),
            AssetModel.expires_at.is_not(None),
            AssetModel.expires_at <= now,
        )
        .order_by(AssetModel.expires_at, AssetModel.id)
    )


def select_unexpiring(now: datetime) -> Select:
    return (
        select(AssetModel)
        .where(
            AssetModel.expired.is_(True),
            or_(AssetModel.expires_at.is_(None), AssetModel.expires_at > now),
        )
        .order_by(AssetModel.expires_at, AssetModel.id)
    )


def default_registry() -> NamedQueryRegistry:
    return NamedQueryRegistry(
        [
            NamedQuery(EXPIRING, select_expiring),
            NamedQuery(UNEXPIRING, select_unexpiring),
        ]
    )
