"""Periodic check publishing asset expiration transitions.

One run selects the assets whose end of validity has passed since they were
last recorded, then the assets that became valid again, and publishes one
event per asset for each class. The checker never writes to the store: once
a downstream consumer records the new state, the asset drops out of the
selection on the next run.

``validate()`` must succeed once before the first ``run()``. Overlapping runs
are not prevented here; callers that can fire concurrently go through
:class:`~asset_expiry.modules.expiration.trigger.ExpirationTrigger` or an
equivalent single-flight guard.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from asset_expiry.core.config import HandlerFailurePolicy, InvariantPolicy, Settings
from asset_expiry.infrastructure.database.repositories import SqlAssetRepository
from asset_expiry.infrastructure.database.session import unit_of_work
from asset_expiry.infrastructure.events import EventBus, HandlerFailure
from asset_expiry.modules.assets.models import Asset, is_expiring, is_unexpiring, utcnow
from asset_expiry.modules.assets.queries import (
    EXPIRING,
    UNEXPIRING,
    NamedQueryRegistry,
    default_registry,
)

from .events import AssetExpired, AssetUnexpired
from .exceptions import EventDispatchError, InvariantViolation, NotValidatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Transition:
    query_name: str
    label: str
    predicate: Callable[[Asset, datetime], bool]
    event_type: Callable[[Asset], Any]


TRANSITIONS = (
    Transition(EXPIRING, "expiring", is_expiring, AssetExpired),
    Transition(UNEXPIRING, "unexpiring", is_unexpiring, AssetUnexpired),
)


class ExpirationService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        bus: EventBus,
        *,
        queries: NamedQueryRegistry | None = None,
        invariant_policy: InvariantPolicy = "abort",
        handler_failure_policy: HandlerFailurePolicy = "isolate",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._bus = bus
        self._queries = queries if queries is not None else default_registry()
        self._invariant_policy = invariant_policy
        self._handler_failure_policy = handler_failure_policy
        self._clock = clock
        self._validated = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        bus: EventBus,
        queries: NamedQueryRegistry | None = None,
    ) -> "ExpirationService":
        return cls(
            session_factory,
            bus,
            queries=queries,
            invariant_policy=settings.invariant_policy,
            handler_failure_policy=settings.handler_failure_policy,
        )

    @property
    def validated(self) -> bool:
        return self._validated

    async def validate(self) -> None:
        """Resolve both named queries, raising ``ConfigurationError`` if either is unusable."""
        async with self._session_factory() as session:
            repository = SqlAssetRepository(session, self._queries)
            for transition in TRANSITIONS:
                logger.debug("Checking for presence of named query %s", transition.query_name)
                await repository.resolve(transition.query_name)
        self._validated = True

    async def run(self) -> None:
        if not self._validated:
            raise NotValidatedError("Named queries have not been validated; call validate() first")

        now = self._clock()
        failures: list[HandlerFailure] = []
        async with unit_of_work(self._session_factory) as session:
            repository = SqlAssetRepository(session, self._queries)
            seen: set[str] = set()
            for transition in TRANSITIONS:
                failures.extend(await self._check(repository, transition, now, seen))

            if failures and self._handler_failure_policy == "fail_run":
                raise EventDispatchError(failures)

    async def _check(
        self,
        repository: SqlAssetRepository,
        transition: Transition,
        now: datetime,
        seen: set[str],
    ) -> list[HandlerFailure]:
        assets = await repository.list_named(transition.query_name, now)
        logger.info("Found %d %s assets", len(assets), transition.label)

        accepted = [asset for asset in assets if self._verify(transition, asset, now, seen)]

        failures: list[HandlerFailure] = []
        for asset in accepted:
            failures.extend(await self._bus.publish(transition.event_type(asset)))
        return failures

    def _verify(self, transition: Transition, asset: Asset, now: datetime, seen: set[str]) -> bool:
        if asset.id in seen:
            problem = "was already selected earlier in this run"
        elif not transition.predicate(asset, now):
            problem = f"is not {transition.label} at {now.isoformat()}"
        elif any(other.predicate(asset, now) for other in TRANSITIONS if other is not transition):
            problem = f"also matches the opposite transition at {now.isoformat()}"
        else:
            seen.add(asset.id)
            return True

        message = f"Asset {asset.id} selected by {transition.query_name} {problem}"
        if self._invariant_policy == "abort":
            raise InvariantViolation(message, query_name=transition.query_name, asset_id=asset.id)
        logger.error("Invariant violation, skipping asset: %s", message)
        return False
