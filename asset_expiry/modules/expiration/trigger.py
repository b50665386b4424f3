"""Entry point that turns an external invocation into one checker run."""

from __future__ import annotations

import asyncio
import logging

from .exceptions import RunInProgressError
from .service import ExpirationService

logger = logging.getLogger(__name__)


class ExpirationTrigger:
    """Runs the checker at most once at a time within this process.

    A trigger arriving while a run is active is rejected instead of queued.
    Exclusion across processes is up to whoever schedules them.
    """

    def __init__(self, service: ExpirationService) -> None:
        self._service = service
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def fire(self) -> None:
        if self._lock.locked():
            raise RunInProgressError("An expiration check is already running")
        async with self._lock:
            logger.debug("Expiration check triggered")
            await self._service.run()
