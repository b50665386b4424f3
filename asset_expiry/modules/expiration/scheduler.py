"""Background task firing the expiration trigger on a fixed interval."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .exceptions import ExpirationError, RunInProgressError
from .trigger import ExpirationTrigger

logger = logging.getLogger(__name__)


class ExpirationScheduler:
    def __init__(self, trigger: ExpirationTrigger, interval_seconds: float) -> None:
        self._trigger = trigger
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def started(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.started:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("Expiration scheduler started, interval %ss", self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await task

    async def _loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval_seconds)
                try:
                    await self._trigger.fire()
                except RunInProgressError:
                    logger.warning("Previous expiration check still running, tick skipped")
                except ExpirationError as exc:
                    logger.error("Scheduled expiration check failed [%s]: %s", exc.code, exc)
                except Exception:  # pylint: disable=broad-except
                    logger.exception("Scheduled expiration check crashed")
        except asyncio.CancelledError:
            logger.debug("Expiration scheduler cancelled")
