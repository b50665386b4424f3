"""In-process publish/subscribe bus keyed by event class."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Type, Union

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Union[None, Awaitable[None]]]


@dataclass(frozen=True, slots=True)
class HandlerFailure:
    event: Any
    handler: Handler
    error: Exception


class EventBus:
    """Delivers each published event to the handlers subscribed to its class.

    Handlers run one after another in registration order. Both plain and
    coroutine functions are accepted. A failing handler is logged and
    reported back to the publisher; it never stops delivery to the handlers
    after it.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[Any], List[Handler]] = {}

    def subscribe(self, event_type: Type[Any], handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Type[Any], handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def handlers_for(self, event_type: Type[Any]) -> List[Handler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: Any) -> List[HandlerFailure]:
        failures: List[HandlerFailure] = []
        for handler in self.handlers_for(type(event)):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:  # pylint: disable=broad-except
                logger.error(
                    "Handler %s failed for %s: %s",
                    getattr(handler, "__qualname__", repr(handler)),
                    type(event).__name__,
                    exc,
                    exc_info=exc,
                )
                failures.append(HandlerFailure(event=event, handler=handler, error=exc))
        return failures
