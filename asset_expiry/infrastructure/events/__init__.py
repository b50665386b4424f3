"""Event dispatch infrastructure."""

from .bus import EventBus, Handler, HandlerFailure

__all__ = ["EventBus", "Handler", "HandlerFailure"]
