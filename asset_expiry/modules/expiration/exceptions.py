"""Expiration check specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from asset_expiry.infrastructure.events import HandlerFailure


class ExpirationError(Exception):
    """Base class for expiration check errors."""

    code = "expiration_error"


class ConfigurationError(ExpirationError):
    """Raised when a required named query cannot be resolved."""

    code = "configuration"


class NotValidatedError(ExpirationError):
    """Raised when a run is requested before startup validation succeeded."""

    code = "not_validated"


class QueryError(ExpirationError):
    """Raised when a selection query fails during a run."""

    code = "query"


class InvariantViolation(ExpirationError):
    """Raised when a selected asset does not satisfy its selection predicate."""

    code = "invariant_violation"

    def __init__(self, message: str, *, query_name: str, asset_id: str) -> None:
        super().__init__(message)
        self.query_name = query_name
        self.asset_id = asset_id


class EventDispatchError(ExpirationError):
    """Raised after a run in which at least one event handler failed."""

    code = "event_dispatch"

    def __init__(self, failures: Sequence["HandlerFailure"]) -> None:
        super().__init__(f"{len(failures)} event handler invocation(s) failed")
        self.failures = list(failures)


class RunInProgressError(ExpirationError):
    """Raised when a trigger fires while another run is still active."""

    code = "run_in_progress"
