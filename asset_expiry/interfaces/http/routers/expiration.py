"""Command endpoint triggering one expiration check."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from asset_expiry.core.container import ApplicationContainer
from asset_expiry.interfaces.http.deps import get_app_container, get_expiration_trigger
from asset_expiry.modules.expiration import (
    ConfigurationError,
    EventDispatchError,
    ExpirationError,
    InvariantViolation,
    NotValidatedError,
    QueryError,
    RunInProgressError,
)
from asset_expiry.modules.expiration.trigger import ExpirationTrigger
from asset_expiry.schemas import ErrorDetail, ExpirationCheckResponse, ExpirationStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS = {
    NotValidatedError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ConfigurationError: status.HTTP_503_SERVICE_UNAVAILABLE,
    RunInProgressError: status.HTTP_409_CONFLICT,
    QueryError: status.HTTP_502_BAD_GATEWAY,
    InvariantViolation: status.HTTP_500_INTERNAL_SERVER_ERROR,
    EventDispatchError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_error(exc: ExpirationError) -> HTTPException:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = ErrorDetail(code=exc.code, message=str(exc))
    return HTTPException(status_code=status_code, detail=detail.model_dump())


@router.post("/check", response_model=ExpirationCheckResponse, summary="Run one expiration check")
async def run_check(trigger: ExpirationTrigger = Depends(get_expiration_trigger)):
    try:
        await trigger.fire()
    except ExpirationError as exc:
        logger.error("Expiration check failed [%s]: %s", exc.code, exc)
        raise to_http_error(exc) from exc
    return ExpirationCheckResponse()


@router.get("/status", response_model=ExpirationStatusResponse)
async def check_status(container: ApplicationContainer = Depends(get_app_container)):
    return ExpirationStatusResponse(
        validated=container.expiration.validated,
        running=container.trigger.running,
        invariant_policy=container.settings.invariant_policy,
        handler_failure_policy=container.settings.handler_failure_policy,
    )
