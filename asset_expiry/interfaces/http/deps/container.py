"""Access to the application container bound to the running app."""

from fastapi import Depends, Request

from asset_expiry.core.container import ApplicationContainer
from asset_expiry.modules.expiration.trigger import ExpirationTrigger


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_expiration_trigger(
    container: ApplicationContainer = Depends(get_app_container),
) -> ExpirationTrigger:
    return container.trigger


__all__ = ["get_app_container", "get_expiration_trigger"]
