import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from asset_expiry import __version__
from asset_expiry.core.container import ApplicationContainer, get_container
from asset_expiry.core.logging import configure_logging
from asset_expiry.infrastructure.database.session import init_db
from asset_expiry.interfaces.http.routers import create_api_router
from asset_expiry.modules.expiration.scheduler import ExpirationScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    settings = container.settings
    configure_logging(settings)

    scheduler: Optional[ExpirationScheduler] = None
    try:
        if settings.database.create_tables:
            await init_db(container.engine)
        if settings.expiration.validate_on_startup:
            # a ConfigurationError here aborts startup
            await container.expiration.validate()
            logger.info("Named queries validated")

        if settings.check_interval_seconds > 0:
            scheduler = ExpirationScheduler(container.trigger, settings.check_interval_seconds)
            scheduler.start()
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        await container.engine.dispose()


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    container = container or get_container()
    settings = container.settings

    app = FastAPI(
        title=settings.project_name,
        description="Publishes asset expiration and re-validation events",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health")
    async def health():
        return {"status": "ok", "validated": container.expiration.validated}

    return app


app = create_app()
