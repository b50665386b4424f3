"""Database session dependency providers."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from asset_expiry.core.container import ApplicationContainer
from asset_expiry.infrastructure.database.session import unit_of_work

from .container import get_app_container


async def get_db_session(
    container: ApplicationContainer = Depends(get_app_container),
) -> AsyncGenerator[AsyncSession, None]:
    async with unit_of_work(container.session_factory) as session:
        yield session


__all__ = ["get_db_session"]
