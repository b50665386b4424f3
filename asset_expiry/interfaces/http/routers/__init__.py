"""HTTP routers."""

from fastapi import APIRouter

from . import assets, expiration


def create_api_router(prefix: str = "/api") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    router.include_router(expiration.router, prefix="/expiration", tags=["expiration"])
    return router


__all__ = ["create_api_router"]
