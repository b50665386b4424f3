"""Asset registration and recorded-state endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from asset_expiry.core.container import ApplicationContainer
from asset_expiry.interfaces.http.deps import get_app_container, get_db_session
from asset_expiry.modules.assets import AssetCreateInput, AssetNotFoundError
from asset_expiry.modules.assets.service import AssetService
from asset_expiry.schemas import (
    AssetCreate,
    AssetListResponse,
    AssetResponse,
    AssetStateUpdate,
)

router = APIRouter()


def _service(db: AsyncSession, container: ApplicationContainer) -> AssetService:
    return AssetService.with_session(db, container.queries)


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    payload: AssetCreate,
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
):
    asset = await _service(db, container).create_asset(
        AssetCreateInput(name=payload.name, expires_at=payload.expires_at)
    )
    await db.commit()
    return AssetResponse.model_validate(asset)


@router.get("", response_model=AssetListResponse)
async def list_assets(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
):
    assets, total = await _service(db, container).list_assets(skip, limit)
    return AssetListResponse(
        total=total,
        assets=[AssetResponse.model_validate(asset) for asset in assets],
    )


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: str,
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
):
    try:
        asset = await _service(db, container).get_asset(asset_id)
    except AssetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found") from None
    return AssetResponse.model_validate(asset)


@router.put("/{asset_id}/state", response_model=AssetResponse)
async def record_asset_state(
    asset_id: str,
    payload: AssetStateUpdate,
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
):
    """Record the state a downstream consumer observed, taking the asset out of the next selection."""
    try:
        asset = await _service(db, container).record_state(asset_id, expired=payload.expired)
    except AssetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found") from None
    await db.commit()
    return AssetResponse.model_validate(asset)
