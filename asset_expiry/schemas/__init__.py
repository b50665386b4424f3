"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    expires_at: Optional[datetime] = None


class AssetResponse(BaseModel):
    id: str
    name: str
    expires_at: Optional[datetime] = None
    expired: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AssetListResponse(BaseModel):
    total: int
    assets: list[AssetResponse]


class AssetStateUpdate(BaseModel):
    expired: bool


class ExpirationCheckResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ExpirationStatusResponse(BaseModel):
    validated: bool
    running: bool
    invariant_policy: str
    handler_failure_policy: str


class ErrorDetail(BaseModel):
    code: str
    message: str
