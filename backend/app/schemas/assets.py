from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import AssetSourceType, AssetStatus
from app.schemas.common import ORMModel, PaginationOut


class AssetCreateRequest(BaseModel):
    project_id: int
    asset_type: str = Field(min_length=1, max_length=100)
    asset_name: str = Field(min_length=1, max_length=255)
    provider_name: str = Field(min_length=1, max_length=255)
    acquisition_date: date
    source_type: AssetSourceType
    quantity: int = Field(gt=0)
    unit_value: Decimal = Field(gt=0)
    status: AssetStatus = AssetStatus.active
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    maintenance_schedule: str | None = Field(default=None, max_length=255)


class AssetUpdateRequest(BaseModel):
    asset_type: str | None = Field(default=None, min_length=1, max_length=100)
    asset_name: str | None = Field(default=None, min_length=1, max_length=255)
    provider_name: str | None = Field(default=None, min_length=1, max_length=255)
    acquisition_date: date | None = None
    source_type: AssetSourceType | None = None
    quantity: int | None = Field(default=None, gt=0)
    unit_value: Decimal | None = Field(default=None, gt=0)
    status: AssetStatus | None = None
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    maintenance_schedule: str | None = Field(default=None, max_length=255)


class AssetOut(ORMModel):
    id: int
    asset_code: str
    project_id: int
    project_name: str
    asset_type: str
    asset_name: str
    provider_name: str
    acquisition_date: date
    source_type: AssetSourceType
    quantity: int
    unit_value: Decimal
    total_value: Decimal
    status: AssetStatus
    description: str | None = None
    location: str | None = None
    maintenance_schedule: str | None = None
    created_at: datetime
    updated_at: datetime


class AssetGroupOut(BaseModel):
    key: str
    count: int
    value: Decimal


class AssetStatsOut(BaseModel):
    total_assets: int
    status_distribution: dict[str, int]
    total_value: Decimal
    assets_by_type: list[AssetGroupOut]
    assets_by_source: list[AssetGroupOut]
    project_specific: bool


class AssetPage(BaseModel):
    assets: list[AssetOut]
    pagination: PaginationOut
