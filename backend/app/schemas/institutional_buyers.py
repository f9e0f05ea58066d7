from datetime import datetime

from pydantic import BaseModel, Field

from app.models.enums import BuyerStatus, BuyerType
from app.schemas.common import ORMModel, PaginationOut


class BuyerCreateRequest(BaseModel):
    buyer_name: str = Field(min_length=1, max_length=255)
    contact_person: str = Field(min_length=1, max_length=255)
    contact_number: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    type: BuyerType
    address: str | None = None
    status: BuyerStatus = BuyerStatus.active


class BuyerUpdateRequest(BaseModel):
    buyer_name: str | None = Field(default=None, min_length=1, max_length=255)
    contact_person: str | None = Field(default=None, min_length=1, max_length=255)
    contact_number: str | None = Field(default=None, min_length=1, max_length=50)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    type: BuyerType | None = None
    address: str | None = None
    status: BuyerStatus | None = None


class BuyerOut(ORMModel):
    id: int
    buyer_code: str
    buyer_name: str
    contact_person: str
    contact_number: str
    email: str
    type: BuyerType
    address: str | None = None
    status: BuyerStatus
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class BuyerPage(BaseModel):
    buyers: list[BuyerOut]
    pagination: PaginationOut


class BuyerTypeCountOut(BaseModel):
    type: str
    count: int


class BuyerStatsOut(BaseModel):
    total_buyers: int
    active_buyers: int
    draft_buyers: int
    buyers_by_type: list[BuyerTypeCountOut]
