from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.models.enums import ActivityStatus
from app.schemas.common import PaginationOut


class ActivityLogCreateRequest(BaseModel):
    user: str | None = Field(default=None, max_length=255)
    action: str | None = Field(default=None, max_length=100)
    module: str | None = Field(default=None, max_length=100)
    details: str | None = None
    status: ActivityStatus | None = None
    metadata: dict[str, Any] | None = None


class ActivityLogOut(BaseModel):
    id: int
    timestamp: datetime
    user: str
    action: str
    module: str
    details: str
    ip_address: str
    status: ActivityStatus
    metadata: dict[str, Any] | None = None


class ActivityLogPage(BaseModel):
    activities: list[ActivityLogOut]
    pagination: PaginationOut


class ActivityLogCreateResponse(BaseModel):
    success: bool
    message: str
    activity: ActivityLogOut | None = None


class ActivityLogClearResponse(BaseModel):
    success: bool
    deleted: int
