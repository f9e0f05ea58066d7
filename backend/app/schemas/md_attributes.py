from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.enums import LivelihoodStatus
from app.schemas.common import ORMModel


class MDAttributeCreateRequest(BaseModel):
    project_id: int
    assessment_date: date
    market_demand_score: int = Field(default=0, ge=0, le=10)
    market_demand_remarks: str = ""
    market_supply_score: int = Field(default=0, ge=0, le=10)
    market_supply_remarks: str = ""
    enterprise_plan_score: int = Field(default=0, ge=0, le=10)
    enterprise_plan_remarks: str = ""
    financial_stability_score: int = Field(default=0, ge=0, le=10)
    financial_stability_remarks: str = ""
    livelihood_status: LivelihoodStatus = LivelihoodStatus.stable
    assessed_by: str = Field(min_length=1, max_length=255)


class MDAttributeUpdateRequest(BaseModel):
    assessment_date: date | None = None
    market_demand_score: int | None = Field(default=None, ge=0, le=10)
    market_demand_remarks: str | None = None
    market_supply_score: int | None = Field(default=None, ge=0, le=10)
    market_supply_remarks: str | None = None
    enterprise_plan_score: int | None = Field(default=None, ge=0, le=10)
    enterprise_plan_remarks: str | None = None
    financial_stability_score: int | None = Field(default=None, ge=0, le=10)
    financial_stability_remarks: str | None = None
    livelihood_status: LivelihoodStatus | None = None
    assessed_by: str | None = Field(default=None, min_length=1, max_length=255)


class MDAttributeOut(ORMModel):
    id: int
    attribute_code: str
    project_id: int
    assessment_date: date
    market_demand_score: int
    market_demand_remarks: str
    market_supply_score: int
    market_supply_remarks: str
    enterprise_plan_score: int
    enterprise_plan_remarks: str
    financial_stability_score: int
    financial_stability_remarks: str
    total_score: int
    livelihood_status: LivelihoodStatus
    assessed_by: str
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class MDAttributeStatsOut(BaseModel):
    total_assessments: int
    average_total_score: float
    by_livelihood_status: dict[str, int]
