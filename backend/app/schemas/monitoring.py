from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.common import ORMModel


class MonitoringCreateRequest(BaseModel):
    project_id: int
    monitoring_date: date
    monitoring_year: int = Field(ge=2000, le=2100)
    monitoring_frequency: str = Field(default="monthly", max_length=50)
    field_officer_id: str = Field(min_length=1, max_length=100)
    provincial_coordinator: str | None = Field(default=None, max_length=255)
    monitoring_type: str = Field(default="regular", max_length=100)
    monthly_gross_sales: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_cost_of_sales: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_operating_expenses: Decimal = Field(default=Decimal("0"), ge=0)
    verification_methods: str | None = None
    status: str = Field(default="completed", max_length=50)
    notes_remarks: str | None = None
    association_ids: list[int] = Field(default_factory=list)
    financial_status: str | None = Field(default=None, max_length=100)
    physical_progress: float | None = Field(default=None, ge=0, le=100)
    challenges: str | None = None
    recommendations: str | None = None
    next_review_date: date | None = None
    budget_utilization: float | None = Field(default=None, ge=0)


class MonitoringUpdateRequest(BaseModel):
    monitoring_date: date | None = None
    monitoring_year: int | None = Field(default=None, ge=2000, le=2100)
    monitoring_frequency: str | None = Field(default=None, max_length=50)
    field_officer_id: str | None = Field(default=None, min_length=1, max_length=100)
    provincial_coordinator: str | None = Field(default=None, max_length=255)
    monitoring_type: str | None = Field(default=None, max_length=100)
    monthly_gross_sales: Decimal | None = Field(default=None, ge=0)
    monthly_cost_of_sales: Decimal | None = Field(default=None, ge=0)
    monthly_operating_expenses: Decimal | None = Field(default=None, ge=0)
    verification_methods: str | None = None
    status: str | None = Field(default=None, max_length=50)
    notes_remarks: str | None = None
    association_ids: list[int] | None = None
    financial_status: str | None = Field(default=None, max_length=100)
    physical_progress: float | None = Field(default=None, ge=0, le=100)
    challenges: str | None = None
    recommendations: str | None = None
    next_review_date: date | None = None
    budget_utilization: float | None = Field(default=None, ge=0)


class MonitoringRecordOut(ORMModel):
    id: int
    project_id: int
    monitoring_date: date
    monitoring_year: int
    monitoring_frequency: str
    field_officer_id: str
    provincial_coordinator: str | None = None
    monitoring_type: str
    monthly_gross_sales: Decimal
    monthly_cost_of_sales: Decimal
    monthly_gross_profit: Decimal
    monthly_operating_expenses: Decimal
    monthly_net_income: Decimal
    verification_methods: str | None = None
    status: str
    notes_remarks: str | None = None
    association_ids: list[int]
    financial_status: str | None = None
    physical_progress: float | None = None
    challenges: str | None = None
    recommendations: str | None = None
    next_review_date: date | None = None
    budget_utilization: float | None = None
    is_archived: bool
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
