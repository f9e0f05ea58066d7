from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.schemas.common import ORMModel


class FinancialReportCreateRequest(BaseModel):
    association_id: int
    period: str = Field(min_length=1, max_length=50)
    sales: Decimal = Field(ge=0)
    costs: Decimal = Field(ge=0)
    expenses: Decimal = Field(default=Decimal("0"), ge=0)
    report_date: date
    caretaker_id: int | None = None


class FinancialReportUpdateRequest(BaseModel):
    period: str | None = Field(default=None, min_length=1, max_length=50)
    sales: Decimal | None = Field(default=None, ge=0)
    costs: Decimal | None = Field(default=None, ge=0)
    expenses: Decimal | None = Field(default=None, ge=0)
    report_date: date | None = None
    caretaker_id: int | None = None


class FinancialReportOut(ORMModel):
    id: int
    association_id: int
    association_name: str
    caretaker_id: int | None = None
    caretaker_name: str | None = None
    period: str
    sales: Decimal
    costs: Decimal
    profit: Decimal
    share80: Decimal
    ass_share20: Decimal
    monitoring2: Decimal
    expenses: Decimal
    balance: Decimal
    report_date: date
    created_at: datetime
    updated_at: datetime
