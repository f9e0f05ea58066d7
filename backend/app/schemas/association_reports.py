from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class ReportSummaryOut(BaseModel):
    members: int
    active_members: int
    revenue: Decimal
    expenses: Decimal
    net_profit: Decimal
    sustainability_score: float
    compliance_rate: float
    last_report_date: date | None = None
    last_period: str | None = None


class PerformanceMetricsOut(BaseModel):
    financial_health: float
    membership_engagement: float
    operational_efficiency: float
    compliance_score: float
    weighted_average: float
    plus_factor: float
    overall_rating: float
    descriptive_rating: str


class AssociationReportOut(BaseModel):
    association_id: int
    association_name: str
    status: str
    location: str
    region: str | None = None
    province: str | None = None
    summary: ReportSummaryOut
    metrics: PerformanceMetricsOut
