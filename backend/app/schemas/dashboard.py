from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class TopAssociationOut(BaseModel):
    association_id: int
    association_name: str
    total_profit: Decimal
    total_sales: Decimal
    report_count: int


class RecentReportOut(BaseModel):
    id: int
    association_name: str
    period: str
    sales: Decimal
    profit: Decimal
    balance: Decimal
    report_date: date


class QuarterTrendOut(BaseModel):
    label: str
    sales: Decimal
    profit: Decimal
    balance: Decimal


class DashboardStatsOut(BaseModel):
    total_sales: Decimal
    total_profit: Decimal
    total_balance: Decimal
    total_associations: int
    total_reports: int
    average_profit_margin: Decimal
    top_associations: list[TopAssociationOut]
    recent_reports: list[RecentReportOut]
    quarterly_trends: list[QuarterTrendOut]


class DashboardOverviewOut(BaseModel):
    projects_by_status: dict[str, int]
    total_projects: int
    open_issues: int
    total_assets: int
    total_asset_value: Decimal
    active_caretakers: int
