from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.models.association import Association
from app.models.caretaker import Caretaker
from app.models.enums import AssetStatus, CaretakerStatus, IssueStatus, ProjectStatus
from app.models.financial_report import FinancialReport
from app.models.issue import Issue
from app.models.project import Project
from app.schemas.dashboard import (
    DashboardOverviewOut,
    DashboardStatsOut,
    QuarterTrendOut,
    RecentReportOut,
    TopAssociationOut,
)
from app.utils.decimal_math import money, safe_pct

TOP_ASSOCIATIONS = 3
RECENT_REPORTS = 5
TREND_QUARTERS = 4


def quarter_label(day: date) -> str:
    return f"Q{(day.month - 1) // 3 + 1}-{day.year}"


def _recent_quarters(today: date, count: int = TREND_QUARTERS) -> list[str]:
    index = today.year * 4 + (today.month - 1) // 3
    labels = []
    for back in range(count - 1, -1, -1):
        year, quarter = divmod(index - back, 4)
        labels.append(f"Q{quarter + 1}-{year}")
    return labels


def build_dashboard_stats(
    reports: list[FinancialReport], total_associations: int, today: date | None = None
) -> DashboardStatsOut:
    total_sales = money(sum((money(report.sales) for report in reports), Decimal("0")))
    total_profit = money(sum((money(report.profit) for report in reports), Decimal("0")))
    total_balance = money(sum((money(report.balance) for report in reports), Decimal("0")))

    per_association: dict[int, TopAssociationOut] = {}
    for report in reports:
        row = per_association.get(report.association_id)
        if row is None:
            row = TopAssociationOut(
                association_id=report.association_id,
                association_name=report.association_name,
                total_profit=money(0),
                total_sales=money(0),
                report_count=0,
            )
            per_association[report.association_id] = row
        row.total_profit = money(row.total_profit + money(report.profit))
        row.total_sales = money(row.total_sales + money(report.sales))
        row.report_count += 1
    top = sorted(per_association.values(), key=lambda row: (-row.total_profit, row.association_name))

    recent = sorted(reports, key=lambda report: (report.report_date, report.id), reverse=True)

    buckets: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {"sales": money(0), "profit": money(0), "balance": money(0)}
    )
    for report in reports:
        bucket = buckets[quarter_label(report.report_date)]
        bucket["sales"] += money(report.sales)
        bucket["profit"] += money(report.profit)
        bucket["balance"] += money(report.balance)
    trends = []
    for label in _recent_quarters(today or date.today()):
        bucket = buckets.get(label, {"sales": money(0), "profit": money(0), "balance": money(0)})
        trends.append(
            QuarterTrendOut(
                label=label,
                sales=money(bucket["sales"]),
                profit=money(bucket["profit"]),
                balance=money(bucket["balance"]),
            )
        )

    return DashboardStatsOut(
        total_sales=total_sales,
        total_profit=total_profit,
        total_balance=total_balance,
        total_associations=total_associations,
        total_reports=len(reports),
        average_profit_margin=safe_pct(total_profit, total_sales),
        top_associations=top[:TOP_ASSOCIATIONS],
        recent_reports=[
            RecentReportOut(
                id=report.id,
                association_name=report.association_name,
                period=report.period,
                sales=money(report.sales),
                profit=money(report.profit),
                balance=money(report.balance),
                report_date=report.report_date,
            )
            for report in recent[:RECENT_REPORTS]
        ],
        quarterly_trends=trends,
    )


def dashboard_stats(db: Session, today: date | None = None) -> DashboardStatsOut:
    reports = list(db.scalars(select(FinancialReport)).all())
    total_associations = int(
        db.scalar(select(func.count(Association.id)).where(Association.archived.is_(False))) or 0
    )
    return build_dashboard_stats(reports, total_associations, today=today)


def dashboard_overview(db: Session) -> DashboardOverviewOut:
    counts = dict(db.execute(select(Project.status, func.count(Project.id)).group_by(Project.status)).all())
    projects_by_status = {item.value: int(counts.get(item, 0)) for item in ProjectStatus}
    assets = list(db.scalars(select(Asset).where(Asset.status != AssetStatus.archived)).all())
    return DashboardOverviewOut(
        projects_by_status=projects_by_status,
        total_projects=sum(projects_by_status.values()),
        open_issues=int(
            db.scalar(
                select(func.count(Issue.id)).where(
                    Issue.status.in_([IssueStatus.open, IssueStatus.in_progress]),
                    Issue.is_archived.is_(False),
                )
            )
            or 0
        ),
        total_assets=len(assets),
        total_asset_value=money(sum((money(asset.total_value) for asset in assets), Decimal("0"))),
        active_caretakers=int(
            db.scalar(select(func.count(Caretaker.id)).where(Caretaker.status == CaretakerStatus.active)) or 0
        ),
    )
