from __future__ import annotations

from dataclasses import asdict
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.association import Association
from app.models.enums import AssociationStatus, IssueStatus
from app.models.financial_report import FinancialReport
from app.models.issue import Issue
from app.models.monitoring import MonitoringRecord
from app.models.project import Project, project_associations
from app.schemas.association_reports import (
    AssociationReportOut,
    PerformanceMetricsOut,
    ReportSummaryOut,
)
from app.services.association_rating import ReportSummary, calculate_performance_metrics
from app.utils.decimal_math import money

CLOSED_ISSUE_STATUSES = (IssueStatus.resolved, IssueStatus.closed)


def _association_project_ids(db: Session, association_id: int) -> set[int]:
    linked = db.scalars(
        select(project_associations.c.project_id).where(
            project_associations.c.association_id == association_id
        )
    ).all()
    primary = db.scalars(select(Project.id).where(Project.association_id == association_id)).all()
    return set(linked) | set(primary)


def build_report_summary(db: Session, association: Association) -> ReportSummaryOut:
    reports = list(
        db.scalars(
            select(FinancialReport)
            .where(FinancialReport.association_id == association.id)
            .order_by(FinancialReport.report_date.desc(), FinancialReport.id.desc())
        ).all()
    )
    revenue = money(sum((money(report.sales) for report in reports), Decimal("0")))
    expenses = money(
        sum((money(report.costs) + money(report.expenses) for report in reports), Decimal("0"))
    )

    project_ids = _association_project_ids(db, association.id)
    records: list[MonitoringRecord] = []
    if project_ids:
        records = list(
            db.scalars(
                select(MonitoringRecord).where(
                    MonitoringRecord.project_id.in_(project_ids),
                    MonitoringRecord.is_archived.is_(False),
                )
            ).all()
        )
    positive = sum(1 for record in records if money(record.monthly_net_income) > 0)
    sustainability = round(positive / len(records) * 100, 2) if records else 0.0

    issues = list(
        db.scalars(
            select(Issue).where(Issue.association_id == association.id, Issue.is_archived.is_(False))
        ).all()
    )
    settled = sum(1 for issue in issues if IssueStatus(issue.status) in CLOSED_ISSUE_STATUSES)
    compliance = round(settled / len(issues) * 100, 2) if issues else 100.0

    latest: date | None = reports[0].report_date if reports else None
    return ReportSummaryOut(
        members=association.total_members,
        active_members=association.no_active_members or 0,
        revenue=revenue,
        expenses=expenses,
        net_profit=money(revenue - expenses),
        sustainability_score=sustainability,
        compliance_rate=compliance,
        last_report_date=latest,
        last_period=reports[0].period if reports else None,
    )


def build_association_report(db: Session, association: Association) -> AssociationReportOut:
    summary = build_report_summary(db, association)
    metrics = calculate_performance_metrics(
        ReportSummary(
            members=summary.members,
            active_members=summary.active_members,
            revenue=summary.revenue,
            expenses=summary.expenses,
            net_profit=summary.net_profit,
            sustainability_score=summary.sustainability_score,
            compliance_rate=summary.compliance_rate,
        )
    )
    return AssociationReportOut(
        association_id=association.id,
        association_name=association.name,
        status=association.status.value if hasattr(association.status, "value") else str(association.status),
        location=association.location,
        region=association.region,
        province=association.province,
        summary=summary,
        metrics=PerformanceMetricsOut(**asdict(metrics)),
    )


def list_association_reports(
    db: Session,
    *,
    search: str | None = None,
    status: AssociationStatus | None = None,
    rating: str | None = None,
    include_archived: bool = False,
) -> list[AssociationReportOut]:
    statement = select(Association).order_by(Association.name)
    if not include_archived:
        statement = statement.where(Association.archived.is_(False))
    if status:
        statement = statement.where(Association.status == status)
    if search:
        pattern = f"%{search.lower()}%"
        statement = statement.where(Association.name.ilike(pattern) | Association.location.ilike(pattern))

    reports = [build_association_report(db, association) for association in db.scalars(statement).all()]
    if rating:
        reports = [report for report in reports if report.metrics.descriptive_rating.lower() == rating.lower()]
    return reports
