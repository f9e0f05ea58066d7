from datetime import date
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.db.base import Base
from app.models.association import Association
from app.models.enums import IssueStatus
from app.models.financial_report import FinancialReport
from app.models.issue import Issue
from app.models.monitoring import MonitoringRecord
from app.models.project import Project
from app.services.association_reports import (
    build_association_report,
    build_report_summary,
    list_association_reports,
)
from app.services.dashboard import build_dashboard_stats, quarter_label
from app.services.financials import apply_breakdown
from app.services.monitoring import recompute_record
from app.utils.decimal_math import money


def _session() -> Session:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)()


def _report(association: Association, sales: str, costs: str, expenses: str, day: date, period: str):
    return apply_breakdown(
        FinancialReport(
            association_id=association.id,
            association_name=association.name,
            period=period,
            sales=Decimal(sales),
            costs=Decimal(costs),
            expenses=Decimal(expenses),
            report_date=day,
        )
    )


def _record(project: Project, sales: str, cost: str, opex: str, archived: bool = False) -> MonitoringRecord:
    return recompute_record(
        MonitoringRecord(
            project_id=project.id,
            monitoring_date=date(2026, 6, 1),
            monitoring_year=2026,
            field_officer_id="FO-7",
            monthly_gross_sales=Decimal(sales),
            monthly_cost_of_sales=Decimal(cost),
            monthly_operating_expenses=Decimal(opex),
            is_archived=archived,
        )
    )


def _seed(db: Session) -> Association:
    association = Association(name="Capas Swine Growers", location="Capas", no_active_members=15, no_inactive_members=5)
    db.add(association)
    db.flush()

    linked = Project(project_name="Linked project", associations=[association])
    primary = Project(project_name="Primary project", association_id=association.id)
    db.add_all([linked, primary])
    db.flush()

    db.add_all(
        [
            _report(association, "60000", "20000", "5000", date(2026, 3, 31), "2026-Q1"),
            _report(association, "40000", "15000", "0", date(2026, 6, 30), "2026-Q2"),
            _record(linked, "10000", "4000", "1000"),
            _record(linked, "5000", "4000", "2000"),
            _record(primary, "8000", "2000", "1000"),
            _record(primary, "9000", "1000", "1000", archived=True),
            Issue(
                issue_code="ISS-2026-001",
                project_id=linked.id,
                association_id=association.id,
                major_issue_challenge="Feed",
                status=IssueStatus.resolved,
                date_reported=date(2026, 4, 1),
            ),
            Issue(
                issue_code="ISS-2026-002",
                project_id=linked.id,
                association_id=association.id,
                major_issue_challenge="Water",
                status=IssueStatus.open,
                date_reported=date(2026, 4, 2),
            ),
            Issue(
                issue_code="ISS-2026-003",
                project_id=linked.id,
                association_id=association.id,
                major_issue_challenge="Old",
                status=IssueStatus.open,
                date_reported=date(2026, 1, 2),
                is_archived=True,
            ),
        ]
    )
    db.flush()
    return association


def test_summary_is_derived_from_reports_monitoring_and_issues() -> None:
    db = _session()
    association = _seed(db)
    summary = build_report_summary(db, association)

    assert summary.members == 20
    assert summary.active_members == 15
    assert summary.revenue == money("100000")
    assert summary.expenses == money("40000")
    assert summary.net_profit == money("60000")
    # two of three live monitoring records are profitable
    assert summary.sustainability_score == 66.67
    assert summary.compliance_rate == 50.0
    assert summary.last_report_date == date(2026, 6, 30)
    assert summary.last_period == "2026-Q2"


def test_report_feeds_summary_into_rating() -> None:
    db = _session()
    association = _seed(db)
    report = build_association_report(db, association)

    metrics = report.metrics
    assert metrics.financial_health == 5.0
    assert metrics.membership_engagement == 4.0
    assert metrics.operational_efficiency == 3.67
    assert metrics.compliance_score == 3.0
    assert metrics.overall_rating == 4.03
    assert metrics.descriptive_rating == "Very Satisfactory"


def test_association_without_activity_is_fully_compliant() -> None:
    db = _session()
    association = Association(name="Fresh Start", location="Bamban", no_active_members=0, no_inactive_members=0)
    db.add(association)
    db.flush()
    summary = build_report_summary(db, association)
    assert summary.revenue == money(0)
    assert summary.sustainability_score == 0.0
    assert summary.compliance_rate == 100.0
    assert summary.last_report_date is None


def test_listing_filters_by_rating_and_skips_archived() -> None:
    db = _session()
    _seed(db)
    archived = Association(name="Closed Group", location="Capas", archived=True)
    db.add(archived)
    db.flush()

    assert [row.association_name for row in list_association_reports(db)] == ["Capas Swine Growers"]
    assert list_association_reports(db, rating="very satisfactory")[0].association_id is not None
    assert list_association_reports(db, rating="Outstanding") == []
    assert len(list_association_reports(db, include_archived=True)) == 2


def test_dashboard_stats_totals_top_and_quarters() -> None:
    db = _session()
    association = _seed(db)
    other = Association(name="Bamban Layers", location="Bamban")
    db.add(other)
    db.flush()
    reports = [
        _report(association, "60000", "20000", "5000", date(2026, 3, 31), "2026-Q1"),
        _report(association, "40000", "15000", "0", date(2026, 6, 30), "2026-Q2"),
        _report(other, "10000", "9000", "0", date(2026, 8, 15), "2026-Q3"),
        _report(other, "5000", "1000", "0", date(2025, 2, 1), "2025-Q1"),
    ]
    for index, report in enumerate(reports, start=1):
        report.id = index

    stats = build_dashboard_stats(reports, total_associations=2, today=date(2026, 10, 19))
    assert stats.total_sales == money("115000")
    assert stats.total_profit == money("70000")
    assert stats.total_reports == 4
    assert stats.average_profit_margin == money("60.87")
    assert [row.association_name for row in stats.top_associations] == ["Capas Swine Growers", "Bamban Layers"]
    assert stats.top_associations[0].total_profit == money("65000")
    assert [row.id for row in stats.recent_reports] == [3, 2, 1, 4]
    assert [point.label for point in stats.quarterly_trends] == ["Q1-2026", "Q2-2026", "Q3-2026", "Q4-2026"]
    assert stats.quarterly_trends[0].profit == money("40000")
    assert stats.quarterly_trends[3].sales == money("0")
    assert quarter_label(date(2026, 12, 31)) == "Q4-2026"


def test_dashboard_stats_without_reports() -> None:
    stats = build_dashboard_stats([], total_associations=0, today=date(2026, 10, 19))
    assert stats.total_sales == money(0)
    assert stats.average_profit_margin == money(0)
    assert stats.top_associations == []
    assert len(stats.quarterly_trends) == 4
