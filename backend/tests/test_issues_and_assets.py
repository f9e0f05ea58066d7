import re
from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.db.base import Base
from app.models.asset import Asset
from app.models.association import Association
from app.models.enums import AssetSourceType, AssetStatus, IssueStatus
from app.models.issue import Issue
from app.models.project import Project
from app.services.assets import asset_stats, generate_asset_code, total_value
from app.services.issues import can_transition, format_issue_code, next_issue_code, transition_issue
from app.utils.decimal_math import money


def _session() -> Session:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)()


def _project(db: Session) -> tuple[Project, Association]:
    association = Association(name="Tarlac Hog Raisers", location="Tarlac City")
    project = Project(project_name="Hog Fattening", associations=[association])
    db.add_all([association, project])
    db.flush()
    return project, association


def _issue(project: Project, association: Association, code: str, status: IssueStatus = IssueStatus.open) -> Issue:
    return Issue(
        issue_code=code,
        project_id=project.id,
        association_id=association.id,
        major_issue_challenge="Feed shortage",
        status=status,
        date_reported=date(2026, 4, 1),
    )


def test_issue_codes_are_sequenced_per_year() -> None:
    db = _session()
    project, association = _project(db)
    assert next_issue_code(db, 2026) == "ISS-2026-001"

    db.add_all(
        [
            _issue(project, association, "ISS-2026-001"),
            _issue(project, association, "ISS-2026-007"),
            _issue(project, association, "ISS-2025-012"),
        ]
    )
    db.flush()
    assert next_issue_code(db, 2026) == "ISS-2026-008"
    assert next_issue_code(db, 2025) == "ISS-2025-013"
    assert next_issue_code(db, 2027) == "ISS-2027-001"
    assert format_issue_code(2026, 1234) == "ISS-2026-1234"


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (IssueStatus.open, IssueStatus.in_progress, True),
        (IssueStatus.open, IssueStatus.resolved, True),
        (IssueStatus.in_progress, IssueStatus.resolved, True),
        (IssueStatus.resolved, IssueStatus.closed, True),
        (IssueStatus.resolved, IssueStatus.in_progress, True),
        (IssueStatus.in_progress, IssueStatus.closed, True),
        (IssueStatus.in_progress, IssueStatus.open, False),
        (IssueStatus.resolved, IssueStatus.open, False),
        (IssueStatus.closed, IssueStatus.open, False),
        (IssueStatus.closed, IssueStatus.in_progress, False),
        (IssueStatus.open, IssueStatus.open, False),
    ],
)
def test_issue_transition_rules(current: IssueStatus, target: IssueStatus, allowed: bool) -> None:
    assert can_transition(current, target) is allowed


def test_resolving_stamps_date_and_reopening_clears_it() -> None:
    issue = Issue(status=IssueStatus.in_progress)
    transition_issue(issue, IssueStatus.resolved, resolution_notes="Switched supplier", resolved_on=date(2026, 5, 2))
    assert issue.date_resolved == date(2026, 5, 2)
    assert issue.resolution_notes == "Switched supplier"

    transition_issue(issue, IssueStatus.in_progress)
    assert issue.date_resolved is None

    transition_issue(issue, IssueStatus.resolved)
    assert issue.date_resolved == date.today()
    transition_issue(issue, IssueStatus.closed)
    assert issue.status == IssueStatus.closed
    assert issue.date_resolved == date.today()


def test_illegal_transition_is_a_conflict() -> None:
    issue = Issue(status=IssueStatus.closed)
    with pytest.raises(HTTPException) as exc_info:
        transition_issue(issue, IssueStatus.open)
    assert exc_info.value.status_code == 409
    assert issue.status == IssueStatus.closed


def test_asset_code_format() -> None:
    code = generate_asset_code(now_ms=1760000000000)
    assert re.fullmatch(r"AST-1760000000000-[A-Z0-9]{9}", code)
    assert re.fullmatch(r"AST-\d+-[A-Z0-9]{9}", generate_asset_code())


def test_total_value_is_quantity_times_unit_value() -> None:
    assert total_value(3, Decimal("1250.50")) == money("3751.50")
    with pytest.raises(ValueError):
        total_value(0, Decimal("10"))


def _asset(asset_type: str, source: AssetSourceType, value: str, status: AssetStatus = AssetStatus.active) -> Asset:
    return Asset(
        asset_type=asset_type,
        source_type=source,
        status=status,
        quantity=1,
        unit_value=Decimal(value),
        total_value=Decimal(value),
    )


def test_asset_stats_groups_sorted_by_value() -> None:
    assets = [
        _asset("Equipment", AssetSourceType.donated, "5000"),
        _asset("Livestock", AssetSourceType.purchased, "12000"),
        _asset("Equipment", AssetSourceType.purchased, "9000", AssetStatus.maintenance),
        _asset("Tools", AssetSourceType.government_provided, "800"),
    ]
    stats = asset_stats(assets, project_specific=True)
    assert stats.total_assets == 4
    assert stats.total_value == money("26800")
    assert stats.status_distribution == {"active": 3, "maintenance": 1}
    assert [(group.key, group.count, group.value) for group in stats.assets_by_type] == [
        ("Equipment", 2, money("14000")),
        ("Livestock", 1, money("12000")),
        ("Tools", 1, money("800")),
    ]
    assert [group.key for group in stats.assets_by_source] == ["purchased", "donated", "government_provided"]
    assert stats.project_specific is True
