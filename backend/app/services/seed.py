from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.models.association import Association
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import (
    AssetSourceType,
    AssociationStatus,
    CaretakerStatus,
    IssuePriority,
    IssueStatus,
    ProjectStatus,
)
from app.models.financial_report import FinancialReport
from app.models.issue import Issue
from app.models.monitoring import MonitoringRecord
from app.models.project import Project
from app.services.assets import total_value, unique_asset_code
from app.services.financials import apply_breakdown
from app.services.issues import next_issue_code
from app.services.monitoring import recompute_record
from app.utils.normalization import (
    DEFAULT_FINANCIAL_ASSESSMENT,
    DEFAULT_MARKET_ASSESSMENT,
    DEFAULT_OPERATIONAL_ASSESSMENT,
    DEFAULT_OPERATIONAL_INFORMATION,
)

SEED_ASSOCIATIONS = [
    {
        "name": "Maligaya Hog Raisers Association",
        "location": "Brgy. San Isidro, Tarlac City",
        "region": "Region III",
        "province": "Tarlac",
        "contact_person": "Rosa Dizon",
        "no_active_members": 25,
        "no_inactive_members": 5,
        "date_formulated": date(2021, 3, 15),
    },
    {
        "name": "Bagong Pag-asa Farmers Cooperative",
        "location": "Brgy. Poblacion, Cabanatuan City",
        "region": "Region III",
        "province": "Nueva Ecija",
        "contact_person": "Jun Reyes",
        "no_active_members": 18,
        "no_inactive_members": 2,
        "date_formulated": date(2022, 7, 1),
    },
]

SEED_CARETAKERS = [
    ("Maria", "Santos", 0, [4.5, 4.8, 4.6]),
    ("Pedro", "Cruz", 0, [3.8, 4.0]),
    ("Liza", "Garcia", 1, [2.5, 2.8, 2.9]),
]


def _get_or_create_association(db: Session, **fields) -> Association:
    association = db.scalar(select(Association).where(Association.name == fields["name"]))
    if association is not None:
        return association

    association = Association(status=AssociationStatus.active, **fields)
    db.add(association)
    db.flush()
    return association


def _get_or_create_caretaker(
    db: Session, *, first_name: str, last_name: str, association: Association
) -> Caretaker:
    caretaker = db.scalar(
        select(Caretaker).where(Caretaker.first_name == first_name, Caretaker.last_name == last_name)
    )
    if caretaker is not None:
        return caretaker

    caretaker = Caretaker(
        first_name=first_name,
        last_name=last_name,
        participant_type="Caretaker",
        association_id=association.id,
        province=association.province or "",
        region=association.region or "",
        status=CaretakerStatus.active,
        date_started=date(2024, 1, 8),
    )
    db.add(caretaker)
    db.flush()
    return caretaker


def _ensure_assessments(db: Session, caretaker: Caretaker, ratings: list[float]) -> None:
    exists = db.scalar(
        select(PerformanceAssessment.id).where(PerformanceAssessment.caretaker_id == caretaker.id).limit(1)
    )
    if exists is not None:
        return
    for index, rating in enumerate(ratings):
        db.add(
            PerformanceAssessment(
                caretaker_id=caretaker.id,
                assessment_date=date(2026, 3 + index * 2, 10),
                rating=rating,
                assessed_by="Provincial Coordinator",
                strengths=["Record keeping"] if rating >= 4 else [],
                areas_of_improvement=["Feeding schedule"] if rating < 3 else [],
            )
        )


def _get_or_create_project(db: Session, *, name: str, association: Association, caretaker: Caretaker) -> Project:
    project = db.scalar(select(Project).where(Project.project_name == name))
    if project is not None:
        return project

    project = Project(
        project_name=name,
        enterprise_type="Swine Production",
        status=ProjectStatus.active,
        start_date=date(2025, 6, 1),
        region=association.region or "",
        province=association.province or "",
        city_municipality=association.location.split(",")[-1].strip(),
        operational_information=dict(DEFAULT_OPERATIONAL_INFORMATION),
        market_assessment=dict(DEFAULT_MARKET_ASSESSMENT),
        operational_assessment=dict(DEFAULT_OPERATIONAL_ASSESSMENT),
        financial_assessment=dict(DEFAULT_FINANCIAL_ASSESSMENT),
        partnership_engagements=[],
        association_id=association.id,
        is_association_member=True,
        caretaker_id=caretaker.id,
    )
    project.associations = [association]
    db.add(project)
    db.flush()
    return project


def _ensure_project_records(db: Session, project: Project, association: Association, caretaker: Caretaker) -> None:
    exists = db.scalar(select(FinancialReport.id).where(FinancialReport.association_id == association.id).limit(1))
    if exists is not None:
        return

    for month, (sales, costs, expenses) in enumerate(
        [("120000", "70000", "8000"), ("135000", "76000", "9500"), ("98000", "81000", "7000")],
        start=1,
    ):
        db.add(
            apply_breakdown(
                FinancialReport(
                    association_id=association.id,
                    association_name=association.name,
                    caretaker_id=caretaker.id,
                    caretaker_name=caretaker.full_name,
                    period=f"2026-Q{month}",
                    sales=Decimal(sales),
                    costs=Decimal(costs),
                    expenses=Decimal(expenses),
                    report_date=date(2026, month * 3, 28),
                )
            )
        )
        db.add(
            recompute_record(
                MonitoringRecord(
                    project_id=project.id,
                    monitoring_date=date(2026, month * 3, 15),
                    monitoring_year=2026,
                    field_officer_id="FO-001",
                    monthly_gross_sales=Decimal(sales) / 3,
                    monthly_cost_of_sales=Decimal(costs) / 3,
                    monthly_operating_expenses=Decimal(expenses) / 3,
                    association_ids=[association.id],
                )
            )
        )

    db.add(
        Asset(
            asset_code=unique_asset_code(db),
            project_id=project.id,
            project_name=project.project_name,
            asset_type="Equipment",
            asset_name="Feed grinder",
            provider_name="DSWD Field Office III",
            acquisition_date=date(2025, 7, 2),
            source_type=AssetSourceType.government_provided,
            quantity=1,
            unit_value=Decimal("45000.00"),
            total_value=total_value(1, Decimal("45000.00")),
        )
    )
    db.flush()
    db.add(
        Issue(
            issue_code=next_issue_code(db, 2026),
            project_id=project.id,
            association_id=association.id,
            issue_category="Operations",
            major_issue_challenge="Rising feed prices",
            description="Commercial feed prices rose 15% over the quarter.",
            status=IssueStatus.in_progress,
            priority=IssuePriority.high,
            date_reported=date(2026, 4, 2),
            reported_by="FO-001",
        )
    )


def seed_demo_data(db: Session) -> None:
    associations = [_get_or_create_association(db, **fields) for fields in SEED_ASSOCIATIONS]

    caretakers = []
    for first_name, last_name, association_index, ratings in SEED_CARETAKERS:
        caretaker = _get_or_create_caretaker(
            db,
            first_name=first_name,
            last_name=last_name,
            association=associations[association_index],
        )
        _ensure_assessments(db, caretaker, ratings)
        caretakers.append(caretaker)

    for association, caretaker in zip(associations, caretakers):
        project = _get_or_create_project(
            db,
            name=f"{association.name.split()[0]} Livelihood Enterprise",
            association=association,
            caretaker=caretaker,
        )
        _ensure_project_records(db, project, association, caretaker)
        db.flush()
    db.commit()
