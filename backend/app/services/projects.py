from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.base import apply_changes
from app.models.association import Association
from app.models.caretaker import Caretaker
from app.models.project import Project
from app.schemas.projects import (
    EnterpriseSetup,
    FinancialInformation,
    LinkedAssociationOut,
    ProjectCreateRequest,
    ProjectOut,
    ProjectUpdateRequest,
)
from app.utils.decimal_math import money
from app.utils.normalization import merge_section

UNKNOWN_ASSOCIATION = "Unknown Association"

FINANCIAL_FIELDS = (
    "total_sales",
    "net_income_loss",
    "total_savings_generated",
    "cash_on_hand",
    "cash_on_bank",
)


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return project


def _load_associations(db: Session, association_ids: list[int]) -> list[Association]:
    if not association_ids:
        return []
    rows = list(db.scalars(select(Association).where(Association.id.in_(association_ids))).all())
    missing = set(association_ids) - {row.id for row in rows}
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown association id(s): {', '.join(str(item) for item in sorted(missing))}.",
        )
    return rows


def _check_references(db: Session, association_id: int | None, caretaker_id: int | None) -> None:
    if association_id is not None and db.get(Association, association_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Association not found.")
    if caretaker_id is not None and db.get(Caretaker, caretaker_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Caretaker not found.")


def _apply_enterprise_setup(project: Project, setup: EnterpriseSetup) -> None:
    project.project_name = setup.project_name
    project.enterprise_type = setup.enterprise_type
    project.status = setup.status
    project.start_date = setup.start_date
    project.region = setup.region
    project.province = setup.province
    project.city_municipality = setup.city_municipality
    project.barangay = setup.barangay


def _apply_financial_information(project: Project, info: FinancialInformation) -> None:
    for field in FINANCIAL_FIELDS:
        setattr(project, field, money(getattr(info, field)))


def create_project(db: Session, payload: ProjectCreateRequest) -> Project:
    _check_references(db, payload.association_id, payload.caretaker_id)
    project = Project()
    _apply_enterprise_setup(project, payload.enterprise_setup)
    _apply_financial_information(project, payload.financial_information)
    project.operational_information = payload.operational_information.model_dump(mode="json")
    project.market_assessment = payload.market_assessment.model_dump(mode="json")
    project.operational_assessment = payload.operational_assessment.model_dump(mode="json")
    project.financial_assessment = payload.financial_assessment.model_dump(mode="json")
    project.participant = payload.participant.model_dump(mode="json") if payload.participant else None
    project.partnership_engagements = payload.partnership_engagements
    project.association_id = payload.association_id
    project.is_association_member = payload.is_association_member
    project.membership_type = payload.membership_type
    project.caretaker_id = payload.caretaker_id
    project.associations = _load_associations(db, payload.association_ids)
    db.add(project)
    return project


def update_project(db: Session, project: Project, payload: ProjectUpdateRequest) -> list[str]:
    """Apply a partial update and return the names of the sections touched."""
    changes = payload.model_dump(exclude_unset=True)
    if "association_id" in changes or "caretaker_id" in changes:
        _check_references(db, changes.get("association_id"), changes.get("caretaker_id"))

    if payload.enterprise_setup is not None:
        _apply_enterprise_setup(project, payload.enterprise_setup)
    if payload.financial_information is not None:
        _apply_financial_information(project, payload.financial_information)
    if payload.operational_information is not None:
        project.operational_information = merge_section(
            project.operational_information,
            payload.operational_information.model_dump(mode="json", exclude_unset=True, exclude_none=True),
        )
    for section in ("market_assessment", "operational_assessment", "financial_assessment", "participant"):
        value = getattr(payload, section)
        if value is not None:
            setattr(project, section, value.model_dump(mode="json"))
    if payload.partnership_engagements is not None:
        project.partnership_engagements = payload.partnership_engagements
    links = ("association_id", "is_association_member", "membership_type", "caretaker_id")
    apply_changes(project, {field: changes[field] for field in links if field in changes})
    if payload.association_ids is not None:
        project.associations = _load_associations(db, payload.association_ids)
    return sorted(changes)


def project_association_names(project: Project) -> list[str]:
    if project.associations:
        return [association.name for association in project.associations]
    if project.primary_association is not None:
        return [project.primary_association.name]
    return [UNKNOWN_ASSOCIATION]


def extend_project(project: Project) -> dict[str, Any]:
    """Derived association fields shown with every project."""
    linked = list(project.associations)
    source = linked[0] if linked else project.primary_association
    names = project_association_names(project)
    if linked:
        association_ids = [association.id for association in linked]
    elif project.association_id is not None:
        association_ids = [project.association_id]
    else:
        association_ids = []
    return {
        "multiple_associations": [
            LinkedAssociationOut(
                id=association.id,
                name=association.name,
                location=association.location,
                no_active_members=association.no_active_members,
                region=association.region,
                province=association.province,
            )
            for association in linked
        ],
        "association_names": names,
        "association_ids": association_ids,
        "association_name": ", ".join(names),
        "association_location": source.location if source is not None else "",
        "association_region": (source.region if source is not None else None) or project.region,
        "association_province": (source.province if source is not None else None) or project.province,
    }


def project_to_out(project: Project) -> ProjectOut:
    return ProjectOut(
        id=project.id,
        enterprise_setup=EnterpriseSetup(
            project_name=project.project_name,
            enterprise_type=project.enterprise_type,
            status=project.status,
            start_date=project.start_date,
            region=project.region,
            province=project.province,
            city_municipality=project.city_municipality,
            barangay=project.barangay,
        ),
        financial_information=FinancialInformation(
            **{field: money(getattr(project, field)) for field in FINANCIAL_FIELDS}
        ),
        operational_information=project.operational_information or {},
        market_assessment=project.market_assessment or {},
        operational_assessment=project.operational_assessment or {},
        financial_assessment=project.financial_assessment or {},
        participant=project.participant,
        partnership_engagements=project.partnership_engagements or [],
        association_id=project.association_id,
        is_association_member=project.is_association_member,
        membership_type=project.membership_type,
        caretaker_id=project.caretaker_id,
        created_at=project.created_at,
        updated_at=project.updated_at,
        **extend_project(project),
    )
