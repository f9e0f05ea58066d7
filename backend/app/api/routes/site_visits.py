from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.enums import SiteVisitStatus
from app.models.project import Project
from app.models.site_visit import SiteVisit
from app.schemas.site_visits import (
    ProjectRankingOut,
    SiteVisitCreateRequest,
    SiteVisitOut,
    SiteVisitUpdateRequest,
)
from app.services.activity import record_activity
from app.services.site_visits import archive_visit, get_visit_or_404, rank_projects, restore_visit


router = APIRouter(prefix="/site-visits", tags=["site-visits"])

MODULE = "Site Visits"


def _project_or_400(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project not found.")
    return project


@router.get("", response_model=list[SiteVisitOut])
def list_site_visits(
    project_id: int | None = None,
    status_filter: SiteVisitStatus | None = Query(default=None, alias="status"),
    visit_number: int | None = None,
    association_name: str | None = None,
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[SiteVisit]:
    statement = select(SiteVisit).order_by(
        SiteVisit.visit_date.desc(), SiteVisit.visit_number.asc(), SiteVisit.id.desc()
    )
    if not include_archived:
        statement = statement.where(SiteVisit.is_archived.is_(False))
    if project_id is not None:
        statement = statement.where(SiteVisit.project_id == project_id)
    if status_filter is not None:
        statement = statement.where(SiteVisit.status == status_filter)
    if visit_number is not None:
        statement = statement.where(SiteVisit.visit_number == visit_number)
    if association_name:
        statement = statement.where(SiteVisit.association_name == association_name)
    return list(db.scalars(statement).all())


@router.get("/rankings", response_model=list[ProjectRankingOut])
def get_project_rankings(
    as_of: date | None = None,
    db: Session = Depends(get_db),
) -> list[ProjectRankingOut]:
    visits = list(db.scalars(select(SiteVisit).where(SiteVisit.is_archived.is_(False))).all())
    return [ProjectRankingOut.model_validate(item, from_attributes=True) for item in rank_projects(visits, as_of)]


@router.get("/{visit_id}", response_model=SiteVisitOut)
def get_site_visit(visit_id: int, db: Session = Depends(get_db)) -> SiteVisit:
    return get_visit_or_404(db, visit_id)


@router.post("", response_model=SiteVisitOut, status_code=status.HTTP_201_CREATED)
def create_site_visit(
    payload: SiteVisitCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> SiteVisit:
    project = _project_or_400(db, payload.project_id)
    visit = SiteVisit(**payload.model_dump(), project_name=project.project_name)
    db.add(visit)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Scheduled visit {visit.visit_number} for {visit.project_name} ({visit.association_name})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"site_visit_id": visit.id, "project_id": project.id, "visit_date": str(visit.visit_date)},
    )
    db.commit()
    db.refresh(visit)
    return visit


@router.patch("/{visit_id}", response_model=SiteVisitOut)
def update_site_visit(
    visit_id: int,
    payload: SiteVisitUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> SiteVisit:
    visit = get_visit_or_404(db, visit_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("project_id") is not None:
        visit.project_name = _project_or_400(db, changes["project_id"]).project_name
    written = apply_changes(visit, changes)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated visit {visit.visit_number} for {visit.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"site_visit_id": visit.id, "fields": sorted(written)},
    )
    db.commit()
    db.refresh(visit)
    return visit


@router.post("/{visit_id}/archive", response_model=SiteVisitOut)
def archive_site_visit(
    visit_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> SiteVisit:
    visit = get_visit_or_404(db, visit_id)
    archive_visit(visit)
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived visit {visit.visit_number} for {visit.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"site_visit_id": visit.id},
    )
    db.commit()
    db.refresh(visit)
    return visit


@router.post("/{visit_id}/restore", response_model=SiteVisitOut)
def restore_site_visit(
    visit_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> SiteVisit:
    visit = get_visit_or_404(db, visit_id)
    restore_visit(visit)
    record_activity(
        db,
        module=MODULE,
        action="RESTORE",
        details=f"Restored visit {visit.visit_number} for {visit.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"site_visit_id": visit.id},
    )
    db.commit()
    db.refresh(visit)
    return visit
