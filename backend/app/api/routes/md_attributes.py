from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.enums import LivelihoodStatus
from app.models.md_attribute import MDAttribute
from app.models.project import Project
from app.schemas.md_attributes import (
    MDAttributeCreateRequest,
    MDAttributeOut,
    MDAttributeStatsOut,
    MDAttributeUpdateRequest,
)
from app.services.activity import record_activity
from app.services.md_attributes import attribute_stats, get_attribute_or_404, next_attribute_code, total_score


router = APIRouter(prefix="/md-attributes", tags=["md-attributes"])

MODULE = "MD Attributes"


def _active(project_id: int | None):
    statement = select(MDAttribute).where(MDAttribute.is_archived.is_(False))
    if project_id is not None:
        statement = statement.where(MDAttribute.project_id == project_id)
    return statement


@router.get("", response_model=list[MDAttributeOut])
def list_attributes(
    project_id: int | None = None,
    livelihood_status: LivelihoodStatus | None = None,
    db: Session = Depends(get_db),
) -> list[MDAttribute]:
    statement = _active(project_id).order_by(MDAttribute.created_at.desc(), MDAttribute.id.desc())
    if livelihood_status is not None:
        statement = statement.where(MDAttribute.livelihood_status == livelihood_status)
    return list(db.scalars(statement).all())


@router.get("/stats", response_model=MDAttributeStatsOut)
def get_attribute_stats(project_id: int | None = None, db: Session = Depends(get_db)) -> MDAttributeStatsOut:
    stats = attribute_stats(list(db.scalars(_active(project_id)).all()))
    return MDAttributeStatsOut(**asdict(stats))


@router.get("/{attribute_id}", response_model=MDAttributeOut)
def get_attribute(attribute_id: int, db: Session = Depends(get_db)) -> MDAttribute:
    return get_attribute_or_404(db, attribute_id)


@router.post("", response_model=MDAttributeOut, status_code=status.HTTP_201_CREATED)
def create_attribute(
    payload: MDAttributeCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MDAttribute:
    project = db.get(Project, payload.project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project not found.")
    attribute = MDAttribute(**payload.model_dump(), attribute_code=next_attribute_code(db))
    attribute.total_score = total_score(attribute)
    db.add(attribute)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Recorded MD assessment {attribute.attribute_code} for {project.project_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"md_attribute_id": attribute.id, "project_id": project.id, "total_score": attribute.total_score},
    )
    db.commit()
    db.refresh(attribute)
    return attribute


@router.patch("/{attribute_id}", response_model=MDAttributeOut)
def update_attribute(
    attribute_id: int,
    payload: MDAttributeUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MDAttribute:
    attribute = get_attribute_or_404(db, attribute_id)
    written = apply_changes(attribute, payload.model_dump(exclude_unset=True))
    attribute.total_score = total_score(attribute)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated MD assessment {attribute.attribute_code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"md_attribute_id": attribute.id, "fields": sorted(written)},
    )
    db.commit()
    db.refresh(attribute)
    return attribute


@router.post("/{attribute_id}/archive", response_model=MDAttributeOut)
def archive_attribute(
    attribute_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MDAttribute:
    attribute = get_attribute_or_404(db, attribute_id)
    if attribute.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="MD attribute is already archived.")
    attribute.is_archived = True
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived MD assessment {attribute.attribute_code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"md_attribute_id": attribute.id},
    )
    db.commit()
    db.refresh(attribute)
    return attribute


@router.delete("/{attribute_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_attribute(
    attribute_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    attribute = get_attribute_or_404(db, attribute_id)
    db.delete(attribute)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted MD assessment {attribute.attribute_code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"md_attribute_id": attribute_id},
    )
    db.commit()
    return None
