from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.association import Association
from app.models.enums import AssociationStatus
from app.schemas.associations import (
    AssociationCreateRequest,
    AssociationOut,
    AssociationStatsOut,
    AssociationUpdateRequest,
)
from app.services.activity import record_activity
from app.services.associations import (
    archive_association,
    association_stats,
    get_association_or_404,
    restore_association,
)


router = APIRouter(prefix="/associations", tags=["associations"])

MODULE = "Associations"


@router.get("", response_model=list[AssociationOut])
def list_associations(
    search: str | None = None,
    status_filter: AssociationStatus | None = Query(default=None, alias="status"),
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[Association]:
    statement = select(Association).order_by(Association.name)
    if not include_archived:
        statement = statement.where(Association.archived.is_(False))
    if status_filter is not None:
        statement = statement.where(Association.status == status_filter)
    if search:
        pattern = f"%{search}%"
        statement = statement.where(
            or_(Association.name.ilike(pattern), Association.location.ilike(pattern))
        )
    return list(db.scalars(statement).all())


@router.get("/stats", response_model=AssociationStatsOut)
def get_association_stats(db: Session = Depends(get_db)) -> AssociationStatsOut:
    return association_stats(db)


@router.get("/{association_id}", response_model=AssociationOut)
def get_association(association_id: int, db: Session = Depends(get_db)) -> Association:
    return get_association_or_404(db, association_id)


@router.post("", response_model=AssociationOut, status_code=status.HTTP_201_CREATED)
def create_association(
    payload: AssociationCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Association:
    association = Association(**payload.model_dump())
    association.archived = payload.status == AssociationStatus.archived
    db.add(association)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Created association {association.name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"association_id": association.id},
    )
    db.commit()
    db.refresh(association)
    return association


@router.patch("/{association_id}", response_model=AssociationOut)
def update_association(
    association_id: int,
    payload: AssociationUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Association:
    association = get_association_or_404(db, association_id)
    changes = payload.model_dump(exclude_unset=True)
    apply_changes(association, changes)
    if changes.get("status") is not None:
        association.archived = association.status == AssociationStatus.archived
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated association {association.name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"association_id": association.id, "fields": sorted(changes)},
    )
    db.commit()
    db.refresh(association)
    return association


@router.post("/{association_id}/archive", response_model=AssociationOut)
def archive(
    association_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Association:
    association = get_association_or_404(db, association_id)
    archive_association(association)
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived association {association.name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"association_id": association.id},
    )
    db.commit()
    db.refresh(association)
    return association


@router.post("/{association_id}/restore", response_model=AssociationOut)
def restore(
    association_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Association:
    association = get_association_or_404(db, association_id)
    restore_association(association)
    record_activity(
        db,
        module=MODULE,
        action="RESTORE",
        details=f"Restored association {association.name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"association_id": association.id},
    )
    db.commit()
    db.refresh(association)
    return association
