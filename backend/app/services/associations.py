from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.association import Association
from app.models.enums import AssociationStatus
from app.schemas.associations import AssociationStatsOut

GROWTH_WINDOW = timedelta(days=30)


def get_association_or_404(db: Session, association_id: int) -> Association:
    association = db.get(Association, association_id)
    if association is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Association not found.")
    return association


def archive_association(association: Association) -> None:
    if association.archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Association is already archived.")
    association.status = AssociationStatus.archived
    association.archived = True


def restore_association(association: Association) -> None:
    if not association.archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Association is not archived.")
    association.status = AssociationStatus.active
    association.archived = False


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def association_stats(db: Session, *, now: datetime | None = None) -> AssociationStatsOut:
    rows = list(db.scalars(select(Association).where(Association.archived.is_(False))).all())
    cutoff = (now or datetime.now(timezone.utc)) - GROWTH_WINDOW
    recent = sum(1 for row in rows if row.created_at is not None and _aware(row.created_at) >= cutoff)
    total = len(rows)
    return AssociationStatsOut(
        total_associations=total,
        total_members=sum(row.no_active_members or 0 for row in rows),
        growth_rate=round(recent / total * 100) if total else 0,
    )
