from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.monitoring import MonitoringRecord
from app.models.project import Project
from app.schemas.monitoring import (
    MonitoringCreateRequest,
    MonitoringRecordOut,
    MonitoringUpdateRequest,
)
from app.services.activity import record_activity
from app.services.monitoring import archive_record, get_record_or_404, recompute_record, restore_record


router = APIRouter(prefix="/monitoring", tags=["monitoring"])

MODULE = "Project Monitoring"


def query_records(
    db: Session,
    *,
    project_id: int | None = None,
    field_officer_id: str | None = None,
    status_filter: str | None = None,
    include_archived: bool = False,
) -> list[MonitoringRecord]:
    statement = select(MonitoringRecord).order_by(
        MonitoringRecord.monitoring_date.desc(), MonitoringRecord.id.desc()
    )
    if not include_archived:
        statement = statement.where(MonitoringRecord.is_archived.is_(False))
    if project_id is not None:
        statement = statement.where(MonitoringRecord.project_id == project_id)
    if field_officer_id:
        statement = statement.where(MonitoringRecord.field_officer_id == field_officer_id)
    if status_filter:
        statement = statement.where(MonitoringRecord.status == status_filter)
    return list(db.scalars(statement).all())


@router.get("", response_model=list[MonitoringRecordOut])
def list_records(
    project_id: int | None = None,
    field_officer_id: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[MonitoringRecord]:
    return query_records(
        db,
        project_id=project_id,
        field_officer_id=field_officer_id,
        status_filter=status_filter,
        include_archived=include_archived,
    )


@router.get("/{record_id}", response_model=MonitoringRecordOut)
def get_record(record_id: int, db: Session = Depends(get_db)) -> MonitoringRecord:
    return get_record_or_404(db, record_id)


@router.post("", response_model=MonitoringRecordOut, status_code=status.HTTP_201_CREATED)
def create_record(
    payload: MonitoringCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonitoringRecord:
    project = db.get(Project, payload.project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project not found.")
    record = recompute_record(MonitoringRecord(**payload.model_dump()))
    db.add(record)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Added monitoring record for {project.project_name} ({record.monitoring_date.isoformat()})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"record_id": record.id, "project_id": project.id},
    )
    db.commit()
    db.refresh(record)
    return record


@router.patch("/{record_id}", response_model=MonitoringRecordOut)
def update_record(
    record_id: int,
    payload: MonitoringUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonitoringRecord:
    record = get_record_or_404(db, record_id)
    changes = payload.model_dump(exclude_unset=True)
    apply_changes(record, changes)
    recompute_record(record)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated monitoring record #{record.id}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"record_id": record.id, "fields": sorted(changes)},
    )
    db.commit()
    db.refresh(record)
    return record


@router.post("/{record_id}/archive", response_model=MonitoringRecordOut)
def archive(
    record_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonitoringRecord:
    record = get_record_or_404(db, record_id)
    archive_record(record)
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived monitoring record #{record.id}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"record_id": record.id},
    )
    db.commit()
    db.refresh(record)
    return record


@router.post("/{record_id}/restore", response_model=MonitoringRecordOut)
def restore(
    record_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonitoringRecord:
    record = get_record_or_404(db, record_id)
    restore_record(record)
    record_activity(
        db,
        module=MODULE,
        action="RESTORE",
        details=f"Restored monitoring record #{record.id}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"record_id": record.id},
    )
    db.commit()
    db.refresh(record)
    return record
