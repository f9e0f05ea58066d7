import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.core.config import get_settings
from app.models.activity_log import ActivityLog
from app.models.enums import ActivityStatus
from app.schemas.activity_logs import (
    ActivityLogClearResponse,
    ActivityLogCreateRequest,
    ActivityLogCreateResponse,
    ActivityLogOut,
    ActivityLogPage,
)
from app.schemas.common import PaginationOut
from app.services.activity import clear_activities, list_activities, record_activity


router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])
logger = logging.getLogger("livelihood.activity")


def activity_to_out(entry: ActivityLog) -> ActivityLogOut:
    # ActivityLog.metadata is the declarative MetaData, the JSON column lives on .context
    return ActivityLogOut(
        id=entry.id,
        timestamp=entry.timestamp,
        user=entry.user,
        action=entry.action,
        module=entry.module,
        details=entry.details,
        ip_address=entry.ip_address,
        status=entry.status,
        metadata=entry.context,
    )


@router.get("", response_model=ActivityLogPage)
def get_activity_logs(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    search: str | None = None,
    module: str | None = None,
    status_filter: ActivityStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> ActivityLogPage:
    settings = get_settings()
    page_size = min(limit or settings.activity_log_page_size, settings.activity_log_max_page_size)
    result = list_activities(
        db,
        page=page,
        limit=page_size,
        search=search,
        module=module,
        status=status_filter,
    )
    return ActivityLogPage(
        activities=[activity_to_out(entry) for entry in result.items],
        pagination=PaginationOut(
            current_page=result.current_page,
            total_pages=result.total_pages,
            total_items=result.total_items,
            items_per_page=result.items_per_page,
        ),
    )


@router.post("", response_model=ActivityLogCreateResponse)
def create_activity_log(
    payload: ActivityLogCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> ActivityLogCreateResponse:
    try:
        entry = record_activity(
            db,
            module=payload.module,
            action=payload.action,
            details=payload.details,
            status=payload.status,
            user=payload.user or actor.user,
            ip_address=actor.ip_address,
            metadata=payload.metadata,
        )
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError:
        # a failed write still answers 200, flagged success=false
        db.rollback()
        logger.exception("Failed to store activity log entry.")
        return ActivityLogCreateResponse(success=False, message="Activity log could not be stored.")
    return ActivityLogCreateResponse(
        success=True,
        message="Activity logged.",
        activity=activity_to_out(entry),
    )


@router.delete("", response_model=ActivityLogClearResponse)
def delete_activity_logs(
    before: datetime | None = None,
    db: Session = Depends(get_db),
) -> ActivityLogClearResponse:
    deleted = clear_activities(db, before=before)
    db.commit()
    return ActivityLogClearResponse(success=True, deleted=deleted)
