from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from app.models.activity_log import ActivityLog
from app.models.enums import ActivityStatus

logger = logging.getLogger("livelihood.activity")

DEFAULT_USER = "System"
DEFAULT_ACTION = "Unknown Action"
DEFAULT_MODULE = "General"
UNKNOWN_IP = "Unknown"


@dataclass(frozen=True)
class ActivityPage:
    items: list[ActivityLog]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


def record_activity(
    db: Session,
    *,
    module: str | None = None,
    action: str | None = None,
    details: str | None = None,
    status: ActivityStatus | str | None = None,
    user: str | None = None,
    ip_address: str | None = None,
    metadata: dict | None = None,
) -> ActivityLog:
    """Stage an activity-log row on ``db``; the caller owns the commit."""
    entry = ActivityLog(
        timestamp=datetime.now(timezone.utc),
        user=user or DEFAULT_USER,
        action=action or DEFAULT_ACTION,
        module=module or DEFAULT_MODULE,
        details=details or "",
        ip_address=ip_address or UNKNOWN_IP,
        status=ActivityStatus(status) if status else ActivityStatus.success,
        context=metadata,
    )
    db.add(entry)
    logger.info("%s %s by %s: %s", entry.module, entry.action, entry.user, entry.details)
    return entry


def _activity_filters(search: str | None, module: str | None, status: ActivityStatus | None) -> list:
    filters = []
    if search:
        pattern = f"%{search.lower()}%"
        filters.append(
            or_(
                func.lower(ActivityLog.user).like(pattern),
                func.lower(ActivityLog.action).like(pattern),
                func.lower(ActivityLog.details).like(pattern),
                func.lower(ActivityLog.module).like(pattern),
            )
        )
    if module:
        filters.append(ActivityLog.module == module)
    if status is not None:
        filters.append(ActivityLog.status == status)
    return filters


def list_activities(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    search: str | None = None,
    module: str | None = None,
    status: ActivityStatus | None = None,
) -> ActivityPage:
    filters = _activity_filters(search, module, status)
    total = int(db.scalar(select(func.count(ActivityLog.id)).where(*filters)) or 0)
    page = max(page, 1)
    items = list(
        db.scalars(
            select(ActivityLog)
            .where(*filters)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
    )
    return ActivityPage(
        items=items,
        current_page=page,
        total_pages=math.ceil(total / limit) if total else 0,
        total_items=total,
        items_per_page=limit,
    )


def filtered_activities(
    db: Session,
    *,
    search: str | None = None,
    module: str | None = None,
    status: ActivityStatus | None = None,
) -> list[ActivityLog]:
    """Every entry matching the listing filters, newest first."""
    statement = (
        select(ActivityLog)
        .where(*_activity_filters(search, module, status))
        .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
    )
    return list(db.scalars(statement).all())


def clear_activities(db: Session, *, before: datetime | None = None) -> int:
    statement = delete(ActivityLog)
    if before is not None:
        statement = statement.where(ActivityLog.timestamp < before)
    result = db.execute(statement)
    logger.warning("Cleared %s activity log entries", result.rowcount)
    return int(result.rowcount or 0)
