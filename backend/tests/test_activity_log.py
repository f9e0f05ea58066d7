from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from app.db.base import Base
from app.models.activity_log import ActivityLog
from app.models.enums import ActivityStatus
from app.services.activity import clear_activities, list_activities, record_activity


def _session() -> Session:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)()


def test_record_activity_applies_defaults() -> None:
    db = _session()
    entry = record_activity(db)
    db.commit()

    stored = db.scalar(select(ActivityLog).where(ActivityLog.id == entry.id))
    assert stored.user == "System"
    assert stored.action == "Unknown Action"
    assert stored.module == "General"
    assert stored.status == ActivityStatus.success
    assert stored.ip_address == "Unknown"
    assert stored.context is None


def test_metadata_round_trips_through_context_column() -> None:
    db = _session()
    entry = record_activity(db, module="Assets", action="CREATE", metadata={"asset_id": 4, "tags": ["a"]})
    db.commit()
    db.expire_all()
    assert db.get(ActivityLog, entry.id).context == {"asset_id": 4, "tags": ["a"]}


def test_listing_is_paginated_newest_first_with_filters() -> None:
    db = _session()
    for index in range(25):
        record_activity(
            db,
            module="Projects Management" if index % 2 else "Financial Reports",
            action="CREATE",
            details=f"Created item {index}",
            user="maria" if index < 5 else "juan",
            status=ActivityStatus.error if index == 24 else ActivityStatus.success,
        )
    db.commit()

    page = list_activities(db, page=1, limit=10)
    assert page.total_items == 25
    assert page.total_pages == 3
    assert len(page.items) == 10
    assert page.items[0].details == "Created item 24"

    last = list_activities(db, page=3, limit=10)
    assert len(last.items) == 5

    assert list_activities(db, search="MARIA").total_items == 5
    assert list_activities(db, search="item 1").total_items == 11
    assert list_activities(db, module="Financial Reports").total_items == 13
    assert list_activities(db, status=ActivityStatus.error).total_items == 1


def test_empty_listing_has_zero_pages() -> None:
    db = _session()
    page = list_activities(db, page=1, limit=20)
    assert page.total_items == 0
    assert page.total_pages == 0
    assert page.items == []


def test_clear_all_or_before_timestamp() -> None:
    db = _session()
    old = record_activity(db, action="OLD")
    db.flush()
    old.timestamp = datetime.now(timezone.utc) - timedelta(days=40)
    record_activity(db, action="NEW")
    db.commit()

    removed = clear_activities(db, before=datetime.now(timezone.utc) - timedelta(days=30))
    db.commit()
    assert removed == 1
    assert [row.action for row in db.scalars(select(ActivityLog)).all()] == ["NEW"]

    assert clear_activities(db) == 1
    db.commit()
    assert db.scalars(select(ActivityLog)).all() == []
