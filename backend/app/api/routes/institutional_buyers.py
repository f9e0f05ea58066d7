import math

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.enums import BuyerStatus, BuyerType
from app.models.institutional_buyer import InstitutionalBuyer
from app.schemas.common import PaginationOut
from app.schemas.institutional_buyers import (
    BuyerCreateRequest,
    BuyerOut,
    BuyerPage,
    BuyerStatsOut,
    BuyerTypeCountOut,
    BuyerUpdateRequest,
)
from app.services.activity import record_activity
from app.services.institutional_buyers import (
    archive_buyer,
    buyer_stats,
    ensure_unique_contact,
    get_buyer_or_404,
    restore_buyer,
    unique_buyer_code,
)


router = APIRouter(prefix="/institutional-buyers", tags=["institutional-buyers"])

MODULE = "Institutional Buyers"


def _filters(
    search: str | None,
    buyer_type: BuyerType | None,
    status_filter: BuyerStatus | None,
    include_archived: bool,
) -> list:
    filters = []
    if not include_archived:
        filters.append(InstitutionalBuyer.is_archived.is_(False))
    if search:
        pattern = f"%{search}%"
        filters.append(
            or_(
                InstitutionalBuyer.buyer_name.ilike(pattern),
                InstitutionalBuyer.contact_person.ilike(pattern),
                InstitutionalBuyer.email.ilike(pattern),
                InstitutionalBuyer.buyer_code.ilike(pattern),
            )
        )
    if buyer_type is not None:
        filters.append(InstitutionalBuyer.type == buyer_type)
    if status_filter is not None:
        filters.append(InstitutionalBuyer.status == status_filter)
    return filters


@router.get("", response_model=BuyerPage)
def list_buyers(
    search: str | None = None,
    buyer_type: BuyerType | None = Query(default=None, alias="type"),
    status_filter: BuyerStatus | None = Query(default=None, alias="status"),
    include_archived: bool = False,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=200),
    db: Session = Depends(get_db),
) -> BuyerPage:
    filters = _filters(search, buyer_type, status_filter, include_archived)
    total = int(db.scalar(select(func.count(InstitutionalBuyer.id)).where(*filters)) or 0)
    buyers = db.scalars(
        select(InstitutionalBuyer)
        .where(*filters)
        .order_by(InstitutionalBuyer.created_at.desc(), InstitutionalBuyer.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    return BuyerPage(
        buyers=[BuyerOut.model_validate(buyer) for buyer in buyers],
        pagination=PaginationOut(
            current_page=page,
            total_pages=math.ceil(total / limit) if total else 0,
            total_items=total,
            items_per_page=limit,
        ),
    )


@router.get("/stats", response_model=BuyerStatsOut)
def get_buyer_stats(db: Session = Depends(get_db)) -> BuyerStatsOut:
    buyers = list(db.scalars(select(InstitutionalBuyer).where(InstitutionalBuyer.is_archived.is_(False))).all())
    stats = buyer_stats(buyers)
    return BuyerStatsOut(
        total_buyers=stats.total_buyers,
        active_buyers=stats.active_buyers,
        draft_buyers=stats.draft_buyers,
        buyers_by_type=[BuyerTypeCountOut(type=key, count=count) for key, count in stats.buyers_by_type],
    )


@router.get("/{buyer_id}", response_model=BuyerOut)
def get_buyer(buyer_id: int, db: Session = Depends(get_db)) -> InstitutionalBuyer:
    return get_buyer_or_404(db, buyer_id)


@router.post("", response_model=BuyerOut, status_code=status.HTTP_201_CREATED)
def create_buyer(
    payload: BuyerCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> InstitutionalBuyer:
    ensure_unique_contact(db, email=payload.email, contact_number=payload.contact_number)
    buyer = InstitutionalBuyer(**payload.model_dump(), buyer_code=unique_buyer_code(db))
    db.add(buyer)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Registered buyer {buyer.buyer_name} ({buyer.buyer_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"buyer_id": buyer.id, "type": BuyerType(buyer.type).value},
    )
    db.commit()
    db.refresh(buyer)
    return buyer


@router.patch("/{buyer_id}", response_model=BuyerOut)
def update_buyer(
    buyer_id: int,
    payload: BuyerUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> InstitutionalBuyer:
    buyer = get_buyer_or_404(db, buyer_id)
    changes = payload.model_dump(exclude_unset=True)
    ensure_unique_contact(
        db,
        email=changes.get("email"),
        contact_number=changes.get("contact_number"),
        exclude_id=buyer.id,
    )
    written = apply_changes(buyer, changes)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated buyer {buyer.buyer_name} ({buyer.buyer_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"buyer_id": buyer.id, "fields": sorted(written)},
    )
    db.commit()
    db.refresh(buyer)
    return buyer


@router.post("/{buyer_id}/archive", response_model=BuyerOut)
def archive_buyer_route(
    buyer_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> InstitutionalBuyer:
    buyer = get_buyer_or_404(db, buyer_id)
    archive_buyer(buyer)
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived buyer {buyer.buyer_name} ({buyer.buyer_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"buyer_id": buyer.id},
    )
    db.commit()
    db.refresh(buyer)
    return buyer


@router.post("/{buyer_id}/restore", response_model=BuyerOut)
def restore_buyer_route(
    buyer_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> InstitutionalBuyer:
    buyer = get_buyer_or_404(db, buyer_id)
    restore_buyer(buyer)
    record_activity(
        db,
        module=MODULE,
        action="RESTORE",
        details=f"Restored buyer {buyer.buyer_name} ({buyer.buyer_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"buyer_id": buyer.id},
    )
    db.commit()
    db.refresh(buyer)
    return buyer


@router.delete("/{buyer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_buyer(
    buyer_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    buyer = get_buyer_or_404(db, buyer_id)
    db.delete(buyer)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted buyer {buyer.buyer_name} ({buyer.buyer_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"buyer_id": buyer_id},
    )
    db.commit()
    return None
