from __future__ import annotations

import secrets
import time
from collections import Counter
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.models.enums import BuyerStatus, BuyerType
from app.models.institutional_buyer import InstitutionalBuyer
from app.services.assets import CODE_ALPHABET, CODE_SUFFIX_LENGTH


@dataclass
class BuyerStats:
    total_buyers: int
    active_buyers: int
    draft_buyers: int
    buyers_by_type: list[tuple[str, int]]


def generate_buyer_code(now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_SUFFIX_LENGTH))
    return f"BUY-{stamp}-{suffix}"


def unique_buyer_code(db: Session) -> str:
    while True:
        code = generate_buyer_code()
        if db.scalar(select(InstitutionalBuyer.id).where(InstitutionalBuyer.buyer_code == code)) is None:
            return code


def get_buyer_or_404(db: Session, buyer_id: int) -> InstitutionalBuyer:
    buyer = db.get(InstitutionalBuyer, buyer_id)
    if buyer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Institutional buyer not found.")
    return buyer


def ensure_unique_contact(
    db: Session,
    *,
    email: str | None,
    contact_number: str | None,
    exclude_id: int | None = None,
) -> None:
    """Reject a buyer whose email or contact number is already registered."""
    clauses = []
    if email:
        clauses.append(InstitutionalBuyer.email == email)
    if contact_number:
        clauses.append(InstitutionalBuyer.contact_number == contact_number)
    if not clauses:
        return
    statement = select(InstitutionalBuyer).where(or_(*clauses))
    if exclude_id is not None:
        statement = statement.where(InstitutionalBuyer.id != exclude_id)
    existing = db.scalars(statement.limit(1)).first()
    if existing is None:
        return
    field = "email" if email and existing.email == email else "contact number"
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"A buyer with this {field} already exists.",
    )


def archive_buyer(buyer: InstitutionalBuyer) -> None:
    if buyer.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Buyer is already archived.")
    buyer.is_archived = True


def restore_buyer(buyer: InstitutionalBuyer) -> None:
    if not buyer.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Buyer is not archived.")
    buyer.is_archived = False


def buyer_stats(buyers: list[InstitutionalBuyer]) -> BuyerStats:
    statuses = Counter(BuyerStatus(buyer.status) for buyer in buyers)
    types = Counter(BuyerType(buyer.type).value for buyer in buyers)
    return BuyerStats(
        total_buyers=len(buyers),
        active_buyers=statuses[BuyerStatus.active],
        draft_buyers=statuses[BuyerStatus.draft],
        buyers_by_type=sorted(types.items(), key=lambda item: (-item[1], item[0])),
    )
