from __future__ import annotations

from sqlalchemy import Boolean, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin
from app.models.enums import BuyerStatus, BuyerType


class InstitutionalBuyer(TimestampMixin, Base):
    __tablename__ = "institutional_buyers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    buyer_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    buyer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    type: Mapped[BuyerType] = mapped_column(Enum(BuyerType, name="buyer_type"), nullable=False, index=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[BuyerStatus] = mapped_column(
        Enum(BuyerStatus, name="buyer_status"), nullable=False, default=BuyerStatus.active, index=True
    )
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
