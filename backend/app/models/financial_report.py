from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin


class FinancialReport(TimestampMixin, Base):
    __tablename__ = "financial_reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    association_id: Mapped[int] = mapped_column(
        ForeignKey("associations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    association_name: Mapped[str] = mapped_column(String(255), nullable=False)
    caretaker_id: Mapped[int | None] = mapped_column(
        ForeignKey("caretakers.id", ondelete="SET NULL"), nullable=True
    )
    caretaker_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    period: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    sales: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    costs: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    expenses: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    profit: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    share80: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    ass_share20: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    monitoring2: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    balance: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    report_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    association: Mapped["Association"] = relationship("Association", back_populates="financial_reports")
    caretaker: Mapped["Caretaker | None"] = relationship("Caretaker", back_populates="financial_reports")
