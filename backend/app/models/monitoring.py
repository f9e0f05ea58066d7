from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin


class MonitoringRecord(TimestampMixin, Base):
    __tablename__ = "monitoring_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    monitoring_date: Mapped[date] = mapped_column(Date, nullable=False)
    monitoring_year: Mapped[int] = mapped_column(Integer, nullable=False)
    monitoring_frequency: Mapped[str] = mapped_column(String(50), nullable=False, default="monthly")
    field_officer_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    provincial_coordinator: Mapped[str | None] = mapped_column(String(255), nullable=True)
    monitoring_type: Mapped[str] = mapped_column(String(100), nullable=False, default="regular")

    monthly_gross_sales: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    monthly_cost_of_sales: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    monthly_gross_profit: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    monthly_operating_expenses: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    monthly_net_income: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)

    verification_methods: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="completed")
    notes_remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    association_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    financial_status: Mapped[str | None] = mapped_column(String(100), nullable=True)
    physical_progress: Mapped[float | None] = mapped_column(Float, nullable=True)
    challenges: Mapped[str | None] = mapped_column(Text, nullable=True)
    recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)
    next_review_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    budget_utilization: Mapped[float | None] = mapped_column(Float, nullable=True)

    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    project: Mapped["Project"] = relationship("Project", back_populates="monitoring_records")
