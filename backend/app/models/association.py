from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Enum, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import AssociationStatus


class Association(TimestampMixin, Base):
    __tablename__ = "associations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date_formulated: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[AssociationStatus] = mapped_column(
        Enum(AssociationStatus, name="association_status"),
        default=AssociationStatus.active,
        nullable=False,
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    province: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    contact_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    operational_reason: Mapped[str] = mapped_column(Text, nullable=False, default="")

    no_active_members: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_inactive_members: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    covid_affected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    profit_sharing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    profit_sharing_amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    loan_scheme: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    loan_scheme_amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    registrations_certifications: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    final_org_adjectival_rating: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    final_org_rating_assessment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    caretakers: Mapped[list["Caretaker"]] = relationship("Caretaker", back_populates="association")
    financial_reports: Mapped[list["FinancialReport"]] = relationship(
        "FinancialReport", back_populates="association", cascade="all, delete-orphan"
    )
    issues: Mapped[list["Issue"]] = relationship("Issue", back_populates="association")
    projects: Mapped[list["Project"]] = relationship(
        "Project",
        secondary="project_associations",
        back_populates="associations",
    )

    @property
    def total_members(self) -> int:
        return max(0, (self.no_active_members or 0) + (self.no_inactive_members or 0))
