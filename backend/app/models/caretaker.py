from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Enum, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import CaretakerStatus


class Caretaker(TimestampMixin, Base):
    __tablename__ = "caretakers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    extension: Mapped[str | None] = mapped_column(String(20), nullable=True)
    participant_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    sex: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    is_lgbtq_member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contact_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    association_id: Mapped[int | None] = mapped_column(
        ForeignKey("associations.id", ondelete="SET NULL"), nullable=True, index=True
    )
    barangay: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    city_municipality: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    province: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    region: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    modality: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    date_provided: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_started: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[CaretakerStatus] = mapped_column(
        Enum(CaretakerStatus, name="caretaker_status"),
        default=CaretakerStatus.active,
        nullable=False,
    )

    association: Mapped["Association | None"] = relationship("Association", back_populates="caretakers")
    assessments: Mapped[list["PerformanceAssessment"]] = relationship(
        "PerformanceAssessment", back_populates="caretaker", cascade="all, delete-orphan"
    )
    financial_reports: Mapped[list["FinancialReport"]] = relationship(
        "FinancialReport", back_populates="caretaker"
    )

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name, self.extension]
        return " ".join(part for part in parts if part)


class PerformanceAssessment(TimestampMixin, Base):
    __tablename__ = "performance_assessments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    caretaker_id: Mapped[int] = mapped_column(
        ForeignKey("caretakers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assessment_date: Mapped[date] = mapped_column(Date, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    areas_of_improvement: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    strengths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    assessed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    categories: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    caretaker: Mapped["Caretaker"] = relationship("Caretaker", back_populates="assessments")
