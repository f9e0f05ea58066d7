from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import LivelihoodStatus


class MDAttribute(TimestampMixin, Base):
    """Market-demand attribute assessment of a project, four scores out of 10."""

    __tablename__ = "md_attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    attribute_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assessment_date: Mapped[date] = mapped_column(Date, nullable=False)
    market_demand_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    market_demand_remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    market_supply_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    market_supply_remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    enterprise_plan_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    enterprise_plan_remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    financial_stability_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    financial_stability_remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    total_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    livelihood_status: Mapped[LivelihoodStatus] = mapped_column(
        Enum(LivelihoodStatus, name="livelihood_status"), nullable=False, default=LivelihoodStatus.stable
    )
    assessed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    project: Mapped["Project"] = relationship("Project", back_populates="md_attributes")
