from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Enum, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import SiteVisitStatus


class SiteVisit(TimestampMixin, Base):
    __tablename__ = "site_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    association_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    visit_number: Mapped[int] = mapped_column(Integer, nullable=False)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[SiteVisitStatus] = mapped_column(
        Enum(SiteVisitStatus, name="site_visit_status"),
        default=SiteVisitStatus.scheduled,
        nullable=False,
        index=True,
    )
    visit_purpose: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    participants: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    findings: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recommendations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    next_steps: Mapped[str] = mapped_column(Text, nullable=False, default="")
    caretakers: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    assigned_caretaker_id: Mapped[int | None] = mapped_column(
        ForeignKey("caretakers.id", ondelete="SET NULL"), nullable=True
    )
    created_by: Mapped[str] = mapped_column(String(255), nullable=False, default="Admin User")

    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    project: Mapped["Project"] = relationship("Project", back_populates="site_visits")
