from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import IssuePriority, IssueStatus


class Issue(TimestampMixin, Base):
    __tablename__ = "issues_challenges"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    issue_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    association_id: Mapped[int] = mapped_column(
        ForeignKey("associations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    issue_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    major_issue_challenge: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[IssueStatus] = mapped_column(
        Enum(IssueStatus, name="issue_status"),
        default=IssueStatus.open,
        nullable=False,
    )
    priority: Mapped[IssuePriority] = mapped_column(
        Enum(IssuePriority, name="issue_priority"),
        default=IssuePriority.medium,
        nullable=False,
    )
    date_reported: Mapped[date] = mapped_column(Date, nullable=False)
    date_resolved: Mapped[date | None] = mapped_column(Date, nullable=True)
    reported_by: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    project: Mapped["Project"] = relationship("Project", back_populates="issues")
    association: Mapped["Association"] = relationship("Association", back_populates="issues")
