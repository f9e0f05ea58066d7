from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin
from app.models.enums import ProjectStatus


project_associations = Table(
    "project_associations",
    Base.metadata,
    Column("project_id", ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("association_id", ForeignKey("associations.id", ondelete="CASCADE"), primary_key=True),
)


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # enterprise setup
    project_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    enterprise_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, name="project_status"),
        default=ProjectStatus.active,
        nullable=False,
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    region: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    province: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    city_municipality: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    barangay: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    # financial information
    total_sales: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    net_income_loss: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    total_savings_generated: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    cash_on_hand: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)
    cash_on_bank: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False, default=0)

    operational_information: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    market_assessment: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    operational_assessment: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    financial_assessment: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    participant: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    partnership_engagements: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    association_id: Mapped[int | None] = mapped_column(
        ForeignKey("associations.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_association_member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    membership_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    caretaker_id: Mapped[int | None] = mapped_column(
        ForeignKey("caretakers.id", ondelete="SET NULL"),
        nullable=True,
    )

    primary_association: Mapped["Association | None"] = relationship(
        "Association", foreign_keys=[association_id]
    )
    associations: Mapped[list["Association"]] = relationship(
        "Association",
        secondary=project_associations,
        back_populates="projects",
        order_by="Association.id",
    )
    caretaker: Mapped["Caretaker | None"] = relationship("Caretaker")
    monitoring_records: Mapped[list["MonitoringRecord"]] = relationship(
        "MonitoringRecord", back_populates="project", cascade="all, delete-orphan"
    )
    assets: Mapped[list["Asset"]] = relationship(
        "Asset", back_populates="project", cascade="all, delete-orphan"
    )
    issues: Mapped[list["Issue"]] = relationship(
        "Issue", back_populates="project", cascade="all, delete-orphan"
    )
    site_visits: Mapped[list["SiteVisit"]] = relationship(
        "SiteVisit", back_populates="project", cascade="all, delete-orphan"
    )
    md_attributes: Mapped[list["MDAttribute"]] = relationship(
        "MDAttribute", back_populates="project", cascade="all, delete-orphan"
    )
