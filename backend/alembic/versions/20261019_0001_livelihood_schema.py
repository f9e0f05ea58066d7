"""Initial schema for the livelihood admin API.

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(24, 2), nullable=False, server_default="0")


def upgrade() -> None:
    association_status = sa.Enum(
        "active", "inactive", "pending", "suspended", "archived", name="association_status"
    )
    project_status = sa.Enum("active", "inactive", "pending", "completed", name="project_status")
    asset_source_type = sa.Enum(
        "purchased", "donated", "leased", "government_provided", name="asset_source_type"
    )
    asset_status = sa.Enum("active", "maintenance", "disposed", "lost", "archived", name="asset_status")
    issue_status = sa.Enum("open", "in_progress", "resolved", "closed", name="issue_status")
    issue_priority = sa.Enum("low", "medium", "high", "critical", name="issue_priority")
    caretaker_status = sa.Enum("active", "inactive", "on_leave", name="caretaker_status")
    activity_status = sa.Enum("success", "error", "warning", name="activity_status")

    op.create_table(
        "associations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("date_formulated", sa.Date(), nullable=True),
        sa.Column("status", association_status, nullable=False, server_default="active"),
        sa.Column("location", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("province", sa.String(length=100), nullable=True),
        sa.Column("contact_person", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("contact_number", sa.String(length=50), nullable=False, server_default=""),
        sa.Column("email", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("operational_reason", sa.Text(), nullable=False, server_default=""),
        sa.Column("no_active_members", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("no_inactive_members", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("covid_affected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("profit_sharing", sa.Boolean(), nullable=False, server_default=sa.false()),
        _money("profit_sharing_amount"),
        sa.Column("loan_scheme", sa.Boolean(), nullable=False, server_default=sa.false()),
        _money("loan_scheme_amount"),
        sa.Column("registrations_certifications", sa.JSON(), nullable=False),
        sa.Column("final_org_adjectival_rating", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("final_org_rating_assessment", sa.Text(), nullable=False, server_default=""),
        sa.Column("archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_associations_id", "associations", ["id"])
    op.create_index("ix_associations_name", "associations", ["name"])

    op.create_table(
        "caretakers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("extension", sa.String(length=20), nullable=True),
        sa.Column("participant_type", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("sex", sa.String(length=20), nullable=False, server_default=""),
        sa.Column("is_lgbtq_member", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("contact_number", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column(
            "association_id",
            sa.Integer(),
            sa.ForeignKey("associations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("barangay", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("city_municipality", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("province", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("region", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("modality", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("date_provided", sa.Date(), nullable=True),
        sa.Column("date_started", sa.Date(), nullable=True),
        sa.Column("status", caretaker_status, nullable=False, server_default="active"),
        *_timestamps(),
    )
    op.create_index("ix_caretakers_id", "caretakers", ["id"])
    op.create_index("ix_caretakers_association_id", "caretakers", ["association_id"])

    op.create_table(
        "performance_assessments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "caretaker_id",
            sa.Integer(),
            sa.ForeignKey("caretakers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assessment_date", sa.Date(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("areas_of_improvement", sa.JSON(), nullable=False),
        sa.Column("strengths", sa.JSON(), nullable=False),
        sa.Column("assessed_by", sa.String(length=255), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_performance_assessments_id", "performance_assessments", ["id"])
    op.create_index(
        "ix_performance_assessments_caretaker_id", "performance_assessments", ["caretaker_id"]
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("enterprise_type", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("status", project_status, nullable=False, server_default="active"),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("province", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("city_municipality", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("barangay", sa.String(length=100), nullable=False, server_default=""),
        _money("total_sales"),
        _money("net_income_loss"),
        _money("total_savings_generated"),
        _money("cash_on_hand"),
        _money("cash_on_bank"),
        sa.Column("operational_information", sa.JSON(), nullable=False),
        sa.Column("market_assessment", sa.JSON(), nullable=False),
        sa.Column("operational_assessment", sa.JSON(), nullable=False),
        sa.Column("financial_assessment", sa.JSON(), nullable=False),
        sa.Column("participant", sa.JSON(), nullable=True),
        sa.Column("partnership_engagements", sa.JSON(), nullable=False),
        sa.Column(
            "association_id",
            sa.Integer(),
            sa.ForeignKey("associations.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("is_association_member", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("membership_type", sa.String(length=100), nullable=True),
        sa.Column(
            "caretaker_id",
            sa.Integer(),
            sa.ForeignKey("caretakers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_projects_id", "projects", ["id"])
    op.create_index("ix_projects_project_name", "projects", ["project_name"])

    op.create_table(
        "project_associations",
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "association_id",
            sa.Integer(),
            sa.ForeignKey("associations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "monitoring_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("monitoring_date", sa.Date(), nullable=False),
        sa.Column("monitoring_year", sa.Integer(), nullable=False),
        sa.Column("monitoring_frequency", sa.String(length=50), nullable=False, server_default="monthly"),
        sa.Column("field_officer_id", sa.String(length=100), nullable=False),
        sa.Column("provincial_coordinator", sa.String(length=255), nullable=True),
        sa.Column("monitoring_type", sa.String(length=100), nullable=False, server_default="regular"),
        _money("monthly_gross_sales"),
        _money("monthly_cost_of_sales"),
        _money("monthly_gross_profit"),
        _money("monthly_operating_expenses"),
        _money("monthly_net_income"),
        sa.Column("verification_methods", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False, server_default="completed"),
        sa.Column("notes_remarks", sa.Text(), nullable=True),
        sa.Column("association_ids", sa.JSON(), nullable=False),
        sa.Column("financial_status", sa.String(length=100), nullable=True),
        sa.Column("physical_progress", sa.Float(), nullable=True),
        sa.Column("challenges", sa.Text(), nullable=True),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("next_review_date", sa.Date(), nullable=True),
        sa.Column("budget_utilization", sa.Float(), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_monitoring_records_id", "monitoring_records", ["id"])
    op.create_index("ix_monitoring_records_project_id", "monitoring_records", ["project_id"])
    op.create_index("ix_monitoring_records_field_officer_id", "monitoring_records", ["field_officer_id"])
    op.create_index("ix_monitoring_records_is_archived", "monitoring_records", ["is_archived"])

    op.create_table(
        "financial_reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "association_id",
            sa.Integer(),
            sa.ForeignKey("associations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("association_name", sa.String(length=255), nullable=False),
        sa.Column(
            "caretaker_id",
            sa.Integer(),
            sa.ForeignKey("caretakers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("caretaker_name", sa.String(length=255), nullable=True),
        sa.Column("period", sa.String(length=50), nullable=False),
        _money("sales"),
        _money("costs"),
        _money("expenses"),
        _money("profit"),
        _money("share80"),
        _money("ass_share20"),
        _money("monitoring2"),
        _money("balance"),
        sa.Column("report_date", sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_financial_reports_id", "financial_reports", ["id"])
    op.create_index("ix_financial_reports_association_id", "financial_reports", ["association_id"])
    op.create_index("ix_financial_reports_period", "financial_reports", ["period"])
    op.create_index("ix_financial_reports_report_date", "financial_reports", ["report_date"])

    op.create_table(
        "assets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("asset_code", sa.String(length=50), nullable=False),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("asset_type", sa.String(length=100), nullable=False),
        sa.Column("asset_name", sa.String(length=255), nullable=False),
        sa.Column("provider_name", sa.String(length=255), nullable=False),
        sa.Column("acquisition_date", sa.Date(), nullable=False),
        sa.Column("source_type", asset_source_type, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        _money("unit_value"),
        _money("total_value"),
        sa.Column("status", asset_status, nullable=False, server_default="active"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("maintenance_schedule", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_assets_id", "assets", ["id"])
    op.create_index("ix_assets_asset_code", "assets", ["asset_code"], unique=True)
    op.create_index("ix_assets_project_id", "assets", ["project_id"])
    op.create_index("ix_assets_status", "assets", ["status"])

    op.create_table(
        "issues_challenges",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("issue_code", sa.String(length=20), nullable=False),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "association_id",
            sa.Integer(),
            sa.ForeignKey("associations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("issue_category", sa.String(length=100), nullable=True),
        sa.Column("major_issue_challenge", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", issue_status, nullable=False, server_default="open"),
        sa.Column("priority", issue_priority, nullable=False, server_default="medium"),
        sa.Column("date_reported", sa.Date(), nullable=False),
        sa.Column("date_resolved", sa.Date(), nullable=True),
        sa.Column("reported_by", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("assigned_to", sa.String(length=255), nullable=True),
        sa.Column("resolution_notes", sa.Text(), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_issues_challenges_id", "issues_challenges", ["id"])
    op.create_index("ix_issues_challenges_issue_code", "issues_challenges", ["issue_code"], unique=True)
    op.create_index("ix_issues_challenges_project_id", "issues_challenges", ["project_id"])
    op.create_index("ix_issues_challenges_association_id", "issues_challenges", ["association_id"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("user", sa.String(length=255), nullable=False, server_default="System"),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("module", sa.String(length=100), nullable=False),
        sa.Column("details", sa.Text(), nullable=False, server_default=""),
        sa.Column("ip_address", sa.String(length=100), nullable=False, server_default="Unknown"),
        sa.Column("status", activity_status, nullable=False, server_default="success"),
        sa.Column("metadata", sa.JSON(), nullable=True),
    )
    op.create_index("ix_activity_logs_id", "activity_logs", ["id"])
    op.create_index("ix_activity_logs_timestamp", "activity_logs", ["timestamp"])
    op.create_index("ix_activity_logs_module", "activity_logs", ["module"])


def downgrade() -> None:
    for table in (
        "activity_logs",
        "issues_challenges",
        "assets",
        "financial_reports",
        "monitoring_records",
        "project_associations",
        "projects",
        "performance_assessments",
        "caretakers",
        "associations",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in (
        "activity_status",
        "caretaker_status",
        "issue_priority",
        "issue_status",
        "asset_status",
        "asset_source_type",
        "project_status",
        "association_status",
    ):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
