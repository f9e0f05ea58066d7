"""Site visits, MD attribute assessments and institutional buyers.

Revision ID: 20261020_0002
Revises: 20261019_0001
Create Date: 2026-10-20 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261020_0002"
down_revision: Union[str, None] = "20261019_0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    site_visit_status = sa.Enum(
        "scheduled", "in_progress", "completed", "cancelled", name="site_visit_status"
    )
    livelihood_status = sa.Enum("improved", "stable", "declined", name="livelihood_status")
    buyer_type = sa.Enum(
        "corporate", "government", "educational", "healthcare", "retail", "other", name="buyer_type"
    )
    buyer_status = sa.Enum("active", "draft", name="buyer_status")

    op.create_table(
        "site_visits",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("association_name", sa.String(length=255), nullable=False),
        sa.Column("visit_number", sa.Integer(), nullable=False),
        sa.Column("visit_date", sa.Date(), nullable=False),
        sa.Column("status", site_visit_status, nullable=False, server_default="scheduled"),
        sa.Column("visit_purpose", sa.Text(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("participants", sa.JSON(), nullable=False),
        sa.Column("findings", sa.Text(), nullable=False, server_default=""),
        sa.Column("recommendations", sa.Text(), nullable=False, server_default=""),
        sa.Column("next_steps", sa.Text(), nullable=False, server_default=""),
        sa.Column("caretakers", sa.JSON(), nullable=False),
        sa.Column(
            "assigned_caretaker_id",
            sa.Integer(),
            sa.ForeignKey("caretakers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_by", sa.String(length=255), nullable=False, server_default="Admin User"),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_site_visits_id", "site_visits", ["id"])
    op.create_index("ix_site_visits_project_id", "site_visits", ["project_id"])
    op.create_index("ix_site_visits_association_name", "site_visits", ["association_name"])
    op.create_index("ix_site_visits_status", "site_visits", ["status"])
    op.create_index("ix_site_visits_is_archived", "site_visits", ["is_archived"])

    op.create_table(
        "md_attributes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("attribute_code", sa.String(length=20), nullable=False),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assessment_date", sa.Date(), nullable=False),
        sa.Column("market_demand_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("market_demand_remarks", sa.Text(), nullable=False, server_default=""),
        sa.Column("market_supply_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("market_supply_remarks", sa.Text(), nullable=False, server_default=""),
        sa.Column("enterprise_plan_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("enterprise_plan_remarks", sa.Text(), nullable=False, server_default=""),
        sa.Column("financial_stability_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("financial_stability_remarks", sa.Text(), nullable=False, server_default=""),
        sa.Column("total_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("livelihood_status", livelihood_status, nullable=False, server_default="stable"),
        sa.Column("assessed_by", sa.String(length=255), nullable=False),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_md_attributes_id", "md_attributes", ["id"])
    op.create_index("ix_md_attributes_attribute_code", "md_attributes", ["attribute_code"], unique=True)
    op.create_index("ix_md_attributes_project_id", "md_attributes", ["project_id"])
    op.create_index("ix_md_attributes_is_archived", "md_attributes", ["is_archived"])

    op.create_table(
        "institutional_buyers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("buyer_code", sa.String(length=50), nullable=False),
        sa.Column("buyer_name", sa.String(length=255), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=False),
        sa.Column("contact_number", sa.String(length=50), nullable=False, unique=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("type", buyer_type, nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("status", buyer_status, nullable=False, server_default="active"),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_institutional_buyers_id", "institutional_buyers", ["id"])
    op.create_index("ix_institutional_buyers_buyer_code", "institutional_buyers", ["buyer_code"], unique=True)
    op.create_index("ix_institutional_buyers_type", "institutional_buyers", ["type"])
    op.create_index("ix_institutional_buyers_status", "institutional_buyers", ["status"])
    op.create_index("ix_institutional_buyers_is_archived", "institutional_buyers", ["is_archived"])


def downgrade() -> None:
    for table in ("institutional_buyers", "md_attributes", "site_visits"):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in ("buyer_status", "buyer_type", "livelihood_status", "site_visit_status"):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
