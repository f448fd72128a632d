from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_create_core_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    existing_tables = set(insp.get_table_names())

    if "projects" not in existing_tables:
        op.create_table(
            "projects",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("project_number", sa.String(length=64), nullable=False, unique=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("team", sa.String(length=100), nullable=True),
            sa.Column("location", sa.String(length=100), nullable=True),
            sa.Column("status", sa.String(length=50), nullable=False, server_default="active"),
            sa.Column("percent_complete", sa.Float(), nullable=False, server_default="0"),
            sa.Column("start_date", sa.Date(), nullable=True),
            sa.Column("estimated_completion_date", sa.Date(), nullable=True),
            sa.Column("actual_completion_date", sa.Date(), nullable=True),
            sa.Column("total_hours", sa.Integer(), nullable=True),
            sa.Column("fabrication_percent", sa.Float(), nullable=False, server_default="27"),
            sa.Column("paint_percent", sa.Float(), nullable=False, server_default="7"),
            sa.Column("assembly_percent", sa.Float(), nullable=False, server_default="45"),
            sa.Column("it_percent", sa.Float(), nullable=False, server_default="7"),
            sa.Column("ntc_testing_percent", sa.Float(), nullable=False, server_default="7"),
            sa.Column("qc_percent", sa.Float(), nullable=False, server_default="7"),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )
    if "project_milestones" not in existing_tables:
        op.create_table(
            "project_milestones",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(
                "project_id",
                sa.Integer(),
                sa.ForeignKey("projects.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("status", sa.String(length=50), nullable=False, server_default="upcoming"),
            sa.Column("target_date", sa.Date(), nullable=True),
            sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
    if "tasks" not in existing_tables:
        op.create_table(
            "tasks",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(
                "project_id",
                sa.Integer(),
                sa.ForeignKey("projects.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("start_date", sa.Date(), nullable=True),
            sa.Column("due_date", sa.Date(), nullable=True),
            sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
    if "billing_milestones" not in existing_tables:
        op.create_table(
            "billing_milestones",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(
                "project_id",
                sa.Integer(),
                sa.ForeignKey("projects.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("amount", sa.Numeric(10, 2), nullable=False),
            sa.Column("status", sa.String(length=50), nullable=False, server_default="upcoming"),
            sa.Column("target_invoice_date", sa.Date(), nullable=True),
            sa.Column("actual_invoice_date", sa.Date(), nullable=True),
            sa.Column("payment_received_date", sa.Date(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )
    if "manufacturing_bays" not in existing_tables:
        op.create_table(
            "manufacturing_bays",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("bay_number", sa.Integer(), nullable=False, unique=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("team", sa.String(length=100), nullable=True),
            sa.Column("staff_count", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("hours_per_person_per_week", sa.Integer(), nullable=False, server_default="40"),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
    if "manufacturing_schedules" not in existing_tables:
        op.create_table(
            "manufacturing_schedules",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("bay_id", sa.Integer(), sa.ForeignKey("manufacturing_bays.id"), nullable=False),
            sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id"), nullable=False),
            sa.Column("start_date", sa.Date(), nullable=False),
            sa.Column("end_date", sa.Date(), nullable=False),
            sa.Column("total_hours", sa.Integer(), nullable=True),
            sa.Column("row", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("status", sa.String(length=50), nullable=False, server_default="scheduled"),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )


def downgrade() -> None:
    op.drop_table("manufacturing_schedules")
    op.drop_table("manufacturing_bays")
    op.drop_table("billing_milestones")
    op.drop_table("tasks")
    op.drop_table("project_milestones")
    op.drop_table("projects")
