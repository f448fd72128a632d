from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0002_add_phase_visibility_and_task_links"
down_revision = "0001_create_core_tables"
branch_labels = None
depends_on = None

PHASE_FLAGS = (
    "show_fab_phase",
    "show_paint_phase",
    "show_production_phase",
    "show_it_phase",
    "show_ntc_phase",
    "show_qc_phase",
)


def upgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    project_columns = {column["name"] for column in insp.get_columns("projects")}
    task_columns = {column["name"] for column in insp.get_columns("tasks")}

    with op.batch_alter_table("projects") as batch_op:
        for flag in PHASE_FLAGS:
            if flag not in project_columns:
                batch_op.add_column(sa.Column(flag, sa.Boolean(), nullable=False, server_default=sa.true()))
        if "ship_date" not in project_columns:
            batch_op.add_column(sa.Column("ship_date", sa.String(length=32), nullable=True))
        if "delivery_date" not in project_columns:
            batch_op.add_column(sa.Column("delivery_date", sa.String(length=32), nullable=True))

    with op.batch_alter_table("tasks") as batch_op:
        if "milestone_id" not in task_columns:
            batch_op.add_column(sa.Column("milestone_id", sa.Integer(), nullable=True))
            batch_op.create_foreign_key(
                "fk_tasks_milestone_id_project_milestones",
                "project_milestones",
                ["milestone_id"],
                ["id"],
                ondelete="SET NULL",
            )
        if "completed_date" not in task_columns:
            batch_op.add_column(sa.Column("completed_date", sa.Date(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("tasks") as batch_op:
        batch_op.drop_constraint("fk_tasks_milestone_id_project_milestones", type_="foreignkey")
        batch_op.drop_column("completed_date")
        batch_op.drop_column("milestone_id")

    with op.batch_alter_table("projects") as batch_op:
        batch_op.drop_column("delivery_date")
        batch_op.drop_column("ship_date")
        for flag in reversed(PHASE_FLAGS):
            batch_op.drop_column(flag)
