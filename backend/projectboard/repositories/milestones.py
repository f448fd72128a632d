from __future__ import annotations

from sqlalchemy import case, select
from sqlalchemy.orm import Session

from projectboard.models.milestone import ProjectMilestone


def list_milestones(db: Session, project_id: int) -> list[ProjectMilestone]:
    target_nulls_last = case((ProjectMilestone.target_date.is_(None), 1), else_=0)
    stmt = (
        select(ProjectMilestone)
        .where(ProjectMilestone.project_id == project_id)
        .order_by(target_nulls_last.asc(), ProjectMilestone.target_date.asc(), ProjectMilestone.id.asc())
    )
    return list(db.scalars(stmt).all())


def get_milestone(db: Session, milestone_id: int) -> ProjectMilestone | None:
    return db.get(ProjectMilestone, milestone_id)


def create_milestone(db: Session, milestone: ProjectMilestone) -> ProjectMilestone:
    db.add(milestone)
    db.commit()
    db.refresh(milestone)
    return milestone
