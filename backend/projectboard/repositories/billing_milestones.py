from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from projectboard.models.billing_milestone import BillingMilestone


def list_billing_milestones(db: Session, project_id: int) -> list[BillingMilestone]:
    stmt = (
        select(BillingMilestone)
        .where(BillingMilestone.project_id == project_id)
        .order_by(BillingMilestone.target_invoice_date.asc(), BillingMilestone.id.asc())
    )
    return list(db.scalars(stmt).all())


def list_billing_milestones_for_projects(db: Session, project_ids: Iterable[int]) -> list[BillingMilestone]:
    project_ids = list(project_ids)
    if not project_ids:
        return []
    stmt = select(BillingMilestone).where(BillingMilestone.project_id.in_(project_ids))
    return list(db.scalars(stmt).all())


def get_billing_milestone(db: Session, milestone_id: int) -> BillingMilestone | None:
    return db.get(BillingMilestone, milestone_id)


def create_billing_milestone(db: Session, milestone: BillingMilestone) -> BillingMilestone:
    db.add(milestone)
    db.commit()
    db.refresh(milestone)
    return milestone


def update_billing_milestone(db: Session, milestone: BillingMilestone) -> BillingMilestone:
    db.add(milestone)
    db.commit()
    db.refresh(milestone)
    return milestone
