from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from projectboard.db.session import get_db
from projectboard.repositories import billing_milestones as billing_repo
from projectboard.schemas.billing_milestone import BillingMilestoneRead, BillingMilestoneUpdate

router = APIRouter(prefix="/api/billing-milestones", tags=["billing"])


@router.get("/{milestone_id}", response_model=BillingMilestoneRead)
def get_billing_milestone(milestone_id: int, db: Session = Depends(get_db)) -> BillingMilestoneRead:
    milestone = billing_repo.get_billing_milestone(db, milestone_id)
    if not milestone:
        raise HTTPException(status_code=404, detail="Billing milestone not found")
    return BillingMilestoneRead.model_validate(milestone)


@router.patch("/{milestone_id}", response_model=BillingMilestoneRead)
def update_billing_milestone(
    milestone_id: int,
    payload: BillingMilestoneUpdate,
    db: Session = Depends(get_db),
) -> BillingMilestoneRead:
    milestone = billing_repo.get_billing_milestone(db, milestone_id)
    if not milestone:
        raise HTTPException(status_code=404, detail="Billing milestone not found")
    updates = payload.model_dump(exclude_unset=True)
    for field_name, value in updates.items():
        setattr(milestone, field_name, value)
    return BillingMilestoneRead.model_validate(billing_repo.update_billing_milestone(db, milestone))
