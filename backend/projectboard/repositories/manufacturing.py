from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from projectboard.models.manufacturing import ManufacturingBay, ManufacturingSchedule


def list_bays(db: Session, active_only: bool = False) -> list[ManufacturingBay]:
    stmt = select(ManufacturingBay)
    if active_only:
        stmt = stmt.where(ManufacturingBay.is_active.is_(True))
    stmt = stmt.order_by(ManufacturingBay.bay_number.asc())
    return list(db.scalars(stmt).all())


def get_bay(db: Session, bay_id: int) -> ManufacturingBay | None:
    return db.get(ManufacturingBay, bay_id)


def get_bay_by_number(db: Session, bay_number: int) -> ManufacturingBay | None:
    stmt = select(ManufacturingBay).where(ManufacturingBay.bay_number == bay_number)
    return db.scalar(stmt)


def create_bay(db: Session, bay: ManufacturingBay) -> ManufacturingBay:
    db.add(bay)
    db.commit()
    db.refresh(bay)
    return bay


def list_schedules(
    db: Session,
    bay_id: int | None = None,
    project_id: int | None = None,
    active_from: date | None = None,
) -> list[ManufacturingSchedule]:
    stmt = select(ManufacturingSchedule).options(
        selectinload(ManufacturingSchedule.project),
        selectinload(ManufacturingSchedule.bay),
    )
    if bay_id is not None:
        stmt = stmt.where(ManufacturingSchedule.bay_id == bay_id)
    if project_id is not None:
        stmt = stmt.where(ManufacturingSchedule.project_id == project_id)
    if active_from is not None:
        stmt = stmt.where(ManufacturingSchedule.end_date >= active_from)
    stmt = stmt.order_by(ManufacturingSchedule.start_date.asc(), ManufacturingSchedule.id.asc())
    return list(db.scalars(stmt).all())


def create_schedule(db: Session, schedule: ManufacturingSchedule) -> ManufacturingSchedule:
    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule
