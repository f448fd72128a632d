from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from projectboard.db.session import get_db
from projectboard.models.manufacturing import ManufacturingBay, ManufacturingSchedule
from projectboard.repositories import manufacturing as manufacturing_repo
from projectboard.repositories import projects as projects_repo
from projectboard.schemas.manufacturing import (
    ManufacturingBayCreate,
    ManufacturingBayRead,
    ManufacturingScheduleCreate,
    ManufacturingScheduleRead,
    PhaseAlignmentRead,
    WeeklyUtilizationRead,
)
from projectboard.services import projects as projects_service

bays_router = APIRouter(prefix="/api/manufacturing-bays", tags=["manufacturing"])
schedules_router = APIRouter(prefix="/api/manufacturing-schedules", tags=["manufacturing"])


@bays_router.get("", response_model=list[ManufacturingBayRead])
def list_bays(active_only: bool = False, db: Session = Depends(get_db)) -> list[ManufacturingBayRead]:
    return [ManufacturingBayRead.model_validate(bay) for bay in manufacturing_repo.list_bays(db, active_only=active_only)]


@bays_router.post("", response_model=ManufacturingBayRead, status_code=status.HTTP_201_CREATED)
def create_bay(payload: ManufacturingBayCreate, db: Session = Depends(get_db)) -> ManufacturingBayRead:
    if manufacturing_repo.get_bay_by_number(db, payload.bay_number):
        raise HTTPException(status_code=409, detail=f"Bay number {payload.bay_number} already exists")
    bay = manufacturing_repo.create_bay(db, ManufacturingBay(**payload.model_dump()))
    return ManufacturingBayRead.model_validate(bay)


@schedules_router.get("", response_model=list[ManufacturingScheduleRead])
def list_schedules(
    bay_id: int | None = None,
    project_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[ManufacturingScheduleRead]:
    schedules = manufacturing_repo.list_schedules(db, bay_id=bay_id, project_id=project_id)
    return [ManufacturingScheduleRead.model_validate(schedule) for schedule in schedules]


@schedules_router.post("", response_model=ManufacturingScheduleRead, status_code=status.HTTP_201_CREATED)
def create_schedule(payload: ManufacturingScheduleCreate, db: Session = Depends(get_db)) -> ManufacturingScheduleRead:
    if not manufacturing_repo.get_bay(db, payload.bay_id):
        raise HTTPException(status_code=404, detail="Manufacturing bay not found")
    if not projects_repo.get_project(db, payload.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    schedule = manufacturing_repo.create_schedule(db, ManufacturingSchedule(**payload.model_dump()))
    return ManufacturingScheduleRead.model_validate(schedule)


@schedules_router.get("/utilization", response_model=list[WeeklyUtilizationRead])
def get_utilization(
    start: date | None = None,
    weeks: int | None = Query(default=None, ge=1, le=104),
    db: Session = Depends(get_db),
) -> list[WeeklyUtilizationRead]:
    rows = projects_service.get_bay_utilization(db, start=start or date.today(), weeks=weeks)
    return [
        WeeklyUtilizationRead(
            week_key=row.week_key,
            week_start=row.week_start,
            week_end=row.week_end,
            bay_id=row.bay_id,
            bay_name=row.bay_name,
            team_name=row.team_name,
            utilization_percentage=row.utilization_percentage,
            project_count=row.project_count,
            aligned_phases=[
                PhaseAlignmentRead(
                    project_id=alignment.project_id,
                    project_number=alignment.project_number,
                    phase=alignment.phase,
                    start_date=alignment.start_date,
                    end_date=alignment.end_date,
                )
                for alignment in row.aligned_phases
            ],
        )
        for row in rows
    ]
