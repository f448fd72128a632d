from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from projectboard.db.session import get_db
from projectboard.models.billing_milestone import BillingMilestone
from projectboard.models.milestone import ProjectMilestone
from projectboard.models.project import Project
from projectboard.models.task import Task
from projectboard.repositories import billing_milestones as billing_repo
from projectboard.repositories import milestones as milestones_repo
from projectboard.repositories import projects as projects_repo
from projectboard.repositories import tasks as tasks_repo
from projectboard.schemas.billing_milestone import BillingMilestoneCreate, BillingMilestoneRead
from projectboard.schemas.metrics import (
    DepartmentBreakdownRead,
    DepartmentPercentagesRead,
    HealthBreakdownRead,
    PhaseVisibilityRead,
    ProjectHealthRead,
    ProjectMetricsRead,
)
from projectboard.schemas.milestone import ProjectMilestoneCreate, ProjectMilestoneRead
from projectboard.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectRead,
    ProjectSummaryRead,
    ProjectUpdate,
)
from projectboard.schemas.task import TaskCreate, TaskRead
from projectboard.services import projects as projects_service

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _get_project_or_404(db: Session, project_id: int) -> Project:
    project = projects_repo.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("", response_model=ProjectListResponse)
def list_projects(
    db: Session = Depends(get_db),
    q: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    sort: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=25, ge=1, le=200),
    as_of: date | None = None,
) -> ProjectListResponse:
    rollups, total = projects_service.list_projects_with_rollups(
        db,
        query=q,
        status=status_filter,
        sort=sort,
        page=page,
        page_size=page_size,
        today=as_of,
    )
    items = [
        ProjectSummaryRead(
            id=rollup.project.id,
            project_number=rollup.project.project_number,
            name=rollup.project.name,
            status=rollup.project.status,
            percent_complete=rollup.project.percent_complete,
            start_date=rollup.project.start_date,
            estimated_completion_date=rollup.project.estimated_completion_date,
            progress=rollup.progress,
            health_score=rollup.health.score,
            risk_level=rollup.health.risk_level,
        )
        for rollup in rollups
    ]
    return ProjectListResponse(total=total, items=items)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db)) -> ProjectRead:
    if projects_repo.get_project_by_number(db, payload.project_number):
        raise HTTPException(status_code=409, detail=f"Project number {payload.project_number} already exists")
    project = projects_repo.create_project(db, Project(**payload.model_dump()))
    return ProjectRead.model_validate(project)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: int, db: Session = Depends(get_db)) -> ProjectRead:
    return ProjectRead.model_validate(_get_project_or_404(db, project_id))


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(project_id: int, payload: ProjectUpdate, db: Session = Depends(get_db)) -> ProjectRead:
    project = _get_project_or_404(db, project_id)
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(project, field_name, value)
    return ProjectRead.model_validate(projects_repo.update_project(db, project))


@router.get("/{project_id}/health", response_model=ProjectHealthRead)
def get_project_health(project_id: int, as_of: date | None = None, db: Session = Depends(get_db)) -> ProjectHealthRead:
    project = _get_project_or_404(db, project_id)
    health = projects_service.get_project_health(db, project, today=as_of)
    return ProjectHealthRead(
        project_id=project.id,
        score=health.score,
        change=health.change,
        change_is_placeholder=health.change_is_placeholder,
        breakdown=HealthBreakdownRead(
            task_completion=health.task_score,
            billing_progress=health.billing_score,
            timeline_adherence=health.timeline_score,
            expected_progress=health.expected_progress,
            overall_risk=health.risk_level,
        ),
    )


@router.get("/{project_id}/metrics", response_model=ProjectMetricsRead)
def get_project_metrics(project_id: int, as_of: date | None = None, db: Session = Depends(get_db)) -> ProjectMetricsRead:
    project = _get_project_or_404(db, project_id)
    metrics = projects_service.get_project_metrics(db, project, today=as_of)
    return ProjectMetricsRead(project_id=project.id, **asdict(metrics))


@router.get("/{project_id}/department-percentages", response_model=DepartmentBreakdownRead)
def get_department_percentages(project_id: int, db: Session = Depends(get_db)) -> DepartmentBreakdownRead:
    project = _get_project_or_404(db, project_id)
    breakdown = projects_service.get_department_breakdown(project)
    return DepartmentBreakdownRead(
        project_id=project.id,
        raw=DepartmentPercentagesRead(**breakdown.raw.as_dict()),
        visibility=PhaseVisibilityRead(**breakdown.visibility.as_dict()),
        redistributed=DepartmentPercentagesRead(**breakdown.redistributed.as_dict()),
        visible_total=breakdown.visible_total,
    )


@router.get("/{project_id}/tasks", response_model=list[TaskRead])
def list_project_tasks(
    project_id: int,
    milestone_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[TaskRead]:
    _get_project_or_404(db, project_id)
    return [TaskRead.model_validate(task) for task in tasks_repo.list_tasks(db, project_id, milestone_id=milestone_id)]


@router.post("/{project_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_project_task(project_id: int, payload: TaskCreate, db: Session = Depends(get_db)) -> TaskRead:
    _get_project_or_404(db, project_id)
    if payload.milestone_id is not None:
        milestone = milestones_repo.get_milestone(db, payload.milestone_id)
        if not milestone or milestone.project_id != project_id:
            raise HTTPException(status_code=404, detail="Milestone not found")
    task = Task(project_id=project_id, **payload.model_dump())
    if task.is_completed:
        task.completed_date = date.today()
    return TaskRead.model_validate(tasks_repo.create_task(db, task))


@router.get("/{project_id}/milestones", response_model=list[ProjectMilestoneRead])
def list_project_milestones(project_id: int, db: Session = Depends(get_db)) -> list[ProjectMilestoneRead]:
    _get_project_or_404(db, project_id)
    return [ProjectMilestoneRead.model_validate(item) for item in milestones_repo.list_milestones(db, project_id)]


@router.post("/{project_id}/milestones", response_model=ProjectMilestoneRead, status_code=status.HTTP_201_CREATED)
def create_project_milestone(
    project_id: int,
    payload: ProjectMilestoneCreate,
    db: Session = Depends(get_db),
) -> ProjectMilestoneRead:
    _get_project_or_404(db, project_id)
    milestone = milestones_repo.create_milestone(db, ProjectMilestone(project_id=project_id, **payload.model_dump()))
    return ProjectMilestoneRead.model_validate(milestone)


@router.get("/{project_id}/billing-milestones", response_model=list[BillingMilestoneRead])
def list_project_billing_milestones(project_id: int, db: Session = Depends(get_db)) -> list[BillingMilestoneRead]:
    _get_project_or_404(db, project_id)
    return [BillingMilestoneRead.model_validate(item) for item in billing_repo.list_billing_milestones(db, project_id)]


@router.post(
    "/{project_id}/billing-milestones",
    response_model=BillingMilestoneRead,
    status_code=status.HTTP_201_CREATED,
)
def create_project_billing_milestone(
    project_id: int,
    payload: BillingMilestoneCreate,
    db: Session = Depends(get_db),
) -> BillingMilestoneRead:
    _get_project_or_404(db, project_id)
    milestone = billing_repo.create_billing_milestone(
        db,
        BillingMilestone(project_id=project_id, **payload.model_dump()),
    )
    return BillingMilestoneRead.model_validate(milestone)
