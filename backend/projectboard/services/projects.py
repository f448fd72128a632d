from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from projectboard.core.config import settings
from projectboard.models.project import Project
from projectboard.repositories import billing_milestones as billing_repo
from projectboard.repositories import manufacturing as manufacturing_repo
from projectboard.repositories import projects as projects_repo
from projectboard.repositories import tasks as tasks_repo
from projectboard.services.bay_utilization import WeeklyUtilization, week_bounds, weekly_bay_utilization
from projectboard.services.metrics import (
    DepartmentPercentages,
    HealthScore,
    PhaseVisibility,
    calculate_health_score,
    calculate_progress,
    project_department_percentages,
    project_phase_visibility,
    redistribute_department_percentages,
    round_half_up,
)
from projectboard.services.project_metrics import ProjectMetrics, build_project_metrics

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("name", "health", "-health", "progress", "-progress", "estimated_completion_date")


@dataclass(frozen=True)
class ProjectRollup:
    project: Project
    progress: int
    health: HealthScore


@dataclass(frozen=True)
class DepartmentBreakdown:
    raw: DepartmentPercentages
    visibility: PhaseVisibility
    redistributed: DepartmentPercentages

    @property
    def visible_total(self) -> float:
        return round_half_up(self.redistributed.total, 2)


def list_projects_with_rollups(
    db: Session,
    query: str | None = None,
    status: str | None = None,
    sort: str | None = None,
    page: int = 1,
    page_size: int = 25,
    today: date | None = None,
) -> tuple[list[ProjectRollup], int]:
    projects = projects_repo.list_projects(db, query=query, status=status)
    total = len(projects)
    if not projects:
        return [], 0

    today = today or date.today()
    project_ids = [project.id for project in projects]
    tasks_by_project: dict[int, list] = {project_id: [] for project_id in project_ids}
    for task in tasks_repo.list_tasks_for_projects(db, project_ids):
        tasks_by_project.setdefault(task.project_id, []).append(task)
    billing_by_project: dict[int, list] = {project_id: [] for project_id in project_ids}
    for milestone in billing_repo.list_billing_milestones_for_projects(db, project_ids):
        billing_by_project.setdefault(milestone.project_id, []).append(milestone)

    rollups = [
        ProjectRollup(
            project=project,
            progress=calculate_progress(tasks_by_project[project.id]),
            health=calculate_health_score(
                project,
                tasks_by_project[project.id],
                billing_by_project[project.id],
                today=today,
            ),
        )
        for project in projects
    ]

    if sort in {"health", "-health"}:
        rollups.sort(key=lambda item: item.health.score, reverse=sort == "-health")
    elif sort in {"progress", "-progress"}:
        rollups.sort(key=lambda item: item.progress, reverse=sort == "-progress")
    elif sort == "estimated_completion_date":

        def completion_key(item: ProjectRollup):
            end = item.project.estimated_completion_date
            if end is None:
                return (1, date.max)
            return (0, end)

        rollups.sort(key=completion_key)
    else:
        rollups.sort(key=lambda item: (item.project.name or "").lower())

    start = (page - 1) * page_size
    end = start + page_size
    return rollups[start:end], total


def get_project_health(db: Session, project: Project, today: date | None = None) -> HealthScore:
    tasks = tasks_repo.list_tasks(db, project.id)
    billing_milestones = billing_repo.list_billing_milestones(db, project.id)
    health = calculate_health_score(project, tasks, billing_milestones, today=today)
    logger.debug(
        "Health for project %s: %s (tasks=%s billing=%s timeline=%s)",
        project.project_number,
        health.score,
        health.task_score,
        health.billing_score,
        health.timeline_score,
    )
    return health


def get_project_metrics(db: Session, project: Project, today: date | None = None) -> ProjectMetrics:
    tasks = tasks_repo.list_tasks(db, project.id)
    billing_milestones = billing_repo.list_billing_milestones(db, project.id)
    schedules = manufacturing_repo.list_schedules(db, project_id=project.id)
    return build_project_metrics(
        project,
        tasks,
        billing_milestones,
        schedules,
        today=today,
        on_track_tolerance=settings.on_track_tolerance,
    )


def get_department_breakdown(project: Project) -> DepartmentBreakdown:
    raw = project_department_percentages(project)
    visibility = project_phase_visibility(project)
    return DepartmentBreakdown(
        raw=raw,
        visibility=visibility,
        redistributed=redistribute_department_percentages(raw, visibility),
    )


def get_bay_utilization(db: Session, start: date, weeks: int | None = None) -> list[WeeklyUtilization]:
    weeks = settings.utilization_weeks if weeks is None else weeks
    first_week_start, _ = week_bounds(start)
    schedules = manufacturing_repo.list_schedules(db, active_from=first_week_start)
    projects = {schedule.project.id: schedule.project for schedule in schedules if schedule.project}
    bays = manufacturing_repo.list_bays(db, active_only=True)
    return weekly_bay_utilization(
        schedules,
        projects.values(),
        bays,
        start=start,
        weeks=weeks,
        excluded_teams=settings.excluded_team_names,
    )
