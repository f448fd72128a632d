from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from projectboard.models.billing_milestone import BILLING_STATUS_PAID, BillingMilestone
from projectboard.models.manufacturing import ManufacturingSchedule
from projectboard.models.project import Project
from projectboard.models.task import Task
from projectboard.services.date_values import known_date
from projectboard.services.metrics import (
    calculate_billing_score,
    calculate_expected_progress,
    calculate_progress,
    round_half_up,
)
from projectboard.services.work_calendar import count_working_days

MANUFACTURING_NOT_SCHEDULED = "Not Scheduled"
MANUFACTURING_IN_PROGRESS = "In Progress"
MANUFACTURING_SCHEDULED = "Scheduled"
MANUFACTURING_COMPLETE = "Complete"

TIMELINE_UNKNOWN = "Unknown"
TIMELINE_OVERDUE = "Overdue"
TIMELINE_DUE_SOON = "Due Soon"
TIMELINE_ON_TRACK = "On Track"
TIMELINE_AHEAD = "Ahead"


@dataclass(frozen=True)
class ProjectMetrics:
    total_tasks: int
    completed_tasks: int
    task_completion_rate: int
    total_billing_value: float
    paid_billing_value: float
    billing_completion_rate: int
    manufacturing_status: str
    is_in_manufacturing: bool
    timeline_status: str
    days_remaining: int | None
    working_days_remaining: int | None
    overall_progress: int
    is_on_track: bool
    days_until_ship: int | None


def _amount(value: Decimal | str | float | None) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def _is_active(schedule: ManufacturingSchedule, today: date) -> bool:
    return schedule.start_date <= today <= schedule.end_date


def manufacturing_status(schedules: Iterable[ManufacturingSchedule] | None, today: date) -> str:
    schedule_list = list(schedules or [])
    if not schedule_list:
        return MANUFACTURING_NOT_SCHEDULED
    if any(_is_active(schedule, today) for schedule in schedule_list):
        return MANUFACTURING_IN_PROGRESS
    if any(schedule.start_date > today for schedule in schedule_list):
        return MANUFACTURING_SCHEDULED
    if any(schedule.end_date < today for schedule in schedule_list):
        return MANUFACTURING_COMPLETE
    return MANUFACTURING_NOT_SCHEDULED


def days_remaining(project: Project, today: date) -> int | None:
    end = known_date(project.estimated_completion_date)
    if end is None:
        return None
    return (end - today).days


def timeline_status(project: Project, today: date) -> str:
    remaining = days_remaining(project, today)
    if remaining is None:
        return TIMELINE_UNKNOWN
    if remaining < 0:
        return TIMELINE_OVERDUE
    if remaining < 7:
        return TIMELINE_DUE_SOON
    if remaining < 30:
        return TIMELINE_ON_TRACK
    return TIMELINE_AHEAD


def overall_progress(project: Project, tasks: Iterable[Task] | None) -> int:
    task_list = list(tasks or [])
    if task_list:
        return calculate_progress(task_list)
    return int(round_half_up(float(project.percent_complete or 0)))


def is_on_track(
    project: Project,
    tasks: Iterable[Task] | None,
    today: date,
    tolerance: float = 10.0,
) -> bool:
    start = known_date(project.start_date)
    if start is None or known_date(project.estimated_completion_date) is None or today < start:
        return True
    expected = calculate_expected_progress(project.start_date, project.estimated_completion_date, today)
    if expected is None:
        return True
    return overall_progress(project, tasks) >= expected - tolerance


def build_project_metrics(
    project: Project,
    tasks: Iterable[Task] | None,
    billing_milestones: Iterable[BillingMilestone] | None,
    schedules: Iterable[ManufacturingSchedule] | None,
    today: date | None = None,
    on_track_tolerance: float = 10.0,
) -> ProjectMetrics:
    today = today or date.today()
    task_list = list(tasks or [])
    milestone_list = list(billing_milestones or [])
    schedule_list = list(schedules or [])

    total_value = sum((_amount(milestone.amount) for milestone in milestone_list), Decimal("0"))
    paid_value = sum(
        (
            _amount(milestone.amount)
            for milestone in milestone_list
            if (milestone.status or "").lower() == BILLING_STATUS_PAID
        ),
        Decimal("0"),
    )

    end = known_date(project.estimated_completion_date)
    ship = known_date(project.ship_date)

    return ProjectMetrics(
        total_tasks=len(task_list),
        completed_tasks=sum(1 for task in task_list if task.is_completed),
        task_completion_rate=calculate_progress(task_list),
        total_billing_value=float(round(total_value, 2)),
        paid_billing_value=float(round(paid_value, 2)),
        billing_completion_rate=int(round_half_up(calculate_billing_score(milestone_list))),
        manufacturing_status=manufacturing_status(schedule_list, today),
        is_in_manufacturing=any(_is_active(schedule, today) for schedule in schedule_list),
        timeline_status=timeline_status(project, today),
        days_remaining=days_remaining(project, today),
        working_days_remaining=count_working_days(today, end),
        overall_progress=overall_progress(project, task_list),
        is_on_track=is_on_track(project, task_list, today, tolerance=on_track_tolerance),
        days_until_ship=(ship - today).days if ship is not None else None,
    )
