from __future__ import annotations

from datetime import date
from decimal import Decimal

from projectboard.models.billing_milestone import BillingMilestone
from projectboard.models.manufacturing import ManufacturingSchedule
from projectboard.models.project import Project
from projectboard.models.task import Task
from projectboard.services.project_metrics import (
    build_project_metrics,
    manufacturing_status,
    overall_progress,
    timeline_status,
)

TODAY = date(2024, 3, 1)


def _schedule(start: date, end: date) -> ManufacturingSchedule:
    return ManufacturingSchedule(bay_id=1, project_id=1, start_date=start, end_date=end)


def test_build_project_metrics_for_active_project():
    project = Project(
        id=1,
        project_number="804512",
        name="Command Unit",
        percent_complete=40,
        start_date=date(2024, 1, 1),
        estimated_completion_date=date(2024, 3, 5),
        ship_date="2024-03-15",
    )
    tasks = [Task(project_id=1, name=f"Task {index}", is_completed=index < 3) for index in range(4)]
    billing_milestones = [
        BillingMilestone(project_id=1, name="Deposit", amount=Decimal("100000.00"), status="paid"),
        BillingMilestone(project_id=1, name="Delivery", amount=Decimal("150000.00"), status="upcoming"),
    ]
    schedules = [_schedule(date(2024, 2, 20), date(2024, 3, 10))]

    metrics = build_project_metrics(project, tasks, billing_milestones, schedules, today=TODAY)

    assert metrics.total_tasks == 4
    assert metrics.completed_tasks == 3
    assert metrics.task_completion_rate == 75
    assert metrics.total_billing_value == 250000.0
    assert metrics.paid_billing_value == 100000.0
    assert metrics.billing_completion_rate == 50
    assert metrics.manufacturing_status == "In Progress"
    assert metrics.is_in_manufacturing is True
    assert metrics.timeline_status == "Due Soon"
    assert metrics.days_remaining == 4
    assert metrics.working_days_remaining == 3
    assert metrics.overall_progress == 75
    # 60 of 64 days elapsed, so 75% is more than 10 points behind.
    assert metrics.is_on_track is False
    assert metrics.days_until_ship == 14


def test_build_project_metrics_without_dates_or_records():
    project = Project(id=2, project_number="804513", name="Trailer", percent_complete=42.5, ship_date="PENDING")

    metrics = build_project_metrics(project, [], [], [], today=TODAY)

    assert metrics.total_tasks == 0
    assert metrics.total_billing_value == 0
    assert metrics.manufacturing_status == "Not Scheduled"
    assert metrics.is_in_manufacturing is False
    assert metrics.timeline_status == "Unknown"
    assert metrics.days_remaining is None
    assert metrics.working_days_remaining is None
    assert metrics.overall_progress == 43
    assert metrics.is_on_track is True
    assert metrics.days_until_ship is None


def test_manufacturing_status_prefers_active_then_upcoming():
    past = _schedule(date(2024, 1, 1), date(2024, 1, 31))
    future = _schedule(date(2024, 4, 1), date(2024, 4, 30))

    assert manufacturing_status([past], TODAY) == "Complete"
    assert manufacturing_status([past, future], TODAY) == "Scheduled"
    assert manufacturing_status([past, _schedule(TODAY, TODAY)], TODAY) == "In Progress"


def test_timeline_status_thresholds():
    def status_for(end: date) -> str:
        return timeline_status(Project(project_number="1", name="P", estimated_completion_date=end), TODAY)

    assert status_for(date(2024, 2, 29)) == "Overdue"
    assert status_for(date(2024, 3, 1)) == "Due Soon"
    assert status_for(date(2024, 3, 30)) == "On Track"
    assert status_for(date(2024, 3, 31)) == "Ahead"


def test_overall_progress_prefers_task_completion():
    project = Project(project_number="1", name="P", percent_complete=10)
    tasks = [Task(project_id=1, name="Only", is_completed=True)]

    assert overall_progress(project, tasks) == 100
    assert overall_progress(project, []) == 10
