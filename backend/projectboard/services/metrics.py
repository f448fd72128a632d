from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from projectboard.models.billing_milestone import BILLING_STATUS_PAID, BillingMilestone
from projectboard.models.project import Project
from projectboard.models.task import Task
from projectboard.services.date_values import DateValue, known_date

TASK_WEIGHT = 0.4
BILLING_WEIGHT = 0.3
TIMELINE_WEIGHT = 0.3

# Not derived from history yet; reported with change_is_placeholder=True.
PLACEHOLDER_TREND_CHANGE = 5


@dataclass(frozen=True)
class DepartmentPercentages:
    fabrication: float = 0.0
    paint: float = 0.0
    assembly: float = 0.0
    it: float = 0.0
    ntc_testing: float = 0.0
    qc: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())


@dataclass(frozen=True)
class PhaseVisibility:
    fabrication: bool = True
    paint: bool = True
    assembly: bool = True
    it: bool = True
    ntc_testing: bool = True
    qc: bool = True

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)

    @property
    def all_visible(self) -> bool:
        return all(self.as_dict().values())


@dataclass(frozen=True)
class HealthScore:
    score: int
    task_score: int
    billing_score: int
    timeline_score: int
    expected_progress: float | None
    risk_level: str
    change: int
    change_is_placeholder: bool = True


def round_half_up(value: float, digits: int = 0) -> float:
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def _completion_ratio(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return completed / total * 100


def calculate_task_score(tasks: Iterable[Task] | None) -> float:
    task_list = list(tasks or [])
    completed = sum(1 for task in task_list if task.is_completed)
    return _completion_ratio(completed, len(task_list))


def calculate_progress(tasks: Iterable[Task] | None) -> int:
    return int(round_half_up(clamp_percent(calculate_task_score(tasks))))


def calculate_billing_score(billing_milestones: Iterable[BillingMilestone] | None) -> float:
    milestone_list = list(billing_milestones or [])
    paid = sum(1 for milestone in milestone_list if (milestone.status or "").lower() == BILLING_STATUS_PAID)
    return _completion_ratio(paid, len(milestone_list))


def calculate_expected_progress(
    start_date: DateValue | date | str | None,
    end_date: DateValue | date | str | None,
    today: date,
) -> float | None:
    start = known_date(start_date)
    end = known_date(end_date)
    if start is None or end is None:
        return None
    total_days = (end - start).days
    if total_days <= 0:
        return 100.0
    elapsed_days = (today - start).days
    return clamp_percent(elapsed_days / total_days * 100)


def calculate_timeline_score(percent_complete: float | None, expected_progress: float | None) -> float:
    if expected_progress is None:
        return 100.0
    actual = clamp_percent(float(percent_complete or 0))
    return clamp_percent(100 - abs(actual - expected_progress))


def risk_level_for_score(score: float) -> str:
    if score < 30:
        return "Critical"
    if score < 50:
        return "High"
    if score < 70:
        return "Medium"
    return "Low"


def calculate_health_score(
    project: Project,
    tasks: Iterable[Task] | None,
    billing_milestones: Iterable[BillingMilestone] | None,
    today: date | None = None,
) -> HealthScore:
    today = today or date.today()
    task_score = calculate_task_score(tasks)
    billing_score = calculate_billing_score(billing_milestones)
    expected_progress = calculate_expected_progress(project.start_date, project.estimated_completion_date, today)
    timeline_score = calculate_timeline_score(project.percent_complete, expected_progress)

    overall = TASK_WEIGHT * task_score + BILLING_WEIGHT * billing_score + TIMELINE_WEIGHT * timeline_score
    score = int(round_half_up(clamp_percent(overall)))

    return HealthScore(
        score=score,
        task_score=int(round_half_up(task_score)),
        billing_score=int(round_half_up(billing_score)),
        timeline_score=int(round_half_up(timeline_score)),
        expected_progress=round_half_up(expected_progress, 2) if expected_progress is not None else None,
        risk_level=risk_level_for_score(score),
        change=PLACEHOLDER_TREND_CHANGE,
    )


def project_department_percentages(project: Project) -> DepartmentPercentages:
    return DepartmentPercentages(
        fabrication=float(project.fabrication_percent or 0),
        paint=float(project.paint_percent or 0),
        assembly=float(project.assembly_percent or 0),
        it=float(project.it_percent or 0),
        ntc_testing=float(project.ntc_testing_percent or 0),
        qc=float(project.qc_percent or 0),
    )


def _flag(value: bool | None) -> bool:
    return True if value is None else bool(value)


def project_phase_visibility(project: Project) -> PhaseVisibility:
    return PhaseVisibility(
        fabrication=_flag(project.show_fab_phase),
        paint=_flag(project.show_paint_phase),
        assembly=_flag(project.show_production_phase),
        it=_flag(project.show_it_phase),
        ntc_testing=_flag(project.show_ntc_phase),
        qc=_flag(project.show_qc_phase),
    )


def redistribute_department_percentages(
    percentages: DepartmentPercentages,
    visibility: PhaseVisibility,
) -> DepartmentPercentages:
    if visibility.all_visible:
        return percentages

    raw = percentages.as_dict()
    visible = visibility.as_dict()
    visible_sum = sum(value for name, value in raw.items() if visible[name])
    if visible_sum <= 0:
        return DepartmentPercentages()

    factor = 100 / visible_sum
    return DepartmentPercentages(
        **{
            name: round_half_up(value * factor, 2) if visible[name] else 0.0
            for name, value in raw.items()
        }
    )
