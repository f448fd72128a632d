from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from projectboard.models.manufacturing import ManufacturingBay, ManufacturingSchedule
from projectboard.models.project import Project
from projectboard.services.metrics import round_half_up

PHASE_FAB = "FAB"
PHASE_PAINT = "PAINT"
PHASE_PRODUCTION = "PRODUCTION"
PHASE_IT = "IT"
PHASE_NTC = "NTC"
PHASE_QC = "QC"

# Phase order on the bay, with the project field holding its share and the fallback share.
PHASE_LAYOUT = (
    (PHASE_FAB, "fabrication_percent", 27.0),
    (PHASE_PAINT, "paint_percent", 7.0),
    (PHASE_PRODUCTION, "assembly_percent", 60.0),
    (PHASE_IT, "it_percent", 7.0),
    (PHASE_NTC, "ntc_testing_percent", 7.0),
    (PHASE_QC, "qc_percent", 7.0),
)
UTILIZATION_PHASES = (PHASE_PRODUCTION, PHASE_IT, PHASE_NTC)


@dataclass(frozen=True)
class PhaseWindow:
    phase: str
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    def overlaps(self, week_start: date, week_end: date) -> bool:
        return self.start <= week_end and self.end >= week_start


@dataclass(frozen=True)
class PhaseAlignment:
    project_id: int
    project_number: str
    phase: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class WeeklyUtilization:
    week_start: date
    week_end: date
    bay_id: int
    bay_name: str
    team_name: str
    aligned_phases: tuple[PhaseAlignment, ...]
    utilization_percentage: int
    project_count: int

    @property
    def week_key(self) -> str:
        return self.week_start.isoformat()


def calculate_phase_dates(schedule: ManufacturingSchedule, project: Project) -> dict[str, PhaseWindow]:
    total_days = (schedule.end_date - schedule.start_date).days
    windows: dict[str, PhaseWindow] = {}
    current = schedule.start_date
    for phase, field_name, fallback in PHASE_LAYOUT:
        percent = float(getattr(project, field_name) or fallback)
        phase_days = int(round_half_up(total_days * percent / 100))
        phase_end = current + timedelta(days=phase_days)
        windows[phase] = PhaseWindow(phase=phase, start=current, end=phase_end)
        current = phase_end
    return windows


def week_bounds(day: date) -> tuple[date, date]:
    week_start = day - timedelta(days=day.weekday())
    return week_start, week_start + timedelta(days=6)


def phase_alignments_for_week(
    week_start: date,
    week_end: date,
    schedules: Iterable[ManufacturingSchedule],
    projects_by_id: dict[int, Project],
    bay_id: int,
) -> list[PhaseAlignment]:
    alignments: list[PhaseAlignment] = []
    for schedule in schedules:
        if schedule.bay_id != bay_id:
            continue
        project = projects_by_id.get(schedule.project_id)
        if project is None:
            continue
        windows = calculate_phase_dates(schedule, project)
        for phase in UTILIZATION_PHASES:
            window = windows[phase]
            if window.days <= 0 or not window.overlaps(week_start, week_end):
                continue
            alignments.append(
                PhaseAlignment(
                    project_id=project.id,
                    project_number=project.project_number,
                    phase=phase,
                    start_date=window.start,
                    end_date=window.end,
                )
            )
    return alignments


def utilization_percentage(project_count: int) -> int:
    if project_count <= 0:
        return 0
    if project_count == 1:
        return 50
    if project_count == 2:
        return 85
    return 115


def _is_tracked_bay(bay: ManufacturingBay, excluded_teams: set[str]) -> bool:
    if not bay.team:
        return False
    return bay.team.strip().upper() not in excluded_teams


def weekly_bay_utilization(
    schedules: Iterable[ManufacturingSchedule],
    projects: Iterable[Project],
    bays: Iterable[ManufacturingBay],
    start: date,
    weeks: int = 26,
    excluded_teams: Iterable[str] = ("LIBBY",),
) -> list[WeeklyUtilization]:
    schedule_list = list(schedules)
    projects_by_id = {project.id: project for project in projects}
    excluded = {team.strip().upper() for team in excluded_teams}
    tracked_bays = [bay for bay in bays if _is_tracked_bay(bay, excluded)]

    rows: list[WeeklyUtilization] = []
    first_week_start, _ = week_bounds(start)
    for offset in range(max(0, weeks)):
        week_start = first_week_start + timedelta(weeks=offset)
        week_end = week_start + timedelta(days=6)
        for bay in tracked_bays:
            aligned = phase_alignments_for_week(week_start, week_end, schedule_list, projects_by_id, bay.id)
            project_count = len({alignment.project_id for alignment in aligned})
            rows.append(
                WeeklyUtilization(
                    week_start=week_start,
                    week_end=week_end,
                    bay_id=bay.id,
                    bay_name=bay.name,
                    team_name=bay.team or "Unknown",
                    aligned_phases=tuple(aligned),
                    utilization_percentage=utilization_percentage(project_count),
                    project_count=project_count,
                )
            )
    return rows
