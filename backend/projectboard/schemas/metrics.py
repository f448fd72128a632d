from __future__ import annotations

from pydantic import BaseModel, Field


class HealthBreakdownRead(BaseModel):
    task_completion: int = Field(..., examples=[100])
    billing_progress: int = Field(..., examples=[0])
    timeline_adherence: int = Field(..., examples=[100])
    expected_progress: float | None = Field(None, examples=[50.0])
    overall_risk: str = Field(..., examples=["Low"])


class ProjectHealthRead(BaseModel):
    project_id: int
    score: int = Field(..., examples=[70])
    change: int = Field(..., examples=[5])
    change_is_placeholder: bool = Field(True, description="The trend delta is not computed from history.")
    breakdown: HealthBreakdownRead


class ProjectMetricsRead(BaseModel):
    project_id: int
    total_tasks: int
    completed_tasks: int
    task_completion_rate: int = Field(..., examples=[75])
    total_billing_value: float = Field(..., examples=[250000.0])
    paid_billing_value: float = Field(..., examples=[100000.0])
    billing_completion_rate: int = Field(..., examples=[40])
    manufacturing_status: str = Field(..., examples=["In Progress"])
    is_in_manufacturing: bool
    timeline_status: str = Field(..., examples=["On Track"])
    days_remaining: int | None = None
    working_days_remaining: int | None = None
    overall_progress: int
    is_on_track: bool
    days_until_ship: int | None = None


class DepartmentPercentagesRead(BaseModel):
    fabrication: float = Field(..., examples=[27.0])
    paint: float = Field(..., examples=[7.0])
    assembly: float = Field(..., examples=[45.0])
    it: float = Field(..., examples=[7.0])
    ntc_testing: float = Field(..., examples=[7.0])
    qc: float = Field(..., examples=[7.0])


class PhaseVisibilityRead(BaseModel):
    fabrication: bool
    paint: bool
    assembly: bool
    it: bool
    ntc_testing: bool
    qc: bool


class DepartmentBreakdownRead(BaseModel):
    project_id: int
    raw: DepartmentPercentagesRead
    visibility: PhaseVisibilityRead
    redistributed: DepartmentPercentagesRead
    visible_total: float = Field(..., examples=[100.0])
