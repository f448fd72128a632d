from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from projectboard.models.manufacturing import ALLOWED_SCHEDULE_STATUSES


class ManufacturingBayCreate(BaseModel):
    bay_number: int = Field(..., ge=1, examples=[3])
    name: str = Field(..., min_length=1, examples=["Bay 3"])
    description: str | None = None
    team: str | None = Field("General", examples=["Chevron"])
    staff_count: int = Field(0, ge=0)
    hours_per_person_per_week: int = Field(40, ge=0)
    is_active: bool = True


class ManufacturingBayRead(BaseModel):
    id: int
    bay_number: int
    name: str
    description: str | None = None
    team: str | None = None
    staff_count: int
    hours_per_person_per_week: int
    is_active: bool

    model_config = {"from_attributes": True}


class ManufacturingScheduleCreate(BaseModel):
    bay_id: int = Field(..., examples=[1])
    project_id: int = Field(..., examples=[1])
    start_date: date = Field(..., examples=["2024-02-05"])
    end_date: date = Field(..., examples=["2024-05-31"])
    total_hours: int | None = Field(1000, ge=0)
    row: int = Field(0, ge=0, le=3)
    status: str = Field("scheduled", examples=["scheduled"])
    notes: str | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in ALLOWED_SCHEDULE_STATUSES:
            raise ValueError(f"Unknown schedule status: {value}")
        return normalized

    @model_validator(mode="after")
    def check_dates(self) -> "ManufacturingScheduleCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ManufacturingScheduleRead(BaseModel):
    id: int
    bay_id: int
    project_id: int
    start_date: date
    end_date: date
    total_hours: int | None = None
    row: int
    status: str
    notes: str | None = None

    model_config = {"from_attributes": True}


class PhaseAlignmentRead(BaseModel):
    project_id: int
    project_number: str
    phase: str = Field(..., examples=["PRODUCTION"])
    start_date: date
    end_date: date


class WeeklyUtilizationRead(BaseModel):
    week_key: str = Field(..., examples=["2024-03-04"])
    week_start: date
    week_end: date
    bay_id: int
    bay_name: str
    team_name: str
    utilization_percentage: int = Field(..., examples=[85])
    project_count: int
    aligned_phases: list[PhaseAlignmentRead] = Field(default_factory=list)
