from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from projectboard.models.project import ALLOWED_PROJECT_STATUSES
from projectboard.services.date_values import format_date_value, parse_date_value, serialize_date_value


class DateValueRead(BaseModel):
    kind: Literal["known", "pending", "not_applicable"] = Field(..., examples=["known"])
    value: date | None = Field(None, examples=["2024-06-30"])


def _normalize_date_value(value: object) -> str | None:
    return format_date_value(parse_date_value(value))


def _reject_null(value: object, field_name: str) -> object:
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value


def _normalize_status(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in ALLOWED_PROJECT_STATUSES:
        raise ValueError(f"Unknown project status: {value}")
    return normalized


class ProjectCreate(BaseModel):
    project_number: str = Field(..., min_length=1, examples=["804512"])
    name: str = Field(..., min_length=1, examples=["Mobile Command Unit"])
    description: str | None = None
    team: str | None = Field(None, examples=["Chevron"])
    location: str | None = Field(None, examples=["Columbia Falls"])
    status: str = Field("active", examples=["active"])
    percent_complete: float = Field(0.0, ge=0, le=100, examples=[35.0])
    start_date: date | None = Field(None, examples=["2024-01-08"])
    estimated_completion_date: date | None = Field(None, examples=["2024-06-28"])
    actual_completion_date: date | None = None
    ship_date: str | None = Field(None, examples=["2024-07-01", "PENDING", "N/A"])
    delivery_date: str | None = Field(None, examples=["N/A"])
    total_hours: int | None = Field(1000, ge=0)
    fabrication_percent: float = Field(27.0, ge=0, le=100)
    paint_percent: float = Field(7.0, ge=0, le=100)
    assembly_percent: float = Field(45.0, ge=0, le=100)
    it_percent: float = Field(7.0, ge=0, le=100)
    ntc_testing_percent: float = Field(7.0, ge=0, le=100)
    qc_percent: float = Field(7.0, ge=0, le=100)
    show_fab_phase: bool = True
    show_paint_phase: bool = True
    show_production_phase: bool = True
    show_it_phase: bool = True
    show_ntc_phase: bool = True
    show_qc_phase: bool = True

    @field_validator("ship_date", "delivery_date", mode="before")
    @classmethod
    def normalize_date_value(cls, value: object) -> str | None:
        return _normalize_date_value(value)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        return _normalize_status(value) or "active"


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    team: str | None = None
    location: str | None = None
    status: str | None = None
    percent_complete: float | None = Field(None, ge=0, le=100)
    start_date: date | None = None
    estimated_completion_date: date | None = None
    actual_completion_date: date | None = None
    ship_date: str | None = None
    delivery_date: str | None = None
    total_hours: int | None = Field(None, ge=0)
    fabrication_percent: float | None = Field(None, ge=0, le=100)
    paint_percent: float | None = Field(None, ge=0, le=100)
    assembly_percent: float | None = Field(None, ge=0, le=100)
    it_percent: float | None = Field(None, ge=0, le=100)
    ntc_testing_percent: float | None = Field(None, ge=0, le=100)
    qc_percent: float | None = Field(None, ge=0, le=100)
    show_fab_phase: bool | None = None
    show_paint_phase: bool | None = None
    show_production_phase: bool | None = None
    show_it_phase: bool | None = None
    show_ntc_phase: bool | None = None
    show_qc_phase: bool | None = None

    @field_validator("ship_date", "delivery_date", mode="before")
    @classmethod
    def normalize_date_value(cls, value: object) -> str | None:
        return _normalize_date_value(value)

    @field_validator(
        "name",
        "status",
        "percent_complete",
        "fabrication_percent",
        "paint_percent",
        "assembly_percent",
        "it_percent",
        "ntc_testing_percent",
        "qc_percent",
        "show_fab_phase",
        "show_paint_phase",
        "show_production_phase",
        "show_it_phase",
        "show_ntc_phase",
        "show_qc_phase",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value: object, info: ValidationInfo) -> object:
        return _reject_null(value, info.field_name)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str | None) -> str | None:
        return _normalize_status(value)


class ProjectRead(BaseModel):
    id: int
    project_number: str = Field(..., examples=["804512"])
    name: str = Field(..., examples=["Mobile Command Unit"])
    description: str | None = None
    team: str | None = None
    location: str | None = None
    status: str = Field(..., examples=["active"])
    percent_complete: float = Field(..., examples=[35.0])
    start_date: date | None = None
    estimated_completion_date: date | None = None
    actual_completion_date: date | None = None
    ship_date: DateValueRead | None = None
    delivery_date: DateValueRead | None = None
    total_hours: int | None = None
    fabrication_percent: float
    paint_percent: float
    assembly_percent: float
    it_percent: float
    ntc_testing_percent: float
    qc_percent: float
    show_fab_phase: bool
    show_paint_phase: bool
    show_production_phase: bool
    show_it_phase: bool
    show_ntc_phase: bool
    show_qc_phase: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("ship_date", "delivery_date", mode="before")
    @classmethod
    def expand_date_value(cls, value: object) -> object:
        if isinstance(value, (dict, DateValueRead)):
            return value
        return serialize_date_value(value)


class ProjectSummaryRead(BaseModel):
    id: int
    project_number: str
    name: str
    status: str
    percent_complete: float
    start_date: date | None = None
    estimated_completion_date: date | None = None
    progress: int = Field(..., examples=[75])
    health_score: int = Field(..., examples=[70])
    risk_level: str = Field(..., examples=["Low"])


class ProjectListResponse(BaseModel):
    total: int
    items: list[ProjectSummaryRead]
