from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class TaskCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Order chassis"])
    description: str | None = None
    milestone_id: int | None = Field(None, examples=[1])
    start_date: date | None = Field(None, examples=["2024-01-10"])
    due_date: date | None = Field(None, examples=["2024-01-24"])
    is_completed: bool = False


class TaskUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    milestone_id: int | None = None
    start_date: date | None = None
    due_date: date | None = None
    completed_date: date | None = None
    is_completed: bool | None = None

    @field_validator("name", "is_completed", mode="before")
    @classmethod
    def reject_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class TaskRead(BaseModel):
    id: int
    project_id: int
    milestone_id: int | None = None
    name: str
    description: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    completed_date: date | None = None
    is_completed: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
