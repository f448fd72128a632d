from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class ProjectMilestoneCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Chassis arrival"])
    status: str = Field("upcoming", examples=["upcoming"])
    target_date: date | None = Field(None, examples=["2024-02-01"])
    is_completed: bool = False


class ProjectMilestoneRead(BaseModel):
    id: int
    project_id: int
    name: str
    status: str
    target_date: date | None = None
    is_completed: bool

    model_config = {"from_attributes": True}
