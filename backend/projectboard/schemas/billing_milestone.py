from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from projectboard.models.billing_milestone import ALLOWED_BILLING_STATUSES


def _normalize_billing_status(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in ALLOWED_BILLING_STATUSES:
        raise ValueError(f"Unknown billing status: {value}")
    return normalized


class BillingMilestoneCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Deposit"])
    description: str | None = None
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, examples=["125000.00"])
    status: str = Field("upcoming", examples=["upcoming"])
    target_invoice_date: date | None = Field(None, examples=["2024-03-01"])
    actual_invoice_date: date | None = None
    payment_received_date: date | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        return _normalize_billing_status(value) or "upcoming"


class BillingMilestoneUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    amount: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: str | None = None
    target_invoice_date: date | None = None
    actual_invoice_date: date | None = None
    payment_received_date: date | None = None

    @field_validator("name", "amount", "status", mode="before")
    @classmethod
    def reject_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str | None) -> str | None:
        return _normalize_billing_status(value)


class BillingMilestoneRead(BaseModel):
    id: int
    project_id: int
    name: str
    description: str | None = None
    amount: Decimal
    status: str
    target_invoice_date: date | None = None
    actual_invoice_date: date | None = None
    payment_received_date: date | None = None

    model_config = {"from_attributes": True}
