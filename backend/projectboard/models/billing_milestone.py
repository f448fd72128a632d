from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base

BILLING_STATUS_PAID = "paid"
ALLOWED_BILLING_STATUSES = ("upcoming", "invoiced", "paid", "delayed")


class BillingMilestone(Base):
    __tablename__ = "billing_milestones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="upcoming")
    target_invoice_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_invoice_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_received_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    project = relationship("Project", back_populates="billing_milestones")
