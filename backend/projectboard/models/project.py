from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base

PROJECT_STATUS_ACTIVE = "active"
ALLOWED_PROJECT_STATUSES = ("active", "delayed", "completed", "archived", "critical", "delivered")

DEFAULT_FABRICATION_PERCENT = 27.0
DEFAULT_PAINT_PERCENT = 7.0
DEFAULT_ASSEMBLY_PERCENT = 45.0
DEFAULT_IT_PERCENT = 7.0
DEFAULT_NTC_TESTING_PERCENT = 7.0
DEFAULT_QC_PERCENT = 7.0


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    team: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=PROJECT_STATUS_ACTIVE)
    percent_complete: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    estimated_completion_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    actual_completion_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    # ISO date, "PENDING" or "N/A"
    ship_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    delivery_date: Mapped[str | None] = mapped_column(String(32), nullable=True)

    total_hours: Mapped[int | None] = mapped_column(Integer, nullable=True, default=1000)
    fabrication_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_FABRICATION_PERCENT)
    paint_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_PAINT_PERCENT)
    assembly_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_ASSEMBLY_PERCENT)
    it_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_IT_PERCENT)
    ntc_testing_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_NTC_TESTING_PERCENT)
    qc_percent: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_QC_PERCENT)

    show_fab_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_paint_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_production_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_it_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_ntc_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_qc_phase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    milestones = relationship("ProjectMilestone", back_populates="project", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")
    billing_milestones = relationship(
        "BillingMilestone",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    manufacturing_schedules = relationship("ManufacturingSchedule", back_populates="project")
