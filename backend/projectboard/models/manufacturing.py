from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base

ALLOWED_SCHEDULE_STATUSES = ("scheduled", "in_progress", "complete", "maintenance")


class ManufacturingBay(Base):
    __tablename__ = "manufacturing_bays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bay_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    team: Mapped[str | None] = mapped_column(String(100), nullable=True, default="General")
    staff_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hours_per_person_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=40)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    schedules = relationship("ManufacturingSchedule", back_populates="bay")


class ManufacturingSchedule(Base):
    __tablename__ = "manufacturing_schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bay_id: Mapped[int] = mapped_column(ForeignKey("manufacturing_bays.id"), nullable=False)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_hours: Mapped[int | None] = mapped_column(Integer, nullable=True, default=1000)
    row: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="scheduled")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    bay = relationship("ManufacturingBay", back_populates="schedules")
    project = relationship("Project", back_populates="manufacturing_schedules")
