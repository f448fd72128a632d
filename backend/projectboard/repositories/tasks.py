from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import case, select
from sqlalchemy.orm import Session

from projectboard.models.task import Task


def list_tasks(db: Session, project_id: int, milestone_id: int | None = None) -> list[Task]:
    due_date_nulls_last = case((Task.due_date.is_(None), 1), else_=0)
    stmt = select(Task).where(Task.project_id == project_id)
    if milestone_id is not None:
        stmt = stmt.where(Task.milestone_id == milestone_id)
    stmt = stmt.order_by(due_date_nulls_last.asc(), Task.due_date.asc(), Task.id.asc())
    return list(db.scalars(stmt).all())


def list_tasks_for_projects(db: Session, project_ids: Iterable[int]) -> list[Task]:
    project_ids = list(project_ids)
    if not project_ids:
        return []
    stmt = select(Task).where(Task.project_id.in_(project_ids))
    return list(db.scalars(stmt).all())


def get_task(db: Session, task_id: int) -> Task | None:
    return db.get(Task, task_id)


def create_task(db: Session, task: Task) -> Task:
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task: Task) -> Task:
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task) -> None:
    db.delete(task)
    db.commit()
