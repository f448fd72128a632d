from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from projectboard.db.session import get_db
from projectboard.repositories import milestones as milestones_repo
from projectboard.repositories import tasks as tasks_repo
from projectboard.schemas.task import TaskRead, TaskUpdate

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, db: Session = Depends(get_db)) -> TaskRead:
    task = tasks_repo.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskRead.model_validate(task)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(task_id: int, payload: TaskUpdate, db: Session = Depends(get_db)) -> TaskRead:
    task = tasks_repo.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    updates = payload.model_dump(exclude_unset=True)
    milestone_id = updates.get("milestone_id")
    if milestone_id is not None:
        milestone = milestones_repo.get_milestone(db, milestone_id)
        if not milestone or milestone.project_id != task.project_id:
            raise HTTPException(status_code=404, detail="Milestone not found")

    if "is_completed" in updates:
        is_completed = updates.pop("is_completed")
        if is_completed and not task.is_completed:
            task.completed_date = updates.pop("completed_date", None) or date.today()
        elif not is_completed:
            task.completed_date = None
            updates.pop("completed_date", None)
        task.is_completed = is_completed

    for field_name, value in updates.items():
        setattr(task, field_name, value)
    return TaskRead.model_validate(tasks_repo.update_task(db, task))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)) -> Response:
    task = tasks_repo.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    tasks_repo.delete_task(db, task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
