from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from projectboard.models.project import Project


def list_projects(db: Session, query: str | None = None, status: str | None = None) -> list[Project]:
    stmt = select(Project)
    if query:
        like_query = f"%{query.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Project.name).like(like_query),
                func.lower(Project.project_number).like(like_query),
            )
        )
    if status:
        stmt = stmt.where(Project.status == status)
    stmt = stmt.order_by(Project.name.asc())
    return list(db.scalars(stmt).all())


def get_project(db: Session, project_id: int) -> Project | None:
    return db.get(Project, project_id)


def get_project_by_number(db: Session, project_number: str) -> Project | None:
    stmt = select(Project).where(Project.project_number == project_number)
    return db.scalar(stmt)


def create_project(db: Session, project: Project) -> Project:
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def update_project(db: Session, project: Project) -> Project:
    db.add(project)
    db.commit()
    db.refresh(project)
    return project
