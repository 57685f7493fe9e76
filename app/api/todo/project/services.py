from typing import List, Optional

from sqlalchemy.orm import Session

from app.db.links import cascade_project
from app.db.models.todo.project import Project
from app.db.models.todo.task import Task
from . import schemas


def create_project(db: Session, created_by: str, files: List[str], **fields):
    db_project = Project(created_by=created_by, files=files, tasks=[], **fields)
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    return db_project


def get_projects_by_creator(db: Session, email: str):
    return db.query(Project).filter(Project.created_by == email).all()


def get_projects_for_member(db: Session, email: str):
    """Projects the email created or is assigned to."""
    return db.query(Project).filter(
        (Project.created_by == email) | (Project.assignee == email)
    ).all()


def get_project(db: Session, project_id: int) -> Optional[Project]:
    return db.get(Project, project_id)


def get_owned_projects(db: Session, user_id: int):
    return db.query(Project).filter(Project.user_id == user_id).all()


def get_owned_project(db: Session, project_id: int, user_id: int):
    return db.query(Project).filter(Project.id == project_id, Project.user_id == user_id).first()


def expand_tasks(db: Session, project: Project) -> dict:
    """Project as a dict with its task ids swapped for the task rows, in list order."""
    ids = list(project.tasks or [])
    rows = {t.id: t for t in db.query(Task).filter(Task.id.in_(ids)).all()} if ids else {}
    data = schemas.ProjectOut.model_validate(project).model_dump()
    data["tasks"] = [rows[tid] for tid in ids if tid in rows]
    return data


def update_project(db: Session, project_id: int, project: schemas.ProjectUpdate):
    db_project = get_project(db, project_id)
    if db_project:
        for key, value in project.model_dump(exclude_unset=True).items():
            setattr(db_project, key, value)
        db.commit()
        db.refresh(db_project)
    return db_project


def delete_project(db: Session, project_id: int):
    db_project = get_project(db, project_id)
    if db_project:
        cascade_project(db, db_project)
        db.commit()
    return db_project
