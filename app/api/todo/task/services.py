from typing import Optional

from sqlalchemy.orm import Session

from app.db.links import link_task, unlink_task
from app.db.models.todo.project import Project
from app.db.models.todo.task import Task, TASK_STATUSES, DEFAULT_TASK_STATUS
from . import schemas


def normalize_status(status: Optional[str]) -> str:
    return status if status in TASK_STATUSES else DEFAULT_TASK_STATUS


def get_tasks_by_project(db: Session, project_id: int):
    return db.query(Task).filter(Task.project_id == project_id).all()


def get_tasks_for_projects(db: Session, project_ids: list):
    if not project_ids:
        return []
    return db.query(Task).filter(Task.project_id.in_(project_ids)).all()


def get_task(db: Session, task_id: int, lock: bool = False) -> Optional[Task]:
    query = db.query(Task).filter(Task.id == task_id)
    if lock:
        query = query.with_for_update()
    return query.first()


def create_task(db: Session, project: Project, task: schemas.TaskCreate):
    db_task = Task(
        title=task.title,
        description=task.description,
        assignee=task.assignee,
        due_date=task.due_date,
        status=normalize_status(task.status),
        favorites=[],
        comments=[],
    )
    link_task(db, db_task, project)
    db.commit()
    db.refresh(db_task)
    return db_task


def update_task(db: Session, task_id: int, task: schemas.TaskUpdate | schemas.TaskStatusUpdate):
    db_task = get_task(db, task_id)
    if db_task:
        for key, value in task.model_dump(exclude_unset=True).items():
            if key == "status" and value is None:
                continue  # status is never cleared
            setattr(db_task, key, value)
        db.commit()
        db.refresh(db_task)
    return db_task


def delete_task(db: Session, task_id: int):
    db_task = get_task(db, task_id)
    if db_task:
        unlink_task(db, db_task)
        db.commit()
    return db_task


def toggle_favorite(db: Session, task_id: int, user_email: str):
    db_task = get_task(db, task_id, lock=True)
    if db_task:
        favorites = list(db_task.favorites or [])
        if user_email in favorites:
            favorites = [email for email in favorites if email != user_email]
        else:
            favorites.append(user_email)
        db_task.favorites = favorites
        db.commit()
        db.refresh(db_task)
    return db_task
