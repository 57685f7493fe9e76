from sqlalchemy.orm import Session

from app.api.todo.task.services import get_task


def add_comment(db: Session, task_id: int, comment: str):
    """Load-then-save append. Two concurrent callers can overwrite each other."""
    db_task = get_task(db, task_id)
    if db_task:
        db_task.comments = list(db_task.comments or []) + [comment]
        db.commit()
        db.refresh(db_task)
    return db_task


def push_comment(db: Session, task_id: int, comment: str):
    """Append while holding the task row lock."""
    db_task = get_task(db, task_id, lock=True)
    if db_task:
        db_task.comments = list(db_task.comments or []) + [comment]
        db.commit()
        db.refresh(db_task)
    return db_task


def get_comments(db: Session, task_id: int):
    db_task = get_task(db, task_id)
    if db_task is None:
        return None
    return db_task.comments or []
