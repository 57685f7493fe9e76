"""
Keeps the two sides of the Project <-> Task link in step.

A task's ``project_id`` must always appear in that project's ``tasks`` list.
Every path that creates or removes a task goes through these helpers; none of
them commit, the caller owns the transaction.
"""
from sqlalchemy.orm import Session

from app.db.models.todo import Project, Task


def link_task(db: Session, task: Task, project: Project) -> Task:
    task.project_id = project.id
    db.add(task)
    db.flush()  # assigns task.id

    # JSON columns only notice reassignment, not in-place appends
    project.tasks = list(project.tasks or []) + [task.id]
    return task


def unlink_task(db: Session, task: Task) -> None:
    project = db.get(Project, task.project_id) if task.project_id is not None else None
    if project is not None:
        project.tasks = [tid for tid in (project.tasks or []) if tid != task.id]
    db.delete(task)


def cascade_project(db: Session, project: Project) -> int:
    """Delete the project along with every task pointing at it. Returns the task count."""
    removed = (
        db.query(Task)
        .filter(Task.project_id == project.id)
        .delete(synchronize_session=False)
    )
    db.delete(project)
    return removed
