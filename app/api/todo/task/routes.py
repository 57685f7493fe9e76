import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.errors import internal_error
from app.api.todo.schemas import Message
from app.api.todo.project import services as project_services
from . import schemas, services

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/projects/{project_id}/tasks", response_model=list[schemas.TaskOut])
def tasks_by_project(project_id: int, db: Session = Depends(get_db)):
    with internal_error("Error fetching tasks"):
        return services.get_tasks_by_project(db, project_id)


@router.post("/projects/{project_id}/tasks", status_code=status.HTTP_201_CREATED, response_model=schemas.TaskOut)
def create_task(
    project_id: int,
    task: schemas.TaskCreate,
    db: Session = Depends(get_db)
):
    logger.info("Received status: %s", task.status)
    with internal_error("Error creating task"):
        project = project_services.get_project(db, project_id)
        if not project:
            raise HTTPException(status_code=404, detail="Project not found")
        db_task = services.create_task(db, project, task)

    logger.info("Task %s created with status: %s", db_task.id, db_task.status)
    return db_task


@router.get("/tasks", response_model=list[schemas.TaskSummary])
def tasks_for_user(email: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Every task in a project the user created or is assigned to.
    """
    logger.info("Fetching tasks for user: %s", email)
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    with internal_error("Server error"):
        projects = project_services.get_projects_for_member(db, email)
        if not projects:
            logger.info("No projects found for %s", email)
            return []
        return services.get_tasks_for_projects(db, [p.id for p in projects])


@router.put("/tasks/{task_id}", response_model=schemas.TaskOut)
def update_task_status(
    task_id: int,
    task: schemas.TaskStatusUpdate,
    db: Session = Depends(get_db)
):
    with internal_error("Error updating task"):
        updated = services.update_task(db, task_id, task)
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated


@router.put("/tasks/{task_id}/details", response_model=schemas.TaskEnvelope)
def update_task(
    task_id: int,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db)
):
    with internal_error("Error updating task"):
        updated = services.update_task(db, task_id, task)
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task updated successfully", "task": updated}


@router.delete("/tasks/{task_id}", response_model=Message)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    with internal_error("Error deleting task"):
        deleted = services.delete_task(db, task_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task deleted successfully"}


@router.put("/tasks/{task_id}/favorite", response_model=schemas.TaskEnvelope)
def toggle_favorite(
    task_id: int,
    body: schemas.FavoriteToggle,
    db: Session = Depends(get_db)
):
    with internal_error("Internal Server Error"):
        task = services.toggle_favorite(db, task_id, body.user_email)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Favorite toggled", "task": task}
