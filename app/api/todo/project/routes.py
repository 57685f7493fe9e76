import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.context import AppContext, get_context
from app.core.errors import internal_error
from app.core.security import get_current_user
from app.db.models.user import User
from app.api.todo.schemas import Message, to_naive_utc
from . import schemas, services

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_UPLOAD_FILES = 5


@router.get("/projects", response_model=list[schemas.ProjectOut])
def read_projects(email: Optional[str] = None, db: Session = Depends(get_db)):
    logger.info("Fetching projects for email: %s", email)
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    with internal_error("Server error"):
        return services.get_projects_by_creator(db, email)


@router.get("/users/me/projects", response_model=list[schemas.ProjectWithTasks])
def read_my_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Filters on user_id, which project creation never sets
    with internal_error("Error fetching projects"):
        projects = services.get_owned_projects(db, current_user.id)
        return [services.expand_tasks(db, p) for p in projects]


@router.get("/users/me/projects/{project_id}", response_model=schemas.ProjectWithTasks)
def read_my_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    with internal_error("Error fetching project"):
        project = services.get_owned_project(db, project_id, current_user.id)
        if not project:
            raise HTTPException(status_code=404, detail="Project not found")
        return services.expand_tasks(db, project)


@router.get("/projects/{project_id}", response_model=schemas.ProjectOut)
def read_project(project_id: int, db: Session = Depends(get_db)):
    with internal_error("Error fetching project details"):
        project = services.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("/projects", status_code=status.HTTP_201_CREATED, response_model=schemas.ProjectEnvelope)
def create_project(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    priority: Optional[str] = Form(None),
    deadline: Optional[datetime] = Form(None),
    assignee: Optional[str] = Form(None),
    created_by: Optional[str] = Form(None, alias="createdBy"),
    files: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    if not created_by:
        raise HTTPException(status_code=400, detail="CreatedBy (email) is required")

    files = files or []
    if len(files) > MAX_UPLOAD_FILES:
        raise HTTPException(status_code=400, detail="Too many files")

    stored = []
    with internal_error("Error creating project"):
        try:
            for upload in files:
                stored.append(context.files.save(upload))
            project = services.create_project(
                db,
                created_by=created_by,
                files=stored,
                title=title,
                description=description,
                priority=priority,
                deadline=to_naive_utc(deadline),
                assignee=assignee,
            )
        except Exception:
            # No project row points at these, so they would never be served
            context.files.discard(stored)
            raise

    logger.info("Project %s created by %s with %d file(s)", project.id, created_by, len(stored))
    return {"message": "Project created successfully", "project": project}


@router.put("/projects/{project_id}", response_model=schemas.ProjectEnvelope)
def update_project(
    project_id: int,
    project: schemas.ProjectUpdate,
    db: Session = Depends(get_db)
):
    with internal_error("Error updating project"):
        updated = services.update_project(db, project_id, project)
    if not updated:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project updated successfully", "project": updated}


@router.delete("/projects/{project_id}", response_model=Message)
def delete_project(project_id: int, db: Session = Depends(get_db)):
    with internal_error("Error deleting project"):
        deleted = services.delete_project(db, project_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"message": "Project and associated tasks deleted successfully"}
