from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.errors import internal_error
from app.api.todo.task.schemas import TaskEnvelope
from . import schemas, services

router = APIRouter()


def _require_text(comment: schemas.CommentCreate) -> str:
    if not comment.comment:
        raise HTTPException(status_code=400, detail="Comment cannot be empty")
    return comment.comment


@router.post("/tasks/{task_id}/comments", response_model=TaskEnvelope)
def add_comment(
    task_id: int,
    comment: schemas.CommentCreate,
    db: Session = Depends(get_db)
):
    text = _require_text(comment)
    with internal_error("Internal Server Error"):
        task = services.add_comment(db, task_id, text)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Comment added successfully", "task": task}


@router.get("/tasks/{task_id}/comments", response_model=schemas.CommentList)
def get_task_comments(task_id: int, db: Session = Depends(get_db)):
    with internal_error("Internal Server Error"):
        comments = services.get_comments(db, task_id)
    if comments is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"comments": comments}


@router.put("/tasks/{task_id}/comment", response_model=TaskEnvelope)
def push_comment(
    task_id: int,
    comment: schemas.CommentCreate,
    db: Session = Depends(get_db)
):
    text = _require_text(comment)
    with internal_error("Internal Server Error"):
        task = services.push_comment(db, task_id, text)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Comment added successfully", "task": task}
