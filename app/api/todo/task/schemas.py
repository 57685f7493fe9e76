from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime

from app.api.todo.schemas import to_naive_utc

TaskStatus = Literal["To Do", "In Progress", "Completed"]


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    # Anything outside TaskStatus falls back to "To Do"
    status: Optional[str] = None

    model_config = {
        "populate_by_name": True
    }

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return to_naive_utc(value)


class TaskStatusUpdate(BaseModel):
    status: Optional[TaskStatus] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assignee: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")

    model_config = {
        "populate_by_name": True
    }

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return to_naive_utc(value)


class FavoriteToggle(BaseModel):
    user_email: str = Field(alias="userEmail")

    model_config = {
        "populate_by_name": True
    }


class TaskSummary(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    status: str
    due_date: Optional[datetime] = Field(default=None, serialization_alias="dueDate")
    project_id: Optional[int] = Field(default=None, serialization_alias="project")
    favorites: List[str] = []
    comments: List[str] = []

    model_config = {
        "from_attributes": True
    }


class TaskOut(TaskSummary):
    assignee: Optional[str] = None


class TaskEnvelope(BaseModel):
    message: str
    task: TaskOut
