from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.api.todo.schemas import to_naive_utc
from app.api.todo.task.schemas import TaskOut


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    deadline: Optional[datetime] = None
    assignee: Optional[str] = None
    created_by: Optional[str] = Field(default=None, alias="createdBy")

    model_config = {
        "populate_by_name": True
    }

    @field_validator("created_by")
    @classmethod
    def created_by_not_null(cls, value):
        # May be left out of the update, but never cleared
        if value is None:
            raise ValueError("createdBy cannot be null")
        return value

    @field_validator("deadline")
    @classmethod
    def deadline_utc(cls, value):
        return to_naive_utc(value)


class ProjectOut(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    deadline: Optional[datetime] = None
    created_by: str = Field(serialization_alias="createdBy")
    assignee: Optional[str] = None
    files: List[str] = []
    tasks: List[int] = []

    model_config = {
        "from_attributes": True
    }


class ProjectWithTasks(ProjectOut):
    tasks: List[TaskOut] = []


class ProjectEnvelope(BaseModel):
    message: str
    project: ProjectOut
