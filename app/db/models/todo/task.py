from sqlalchemy import Column, Integer, String, DateTime, JSON
from app.db.session import Base

TASK_STATUSES = ("To Do", "In Progress", "Completed")
DEFAULT_TASK_STATUS = "To Do"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    assignee = Column(String, nullable=True)
    status = Column(String, nullable=False, default=DEFAULT_TASK_STATUS)
    due_date = Column(DateTime, nullable=True)

    # Back-reference to the owning project, no FK constraint
    project_id = Column(Integer, nullable=True, index=True)

    favorites = Column(JSON, nullable=False, default=list)   # user emails
    comments = Column(JSON, nullable=False, default=list)    # free text
