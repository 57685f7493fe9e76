from sqlalchemy import Column, Integer, String, DateTime, JSON
from app.db.session import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    priority = Column(String, nullable=True)
    deadline = Column(DateTime, nullable=True)

    # Owner and assignee are plain emails, not foreign keys
    created_by = Column(String, nullable=False, index=True)
    assignee = Column(String, nullable=True, index=True)

    # Only read by the id-based listing; create never fills it in
    user_id = Column(Integer, nullable=True, index=True)

    files = Column(JSON, nullable=False, default=list)

    # Ordered task ids. Kept in step with Task.project_id by app.db.links
    tasks = Column(JSON, nullable=False, default=list)
