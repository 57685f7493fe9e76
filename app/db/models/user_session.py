from sqlalchemy import Column, Integer, String, DateTime
from app.db.session import Base

class UserSession(Base):
    """
    Sliding-window activity marker, one row per email.

    The email is the whole session identity; no secret is attached to it.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    last_activity = Column(DateTime, nullable=False)
