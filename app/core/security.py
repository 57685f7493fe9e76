from datetime import timedelta
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.context import AppContext, get_context
from app.db.session import get_db
from app.db.models.user import User
from app.db.models.user_session import UserSession

logger = logging.getLogger(__name__)

SESSION_TIMEOUT = timedelta(seconds=60)

SESSION_EXPIRED = "Session expired. Please log in again."


def touch_session(db: Session, email: str, now) -> UserSession:
    """Upsert the session row for ``email`` with last_activity = now. Does not commit."""
    session = db.query(UserSession).filter(UserSession.email == email).first()
    if session is None:
        session = UserSession(email=email, last_activity=now)
        db.add(session)
    else:
        session.last_activity = now
    return session


def record_activity(db: Session, email: str, now) -> UserSession:
    """
    touch_session and commit.

    A concurrent first login for the same email can insert the row between our
    select and insert; the unique email then rejects ours, so retry as an update.
    """
    touch_session(db, email, now)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Session for %s created concurrently, updating instead", email)
        touch_session(db, email, now)
        db.commit()
    return db.query(UserSession).filter(UserSession.email == email).one()


def get_identity(request: Request, context: AppContext = Depends(get_context)) -> Optional[str]:
    return context.identity.identify(request)


def get_current_user(
    email: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
) -> User:
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized: No email provided")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.warning("User not found in DB for email: %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return user


def require_active_session(
    email: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> str:
    """
    Sliding-window session check.

    Rejects callers with no session or one idle for longer than SESSION_TIMEOUT
    (deleting the stale row), otherwise pushes last_activity forward.
    """
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized: No email provided")

    session = db.query(UserSession).filter(UserSession.email == email).first()
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SESSION_EXPIRED)

    now = context.clock()
    if now - session.last_activity > SESSION_TIMEOUT:
        logger.info("Session for %s expired, last activity %s", email, session.last_activity)
        db.delete(session)
        db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SESSION_EXPIRED)

    session.last_activity = now
    db.commit()
    return email
