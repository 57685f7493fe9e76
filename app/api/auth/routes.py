import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.core.context import AppContext, get_context
from app.core.errors import internal_error
from app.core.hashing import Hasher
from app.core.security import record_activity, require_active_session
from . import schemas, services

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=schemas.Message)
def register(user: schemas.UserCreate, db: Session = Depends(get_db)):
    with internal_error("Error registering user"):
        if services.get_user_by_email(db, user.email):
            raise HTTPException(status_code=400, detail="User already exists")

        services.create_user(db, user)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=schemas.UserOut)
def login(
    credentials: schemas.UserLogin,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    with internal_error("Server error"):
        db_user = services.get_user_by_email(db, credentials.email)
        if not db_user:
            raise HTTPException(status_code=400, detail="User not found")

        # Activity is recorded even when the password turns out to be wrong
        record_activity(db, credentials.email, context.clock())

        if not Hasher.verify_password(credentials.password, db_user.password):
            logger.warning("Invalid password for %s", credentials.email)
            raise HTTPException(status_code=400, detail="Invalid credentials")

    return db_user


@router.get("/user", response_model=schemas.UserPublic)
def get_user(email: Optional[str] = None, db: Session = Depends(get_db)):
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")

    with internal_error("Error fetching user details"):
        db_user = services.get_user_by_email(db, email)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.get("/protected-route", response_model=schemas.Message)
def protected_route(email: str = Depends(require_active_session)):
    return {"message": "You have access"}
