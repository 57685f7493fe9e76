from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.core.identity import EmailQueryIdentity, IdentityProof
from app.core.storage import FileStore
from app.db.session import create_db_engine, create_session_factory


def utcnow() -> datetime:
    # Naive UTC, which is what the DateTime columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class AppContext:
    """Everything a request handler needs from the process, built once at startup."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    files: FileStore
    identity: IdentityProof = field(default_factory=EmailQueryIdentity)
    clock: Callable[[], datetime] = utcnow


def build_context(settings: Settings) -> AppContext:
    engine = create_db_engine(settings.DATABASE_URL)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        files=FileStore(settings.UPLOAD_DIR),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
