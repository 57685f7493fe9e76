from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from fastapi import Request

Base = declarative_base()


def create_db_engine(database_url: str):
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live and die with a single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        connect_args={"options": "-csearch_path=public"}
    )


def create_session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(engine):
    import app.db.models  # noqa: F401  registers the tables on Base
    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()
