# pteprep/core/db.py
from __future__ import annotations

from typing import Generator

from sqlmodel import Session, SQLModel, create_engine

from pteprep.core.settings import settings

# Import the tables so they register on the metadata
from pteprep.models import db_models  # noqa: F401

# Shared engine for the whole app (singleton)
_engine = None


def get_engine():
    global _engine
    if _engine is None:
        db_url = settings.DATABASE_URL

        connect_args = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        _engine = create_engine(
            db_url,
            echo=False,
            pool_pre_ping=True,  # drop broken connections (managed Postgres)
            connect_args=connect_args,
        )

    return _engine


def set_engine(engine) -> None:
    """Swap the shared engine (tests, scripts)."""
    global _engine
    _engine = engine


def init_db() -> None:
    """
    Create every table that does not exist yet.
    Runs on application startup; managed databases use the alembic revisions.
    """
    SQLModel.metadata.create_all(get_engine())


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency, injected with Depends(get_session)."""
    with Session(get_engine()) as session:
        yield session
