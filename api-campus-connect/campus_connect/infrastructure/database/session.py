# campus_connect/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from campus_connect.config.settings import settings
from campus_connect.infrastructure.database.base_model import BaseModel


def _engine_options(url: str) -> dict:
    options = {"echo": settings.debug, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # sessões do socket (threading) usam conexões de outras threads
        options["connect_args"] = {"check_same_thread": False}
    return options


_engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

_SessionLocal = sessionmaker(
    bind=_engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


@contextmanager
def db_session() -> Iterator[Session]:
    session: Session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables() -> None:
    import campus_connect.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.create_all(_engine)


def drop_tables() -> None:
    import campus_connect.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.drop_all(_engine)
