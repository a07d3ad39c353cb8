import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Handlers never reach for a module-level engine; they receive a Session
    from `get_db`, which asks the Database attached to the running app.
    """

    def __init__(self, url: str, echo: bool = False):
        engine_kwargs = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory SQLite must share one connection or every session sees an empty DB
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def create_all(self) -> None:
        # Importing the package registers every model on Base.metadata
        import grindlog.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Ensured all tables exist on %s", self.engine.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def to_dict(obj, **extra) -> dict:
    """Column values of an ORM instance, plus any computed fields."""
    data = {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
    data.update(extra)
    return data


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit everything added inside the block as one unit.

    Any exception rolls the whole unit back before propagating, so a parent
    row is never left without its dependent rows.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
