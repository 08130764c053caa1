"""SQLAlchemy database engine and session management.

Provides the synchronous persistence context:
- Connection pooling (configurable pool_size/max_overflow) for server databases
- FastAPI dependency injection via get_session(), one session per request
- Context-manager sessions for scripts and the CLI
- Schema create/drop helpers (dev/test only; no migrations engine)
"""

from contextlib import contextmanager
from typing import Iterator

from loguru import logger
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import AppConfig, DatabaseConfig
from core.models.base import Base


# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------

def make_engine(config: DatabaseConfig) -> Engine:
    """Create an engine; pool sizing only applies to server databases."""
    kwargs: dict = {"echo": config.echo, "pool_pre_ping": True}
    if config.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = config.pool_size
        kwargs["max_overflow"] = config.max_overflow
    return create_engine(config.url, **kwargs)


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=bind, class_=Session, expire_on_commit=False)


engine = make_engine(AppConfig.from_env().database)
session_factory = make_session_factory(engine)


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_session() -> Iterator[Session]:
    """Yield one session per request, rolled back on error.

    Repositories commit their own writes, so nothing is committed here.

    Usage in FastAPI routes::

        @router.get("/items")
        def list_items(session: Session = Depends(get_session)):
            return session.scalars(select(Item)).all()
    """
    with session_factory() as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Context manager variant for non-FastAPI code (scripts, CLI, tests)."""
    with (factory or session_factory)() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Database transaction rolled back")
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

def init_db(bind: Engine | None = None) -> None:
    """Create tables from models (dev/test only)."""
    # models register themselves on Base.metadata when imported
    import verticals.book.models.db_models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(target)
    logger.info("Database schema created on {}", target.url.render_as_string(hide_password=True))


def drop_db(bind: Engine | None = None) -> None:
    import verticals.book.models.db_models  # noqa: F401

    target = bind or engine
    Base.metadata.drop_all(target)
    logger.warning("Database schema dropped on {}", target.url.render_as_string(hide_password=True))


def close_db(bind: Engine | None = None) -> None:
    """Dispose of the connection pool on shutdown."""
    (bind or engine).dispose()
