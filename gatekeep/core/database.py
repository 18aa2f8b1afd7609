"""Database engines and session management (write handle plus optional read replica)."""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.core.config import get_settings


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for a PostgreSQL or SQLite URL."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory whose objects stay readable after commit."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


@lru_cache
def get_read_engine() -> Engine:
    settings = get_settings()
    if settings.DATABASE_READ_URL is None:
        return get_engine()
    return build_engine(settings.DATABASE_READ_URL, echo=settings.DEBUG)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return build_session_factory(get_engine())


@lru_cache
def get_read_session_factory() -> sessionmaker[Session]:
    return build_session_factory(get_read_engine())


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_read_db() -> Generator[Session, None, None]:
    """Like get_db, but on the read replica when one is configured."""
    db = get_read_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
