import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from teamtasks.config.settings import settings

Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(url: str = None) -> Engine:
    """Build an engine for the given URL (defaults to DATABASE_URL)"""
    url = url or settings.DATABASE_URL
    if settings.is_sqlite(url):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # one shared connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    # If you're using PostgreSQL on Render or similar, keep sslmode=require
    return create_engine(
        url,
        connect_args={"sslmode": settings.DATABASE_SSLMODE},
        pool_pre_ping=True,
    )


def create_session_factory(url: str = None, engine: Engine = None) -> sessionmaker:
    engine = engine or create_db_engine(url)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create every table registered on Base"""
    # model modules register themselves on Base.metadata when imported
    import teamtasks.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


engine = create_db_engine()
SessionLocal = create_session_factory(engine=engine)


# Request-scoped session; tests swap this out through app.dependency_overrides
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
