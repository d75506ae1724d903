from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fau_portal.core.config import settings
from fau_portal.core.exceptions import ConfigurationError


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite connections are shared across the worker threads FastAPI uses
        # for sync endpoints and by the scheduler thread.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


if not settings.SQLALCHEMY_DATABASE_URL:
    raise ConfigurationError("DATABASE_URL must be set in production")

# The engine is created once per process and owns the connection pool.
# Requests borrow a connection through a Session and give it back on close.
engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URL,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URL),
)

# SessionLocal is a factory for creating new Session objects, one per request
# or per scheduler tick.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always hand the connection back to the pool, even after an error.
        db.close()
