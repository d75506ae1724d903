# tests/conftest.py
import os

# Settings are read at import time, so the environment must be ready first.
os.environ["ENV"] = "local"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-the-fau-portal-suite-0123456789"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("RESEND_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fau_portal.main import app
from fau_portal.db.base_class import Base
from fau_portal.db.session import get_db
import fau_portal.models  # noqa: F401


# --- Test Database Setup ---
# One in-memory SQLite database shared by every session through StaticPool.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db):
    """Session factory for code that opens its own sessions, like scheduler jobs."""
    return TestingSessionLocal


# --- Email transport mock ---
@pytest.fixture(scope="function")
def sent_emails(monkeypatch):
    """Captures every email instead of calling Resend."""
    outbox = []

    def fake_send_email(to_email, subject, text, reply_to=None):
        outbox.append(
            {"to": to_email, "subject": subject, "text": text, "reply_to": reply_to}
        )
        return {"id": f"email_{len(outbox)}"}

    monkeypatch.setattr("fau_portal.services.notifications.send_email", fake_send_email)
    return outbox


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db, sent_emails):
    """
    Provides a TestClient bound to the test database, with email captured.
    Background tasks run before each call returns.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
