"""
Shared fixtures: a throwaway SQLite database per test, repositories bound
to it, and an application client wired to the same database.
"""

import pytest
from fastapi.testclient import TestClient

from agent_tracker.auth.utils import create_access_token, get_password_hash
from agent_tracker.database import create_db_engine, create_session_factory, init_db
from agent_tracker.main import create_app
from agent_tracker.models import ActivityDefinition
from agent_tracker.repositories import Repositories

PASSWORD = "correct-horse-battery"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'tracker.db'}")
    factory = create_session_factory(engine)
    init_db(factory)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repos(db):
    return Repositories.from_session(db)


@pytest.fixture
def make_user(repos):
    """Create a user with the shared test password."""
    counter = {"n": 0}

    def _make(role="agent", username=None, full_name=None):
        counter["n"] += 1
        username = username or f"{role}{counter['n']}"
        return repos.users.create(
            username=username,
            email=f"{username}@example.com",
            password_hash=get_password_hash(PASSWORD),
            full_name=full_name or username.title(),
            role=role,
        )

    return _make


@pytest.fixture
def activity(db):
    """First activity of the seeded catalog."""
    return db.query(ActivityDefinition).order_by(ActivityDefinition.id).first()


@pytest.fixture
def client(session_factory):
    app = create_app(session_factory=session_factory)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Bearer header for a user, as issued by the login route."""

    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers
