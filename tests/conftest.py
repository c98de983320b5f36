"""
Shared fixtures for the Love Journey API tests

Every test gets a fresh in-memory SQLite database. The completion service
and the milestone notifier are replaced with recording fakes.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from datetime import datetime, timedelta, timezone
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import lovejourney.models  # noqa: F401
from lovejourney.core.config import Base, get_db
from lovejourney.core.security import create_access_token
from lovejourney.crud.journal_entry import crud_journal_entry
from lovejourney.crud.user import crud_user
from lovejourney.models.journal_entry import JournalEntry
from lovejourney.models.user import User, UserRole
from lovejourney.schemas.user import UserCreate
from lovejourney.services.journal_analysis import (
    JournalAnalysisService,
    journal_analysis_service,
)

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeCompletionClient:
    """Records every request; returns canned text or raises `error`."""

    def __init__(self, text: str = "Keywords: trust, patience"):
        self.text = text
        self.error = None
        self.calls = []
        self.side_effect = None

    def complete(self, messages):
        self.calls.append(messages)
        if self.side_effect is not None:
            self.side_effect()
        if self.error is not None:
            raise self.error
        return self.text


class NotifierStub:
    def __init__(self):
        self.notified = []

    def notify(self, user_id):
        self.notified.append(user_id)
        return True


# =====================================================================
# DATABASE
# =====================================================================

@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =====================================================================
# DOMAIN HELPERS
# =====================================================================

def make_user(db, email="alice@example.com", role=UserRole.user, timezone_name="UTC") -> User:
    return crud_user.create(
        db,
        obj_in=UserCreate(email=email, password="lovejourney1", timezone=timezone_name),
        role=role,
    )


def add_entries(db, user: User, count: int, start: datetime = BASE_TIME, offset: int = 0) -> List[JournalEntry]:
    """Create `count` entries one day apart, numbered from `offset`."""
    return [
        crud_journal_entry.create(
            db,
            user_id=user.id,
            content=f"Entry {offset + i}",
            daily_sentence=f"Prompt {offset + i}",
            created_at=start + timedelta(days=offset + i),
        )
        for i in range(count)
    ]


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(data={'sub': str(user.id)})}"}


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def admin(db):
    return make_user(db, email="admin@example.com", role=UserRole.admin)


# =====================================================================
# FAKES
# =====================================================================

@pytest.fixture
def fake_completion():
    return FakeCompletionClient()


@pytest.fixture
def analysis_service(fake_completion):
    return JournalAnalysisService(
        completion=fake_completion,
        batch_size=3,
        max_entries=3,
        record_quota_sentinel=True,
    )


@pytest.fixture
def notifier_stub(monkeypatch):
    stub = NotifierStub()
    monkeypatch.setattr("lovejourney.api.routers.journal.milestone_notifier", stub)
    return stub


# =====================================================================
# HTTP CLIENT
# =====================================================================

@pytest.fixture
def client(session_factory, fake_completion, notifier_stub, monkeypatch):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    monkeypatch.setattr(journal_analysis_service, "completion", fake_completion)
    monkeypatch.setattr(journal_analysis_service, "batch_size", 3)
    monkeypatch.setattr(journal_analysis_service, "max_entries", 3)
    monkeypatch.setattr(journal_analysis_service, "record_quota_sentinel", True)

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
