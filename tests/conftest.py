"""Shared test fixtures for LockIn tests.

The database URL and service keys are fixed BEFORE any project module
is imported: database.py builds its engine at import time.

Usage:
    def test_something(auth_client):
        response = auth_client.get("/api/plans")
        ...
"""

import os
import tempfile
from collections.abc import Generator
from datetime import date, timedelta
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="lockin-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["LOCKIN_SCHEDULER_ENABLED"] = "false"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["ARKESEL_API_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
import models  # noqa: E402,F401
from schemas import DailyTask, GoalInput, PlanCreate, UserCreate  # noqa: E402


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def clean_db() -> Generator[None, None, None]:
    """Every test starts with empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# ─────────────────────────────────────────────────────────────────────────────
# Data Fixtures
# ─────────────────────────────────────────────────────────────────────────────

TEST_EMAIL = "ama@example.com"
TEST_PHONE = "0241234567"


def make_plan(title: str = "Python Mastery", tasks: int = 3, start: date = date(2026, 1, 5)) -> PlanCreate:
    """A small plan: one 20-point task per day from start."""
    daily = [
        DailyTask(
            task_id=f"task-{title.lower().replace(' ', '-')}-{i}",
            day=i,
            date=(start + timedelta(days=i - 1)).isoformat(),
            title=f"Task {i}",
            description=f"Description {i}",
            points=20,
            month=start.month,
            week=1,
        )
        for i in range(1, tasks + 1)
    ]
    return PlanCreate(
        plan_title=title,
        start_date=daily[0].date,
        end_date=daily[-1].date,
        total_days=tasks,
        daily_tasks=daily,
    )


@pytest.fixture
def plan_data() -> PlanCreate:
    return make_plan()


@pytest.fixture
def user_data() -> UserCreate:
    return UserCreate(email=TEST_EMAIL, name="Ama Mensah", phone_number=TEST_PHONE)


@pytest.fixture
def goal() -> GoalInput:
    return GoalInput(
        category="software",
        category_name="Python",
        primary_goal="Learn Python for automation",
        start_date=date(2026, 1, 5),
        total_days=10,
    )


# ─────────────────────────────────────────────────────────────────────────────
# API Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered(client, plan_data) -> dict:
    """Registers the test user with one plan and returns the login payload."""
    response = client.post("/api/users", json={
        "email": TEST_EMAIL,
        "name": "Ama Mensah",
        "phoneNumber": TEST_PHONE,
        "plan": plan_data.to_document(),
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_client(client, registered) -> TestClient:
    client.headers.update({"Authorization": f"Bearer {registered['accessToken']}"})
    return client
