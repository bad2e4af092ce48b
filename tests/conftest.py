"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from experiences.dependencies import get_repository
from experiences.models import ExperienceFields
from experiences.repository import InMemoryExperienceRepository
from main import app


class TickingClock:
    """Clock that moves forward one second on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self._now = start

    def __call__(self) -> datetime:
        value = self._now
        self._now += timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def repository(clock) -> InMemoryExperienceRepository:
    return InMemoryExperienceRepository(clock=clock)


@pytest.fixture
def fields() -> ExperienceFields:
    return ExperienceFields(
        title="Backend Engineer",
        description=["Built the billing API", "Ran the on-call rotation"],
        company="Acme Corp",
        start_date="2021-03",
        end_date="2023-08",
    )


@pytest.fixture
def payload() -> Dict[str, Any]:
    """Valid create/update request body."""
    return {
        "title": "Backend Engineer",
        "description": ["Built the billing API", "Ran the on-call rotation"],
        "company": "Acme Corp",
        "start_date": "2021-03",
        "end_date": "2023-08",
    }


@pytest.fixture
def client(repository):
    """TestClient wired to the in-memory repository (no DB pool, no lifespan)."""
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
