"""
Pytest configuration and shared fixtures.
"""

import os
import sys
from datetime import date, datetime, timedelta, timezone

import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))

from staffmind.domain.models import (  # noqa: E402
    Allocation,
    AllocationStrategy,
    Priority,
    Project,
    ProjectStatus,
    Worker,
)
from staffmind.platform.config import Settings  # noqa: E402

FIXED_NOW = datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> None:
    """Set up test environment variables."""
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("DEBUG", "true")
    os.environ.setdefault("ADVISORY_ENABLED", "false")


@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL="", ADVISORY_ENABLED=False)


@pytest.fixture
def clock():
    """Pinned clock so timelines are reproducible."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_worker():
    def _make(worker_id: str = "w1", **overrides) -> Worker:
        data = {
            "id": worker_id,
            "name": "",
            "role": "Analyst",
            "expertise": [],
            "efficiency": 80,
            "workload": 50,
            "availability": 80,
            "performance_score": 85,
            "quality_rating": 4.0,
            "average_completion_hours": 20,
        }
        data.update(overrides)
        return Worker(**data)
    return _make


@pytest.fixture
def make_project():
    def _make(project_id: str = "P1", **overrides) -> Project:
        data = {
            "id": project_id,
            "name": "",
            "framework": "ISO 13485",
            "priority": Priority.MEDIUM,
            "complexity": 5,
            "estimated_hours": 80,
            "deadline": date(2025, 6, 30),
            "required_expertise": [],
            "risk_level": 4,
            "status": ProjectStatus.PENDING,
        }
        data.update(overrides)
        return Project(**data)
    return _make


@pytest.fixture
def make_allocation():
    def _make(project_id: str = "P1", worker_ids=None, **overrides) -> Allocation:
        data = {
            "project_id": project_id,
            "worker_ids": worker_ids or ["w1"],
            "team_size": 2,
            "strategy": AllocationStrategy.BALANCED,
            "allocated_hours": 100,
            "effective_efficiency": 0.9,
            "estimated_days": 9,
            "start_date": FIXED_NOW,
            "estimated_completion": FIXED_NOW + timedelta(days=9),
            "confidence_score": 80,
        }
        data.update(overrides)
        return Allocation(**data)
    return _make
