"""
Tests for CapacityForecaster.
"""

import math

import pytest

from staffmind.domain.models import ProjectStatus
from staffmind.schedulers import CapacityForecaster


@pytest.fixture
def forecaster(settings, clock):
    return CapacityForecaster(settings, clock)


def test_projection_formula(forecaster, make_worker, make_project):
    worker = make_worker(availability=80, workload=50, performance_score=85)

    [forecast] = forecaster.forecast([worker], [make_project()], horizon_weeks=6)

    assert forecast.current_capacity == 40.0
    expected = [45 + math.sin(week * 0.5) * 10 for week in range(1, 7)]
    assert forecast.projected_capacity == pytest.approx(expected, abs=0.051)


def test_overloaded_high_performer(forecaster, make_worker, make_project):
    worker = make_worker(availability=100, workload=90, performance_score=95)
    [forecast] = forecaster.forecast([worker], [make_project()], horizon_weeks=3)

    # base 10, +5 trend, -10 load
    expected = [5 + math.sin(week * 0.5) * 10 for week in range(1, 4)]
    assert forecast.projected_capacity == pytest.approx(expected, abs=0.051)


def test_projection_bounded(forecaster, make_worker, make_project):
    workers = [
        make_worker("full", availability=100, workload=0, performance_score=95),
        make_worker("empty", availability=0, workload=100, performance_score=50),
    ]
    for forecast in forecaster.forecast(workers, [make_project()], horizon_weeks=12):
        assert all(0.0 <= value <= 100.0 for value in forecast.projected_capacity)


def test_default_horizon(forecaster, make_worker, make_project):
    [forecast] = forecaster.forecast([make_worker()], [make_project()])
    assert len(forecast.projected_capacity) == 4


def test_horizon_must_be_positive(forecaster, make_worker, make_project):
    with pytest.raises(ValueError):
        forecaster.forecast([make_worker()], [make_project()], horizon_weeks=0)


def test_skill_gaps_ordered_by_demand(forecaster, make_worker, make_project):
    projects = [
        make_project("P1", framework="A"),
        make_project("P2", framework="A"),
        make_project("P3", framework="B"),
        make_project("P4", framework="E"),
        make_project("P5", framework="C"),
        make_project("P6", framework="D", status=ProjectStatus.COMPLETED),
    ]
    [forecast] = forecaster.forecast([make_worker(expertise=["B"])], projects)
    assert forecast.skill_gaps == ["A", "C", "E"]


def test_development_needs(forecaster, make_worker, make_project):
    struggling = make_worker("s", performance_score=80, workload=95, expertise=["A", "B"])
    steady = make_worker("t", performance_score=90, workload=50, expertise=["A"])

    needs = {f.worker_id: f.development_needs for f in forecaster.forecast([struggling, steady], [make_project()])}

    assert needs["s"] == [
        "Efficiency and process optimization training",
        "Workload management and delegation coaching",
        "Diversify assignments across 2 held frameworks",
    ]
    assert needs["t"] == []


@pytest.mark.asyncio
async def test_run(forecaster, make_worker, make_project):
    forecasts = await forecaster.run([make_worker("a"), make_worker("b")], [make_project()], horizon_weeks=2)
    assert [f.worker_id for f in forecasts] == ["a", "b"]
