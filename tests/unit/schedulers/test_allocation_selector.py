"""
Tests for AllocationSelector.

Tests cover:
- Team sizing
- Ranking, floor handling and tie-breaks
- Timeline and confidence
- Risk factors and recommendations
"""

from datetime import date, timedelta

import pytest

from staffmind.domain.models import AllocationStrategy, Priority, WorkerScore
from staffmind.errors import InvalidStrategy, NoEligibleWorkers
from staffmind.schedulers import AllocationSelector

from conftest import FIXED_NOW


@pytest.fixture
def selector(settings, clock):
    return AllocationSelector(settings, clock)


@pytest.fixture
def fda_pool(make_worker):
    """One exact-match senior expert plus three generalists."""
    expert = make_worker(
        "expert",
        role="Senior QA Engineer",
        expertise=["FDA QSR"],
        efficiency=90,
        workload=60,
        availability=85,
        performance_score=92,
        quality_rating=4.5,
        average_completion_hours=20,
    )
    others = [
        make_worker(
            f"w{i}",
            role="Compliance Specialist",
            expertise=["ISO 13485"],
            efficiency=80,
            workload=30,
            availability=90,
            performance_score=85,
            quality_rating=4.0,
            average_completion_hours=25,
        )
        for i in (2, 3, 4)
    ]
    return [expert] + others


# =============================================================================
# Team sizing
# =============================================================================

class TestTeamSize:

    def test_base_team_size(self, selector, make_project):
        assert selector.determine_team_size(make_project()) == 2

    def test_capped_at_max(self, selector, make_project):
        project = make_project(complexity=9, priority=Priority.CRITICAL, risk_level=8, estimated_hours=200)
        assert selector.determine_team_size(project) == 4

    @pytest.mark.parametrize("field,low,high", [
        ("complexity", 5, 9),
        ("risk_level", 3, 8),
        ("estimated_hours", 100, 200),
        ("priority", Priority.HIGH, Priority.CRITICAL),
    ])
    def test_monotonic_in_each_attribute(self, selector, make_project, field, low, high):
        small = selector.determine_team_size(make_project(**{field: low}))
        large = selector.determine_team_size(make_project(**{field: high}))
        assert 2 <= small <= large <= 4


# =============================================================================
# Selection
# =============================================================================

class TestSelect:

    def test_critical_project_picks_exact_match_expert(self, selector, make_project, fda_pool):
        project = make_project(
            complexity=9,
            priority=Priority.CRITICAL,
            risk_level=8,
            estimated_hours=200,
            required_expertise=["FDA QSR"],
        )
        allocation = selector.select(project, fda_pool, AllocationStrategy.BALANCED)

        assert allocation.team_size == 4
        assert len(allocation.worker_ids) == 4
        assert allocation.worker_ids[0] == "expert"
        assert 60 <= allocation.confidence_score <= 95

    def test_no_required_expertise_scores_everyone_full(self, selector, make_project, fda_pool):
        allocation = selector.select(make_project(required_expertise=[]), fda_pool)
        assert all(s.expertise == 100.0 for s in allocation.member_scores)

    def test_empty_pool_rejected(self, selector, make_project):
        with pytest.raises(NoEligibleWorkers):
            selector.select(make_project(), [])

    def test_nobody_available_rejected(self, selector, make_project, make_worker):
        workers = [make_worker("a", availability=0), make_worker("b", availability=0)]
        with pytest.raises(NoEligibleWorkers) as exc:
            selector.select(make_project(), workers)
        assert exc.value.pool_size == 2

    def test_invalid_strategy(self, selector, make_project, fda_pool):
        with pytest.raises(InvalidStrategy):
            selector.select(make_project(), fda_pool, "cheapest")

    def test_below_floor_ranked_last(self, selector, make_project, make_worker):
        star = make_worker("star", availability=10, workload=0, efficiency=100, performance_score=100,
                           expertise=["ISO 13485"])
        plain = make_worker("plain", availability=50, efficiency=60, performance_score=60)
        ranked = selector.rank_workers(make_project(required_expertise=["ISO 13485"]), [star, plain], "balanced", 2)
        assert [s.worker_id for s in ranked] == ["plain", "star"]
        assert ranked[-1].below_availability_floor is True

    def test_ties_broken_by_id(self, selector, make_project, make_worker):
        ranked = selector.rank_workers(make_project(), [make_worker("b"), make_worker("a")], "balanced", 2)
        assert [s.worker_id for s in ranked] == ["a", "b"]

    def test_deterministic(self, selector, make_project, fda_pool):
        project = make_project(required_expertise=["FDA QSR"], risk_level=7)
        first = selector.select(project, fda_pool, "expertise")
        second = selector.select(project, list(fda_pool), "expertise")
        assert first.model_dump() == second.model_dump()

    def test_timeline_uses_clock(self, selector, make_project, fda_pool):
        allocation = selector.select(make_project(), fda_pool)
        assert allocation.start_date == FIXED_NOW
        assert allocation.estimated_completion == FIXED_NOW + timedelta(days=allocation.estimated_days)

    def test_member_scores_match_team(self, selector, make_project, fda_pool):
        allocation = selector.select(make_project(), fda_pool)
        assert [s.worker_id for s in allocation.member_scores] == allocation.worker_ids

    @pytest.mark.asyncio
    async def test_run_delegates_to_select(self, selector, make_project, fda_pool):
        allocation = await selector.run(make_project(), fda_pool, "efficiency")
        assert allocation.strategy == AllocationStrategy.EFFICIENCY


# =============================================================================
# Timeline and confidence
# =============================================================================

class TestTimeline:

    def test_estimate_timeline(self, selector, make_project):
        project = make_project(estimated_hours=120, complexity=8)
        assert selector.estimate_timeline(project, 3, 1.0) == (120, 7)

    def test_parallelization_limited_by_team(self, selector, make_project):
        project = make_project(estimated_hours=120, complexity=10)
        # one worker cannot parallelize beyond themselves
        assert selector.estimate_timeline(project, 1, 1.0) == (120, 20)

    def test_effective_efficiency_floor(self, selector, make_project):
        scores = [WorkerScore(worker_id="a", expertise=0, availability=0, efficiency=0,
                              collaboration=0, combined=0)]
        assert selector.effective_efficiency(scores, make_project(complexity=9, risk_level=9)) == 0.6

    def test_effective_efficiency_penalties(self, selector, make_project):
        scores = [WorkerScore(worker_id="a", expertise=0, availability=0, efficiency=100,
                              collaboration=0, combined=0)]
        assert selector.effective_efficiency(scores, make_project(complexity=6, risk_level=5)) == pytest.approx(0.85)

    @pytest.mark.parametrize("days,on_time,expected", [
        (10, True, 100.0),
        (10, False, 100.0),
        (40, False, 80.0),
        (60, False, 50.0),
    ])
    def test_timeline_confidence(self, selector, days, on_time, expected):
        assert selector.timeline_confidence(days, on_time) == expected


# =============================================================================
# Risk factors and recommendations
# =============================================================================

class TestRiskFactors:

    def test_overrun_reported_in_days(self, selector, make_project, make_worker):
        workers = [make_worker("a"), make_worker("b")]
        allocation = selector.select(make_project(deadline=date(2025, 3, 1)), workers)

        assert allocation.estimated_days == 7
        assert "Estimated completion exceeds deadline by 9 days" in allocation.risk_factors
        assert any("deadline extension" in r for r in allocation.recommendations)

    def test_understaffed(self, selector, make_project, make_worker):
        project = make_project(complexity=9)
        allocation = selector.select(project, [make_worker("a"), make_worker("b")])
        assert allocation.team_size == 3
        assert len(allocation.worker_ids) == 2
        assert any(r.startswith("Understaffed") for r in allocation.risk_factors)

    def test_overloaded_member_flagged(self, selector, make_project, make_worker):
        workers = [make_worker("busy", name="Busy Bee", workload=90, availability=90), make_worker("b")]
        allocation = selector.select(make_project(), workers)
        assert "busy" in allocation.worker_ids
        assert any("Busy Bee is over-committed" in r for r in allocation.risk_factors)
        assert "Monitor burnout risk for over-committed team members" in allocation.recommendations

    def test_weak_expertise_flagged(self, selector, make_project, make_worker):
        project = make_project(required_expertise=["FDA QSR", "Clinical Data"])
        allocation = selector.select(project, [make_worker("a"), make_worker("b")])
        assert any("weak expertise match" in r for r in allocation.risk_factors)
        assert any("FDA QSR, Clinical Data" in r for r in allocation.recommendations)

    def test_lead_and_checkpoint_recommendations(self, selector, make_project, fda_pool):
        allocation = selector.select(make_project(risk_level=8), fda_pool)
        assert allocation.recommendations[0].startswith("Assign ")
        assert "Schedule weekly risk checkpoint reviews" in allocation.recommendations
