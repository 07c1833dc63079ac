"""
Tests for InsightGenerator.
"""

import pytest

from staffmind.data.sample_data import sample_metrics
from staffmind.domain.models import BurnoutRisk
from staffmind.schedulers import FrameworkCapacity, InsightGenerator, WorkloadBalance


@pytest.fixture
def generator(settings, clock):
    return InsightGenerator(settings, clock)


def capacity(name="ISO 13485", **overrides):
    data = dict(
        name=name,
        total_projects=2,
        active_projects=1,
        team_utilization=50.0,
        expertise_gap=0.0,
        demand_trend=0.0,
        critical_path=False,
        expert_count=3,
    )
    data.update(overrides)
    return FrameworkCapacity(**data)


def balance(worker_id, load, optimal=80.0):
    risk = BurnoutRisk.HIGH if load > 90 else BurnoutRisk.LOW
    return WorkloadBalance(
        worker_id=worker_id,
        current_load=load,
        optimal_load=optimal,
        utilization_gap=load - optimal,
        burnout_risk=risk,
        efficiency=85.0,
    )


class TestInsights:

    def test_cross_training_opportunity(self, generator):
        insights = generator.generate_insights([], [capacity("EU MDR", expertise_gap=80.0, expert_count=1)])
        [insight] = insights
        assert insight.type == "optimization"
        assert insight.title == "Cross-Training Opportunity: EU MDR"
        assert insight.impact == "high"
        assert "Training 2 team members" in insight.description

    def test_capacity_constraint(self, generator):
        insights = generator.generate_insights([], [capacity("FDA QSR", team_utilization=95.0, critical_path=True)])
        assert [i.title for i in insights] == ["Capacity Constraint: FDA QSR"]
        assert insights[0].type == "risk"

    def test_burnout_and_spare_capacity(self, generator):
        balances = [balance("a", 95), balance("b", 40), balance("c", 75)]
        insights = generator.generate_insights(balances, [capacity()])

        titles = [i.title for i in insights]
        assert titles == ["Burnout Risk", "Underused Capacity"]
        assert "a" in insights[0].description
        assert "b" in insights[1].description

    def test_quiet_snapshot(self, generator):
        assert generator.generate_insights([balance("a", 75)], [capacity()]) == []


class TestAnalytics:

    def test_summary(self, generator, make_worker, make_allocation):
        allocations = [
            make_allocation("P1", confidence_score=70),
            make_allocation("P2", confidence_score=90),
        ]
        workers = [make_worker("a", workload=60), make_worker("b", workload=80)]
        capacities = [capacity("FDA QSR", critical_path=True), capacity("ISO 13485")]

        analytics = generator.analytics(
            allocations,
            workers,
            capacities,
            rule_success_rates=[87, 78, 82],
            metrics=sample_metrics(),
        )

        assert analytics.total_allocations == 2
        assert analytics.avg_confidence_score == 80.0
        assert analytics.resource_utilization == 70.0
        assert analytics.success_rate == 82.3
        assert analytics.bottlenecks == ["FDA QSR"]
        assert analytics.trends == {"efficiency": 3.0, "quality": 2.0, "satisfaction": 0.1}

    def test_empty_inputs(self, generator):
        analytics = generator.analytics([], [], [])
        assert analytics.total_allocations == 0
        assert analytics.success_rate == 0.0
        assert analytics.avg_confidence_score == 0.0
        assert analytics.resource_utilization == 0.0
        assert analytics.trends == {"efficiency": 0.0, "quality": 0.0, "satisfaction": 0.0}
