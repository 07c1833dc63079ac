"""
Insight Generator

Turns balance and capacity analysis into predictive insights, and
summarizes stored allocations into analytics.
"""

from dataclasses import dataclass, field
from statistics import mean
from typing import Dict, List, Optional

from staffmind.domain.models import Allocation, BurnoutRisk, PerformanceMetric, Worker

from .base import SchedulerBase
from .workload_balancer import FrameworkCapacity, WorkloadBalance


@dataclass
class PredictiveInsight:
    """An advisory observation about upcoming risk or opportunity."""
    type: str  # 'opportunity', 'risk', 'optimization'
    title: str
    description: str
    impact: str  # 'low', 'medium', 'high'
    timeframe: str
    actionable: bool = True


@dataclass
class AllocationAnalytics:
    """Roll-up of allocation quality across the store."""
    total_allocations: int
    success_rate: float
    avg_confidence_score: float
    resource_utilization: float
    bottlenecks: List[str] = field(default_factory=list)
    trends: Dict[str, float] = field(default_factory=dict)


class InsightGenerator(SchedulerBase):
    """
    Derives insights and analytics from an analysis snapshot.
    """

    IMPACT_ORDER = {'high': 0, 'medium': 1, 'low': 2}
    TARGET_EXPERTS = 3
    BOTTLENECK_UTILIZATION = 90.0
    ABSORB_MARGIN = 15.0

    async def run(
        self,
        balances: List[WorkloadBalance],
        capacities: List[FrameworkCapacity],
    ) -> List[PredictiveInsight]:
        return self.generate_insights(balances, capacities)

    def generate_insights(
        self,
        balances: List[WorkloadBalance],
        capacities: List[FrameworkCapacity],
    ) -> List[PredictiveInsight]:
        insights = []

        for capacity in capacities:
            if capacity.expertise_gap >= 40:
                missing = max(1, self.TARGET_EXPERTS - capacity.expert_count)
                insights.append(PredictiveInsight(
                    type='optimization',
                    title=f"Cross-Training Opportunity: {capacity.name}",
                    description=(
                        f"Training {missing} team member{'s' if missing > 1 else ''} in "
                        f"{capacity.name} would close a {capacity.expertise_gap:.0f}% expertise gap "
                        f"across {capacity.total_projects} projects"
                    ),
                    impact='high' if capacity.expertise_gap >= 80 else 'medium',
                    timeframe='6-8 weeks',
                ))

            if capacity.critical_path:
                insights.append(PredictiveInsight(
                    type='risk',
                    title=f"Capacity Constraint: {capacity.name}",
                    description=(
                        f"{capacity.name} is at {capacity.team_utilization:.0f}% utilization "
                        f"with critical or high-risk work outstanding"
                    ),
                    impact='high',
                    timeframe='2-4 weeks',
                ))

        at_risk = [b.worker_id for b in balances if b.burnout_risk == BurnoutRisk.HIGH]
        if at_risk:
            insights.append(PredictiveInsight(
                type='risk',
                title="Burnout Risk",
                description=f"{len(at_risk)} worker(s) above 90% load: {', '.join(at_risk)}",
                impact='high' if len(at_risk) > 1 else 'medium',
                timeframe='1-2 weeks',
            ))

        spare = [b.worker_id for b in balances if b.current_load < b.optimal_load - self.ABSORB_MARGIN]
        if spare:
            insights.append(PredictiveInsight(
                type='opportunity',
                title="Underused Capacity",
                description=f"{len(spare)} worker(s) can absorb additional work: {', '.join(spare)}",
                impact='low',
                timeframe='1-2 weeks',
            ))

        insights.sort(key=lambda i: (self.IMPACT_ORDER.get(i.impact, 3), i.type, i.title))
        return insights

    def analytics(
        self,
        allocations: List[Allocation],
        workers: List[Worker],
        capacities: List[FrameworkCapacity],
        rule_success_rates: Optional[List[float]] = None,
        metrics: Optional[List[PerformanceMetric]] = None,
    ) -> AllocationAnalytics:
        """
        Summarize allocation quality.

        Success rate is the mean observed success rate of the enabled
        rebalancing rules. Trends compare the two most recent metric periods.
        """
        rates = rule_success_rates or []
        metrics = metrics or []

        bottlenecks = [
            c.name for c in capacities
            if c.critical_path or c.team_utilization >= self.BOTTLENECK_UTILIZATION
        ]

        trends = {'efficiency': 0.0, 'quality': 0.0, 'satisfaction': 0.0}
        if len(metrics) >= 2:
            previous, latest = metrics[-2], metrics[-1]
            trends = {
                'efficiency': round(latest.efficiency - previous.efficiency, 2),
                'quality': round(latest.quality - previous.quality, 2),
                'satisfaction': round(latest.satisfaction - previous.satisfaction, 2),
            }

        return AllocationAnalytics(
            total_allocations=len(allocations),
            success_rate=round(mean(rates), 1) if rates else 0.0,
            avg_confidence_score=round(mean(a.confidence_score for a in allocations), 1) if allocations else 0.0,
            resource_utilization=round(mean(w.workload for w in workers), 1) if workers else 0.0,
            bottlenecks=bottlenecks,
            trends=trends,
        )
