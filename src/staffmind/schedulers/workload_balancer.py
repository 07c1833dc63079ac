"""
Workload Balance Analyzer

Computes per-worker load balance and per-framework capacity pressure.

Worker balance:
```
optimal_load = clamp(performance × 0.9, 65, 85)
burnout_risk = high if load > 90, medium if load > 80, else low
```

Framework capacity:
```
expert_capacity_hours = Σ availability × (1 − workload/100) / 100 × horizon_hours   (experts only)
team_utilization      = min(100, open_hours / expert_capacity_hours × 100)
expertise_gap         = 80 if experts < 2, 40 if experts < 3, else 0
critical_path         = utilization > 80 and a critical or high-risk open project exists
```

Free expert capacity is a sum of percentages, so it is converted to hours
over PLANNING_HORIZON_HOURS (160 by default) before being compared with the
open project hours. Dividing hours by the raw percentage sum would mix units;
team_utilization here is therefore this engine's reading of "hours demanded
over hours free", not a literal port of the percentage formula.

Usage:
    analyzer = WorkloadBalanceAnalyzer()
    balances, capacities = analyzer.analyze(workers, projects, allocations)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from staffmind.domain.models import Allocation, BurnoutRisk, Priority, Project, ProjectStatus, Worker

from .base import SchedulerBase, clamp


@dataclass
class WorkloadBalance:
    """Load balance snapshot for one worker."""
    worker_id: str
    current_load: float
    optimal_load: float
    utilization_gap: float
    burnout_risk: BurnoutRisk
    efficiency: float
    framework_distribution: Dict[str, int] = field(default_factory=dict)
    utilization_trend: List[float] = field(default_factory=list)
    rebalance_recommendations: List[str] = field(default_factory=list)


@dataclass
class FrameworkCapacity:
    """Capacity pressure for one framework (category of work)."""
    name: str
    total_projects: int
    active_projects: int
    team_utilization: float  # 0-100
    expertise_gap: float  # 0-100
    demand_trend: float  # signed %
    critical_path: bool
    expert_count: int = 0


def optimal_load_for(performance_score: float) -> float:
    return clamp(performance_score * 0.9, 65.0, 85.0)


def burnout_risk_for(load: float) -> BurnoutRisk:
    if load > 90:
        return BurnoutRisk.HIGH
    if load > 80:
        return BurnoutRisk.MEDIUM
    return BurnoutRisk.LOW


class WorkloadBalanceAnalyzer(SchedulerBase):
    """
    Analyzes how evenly work is spread across workers and frameworks.

    Every pass recomputes all balances from the supplied snapshot; nothing
    is updated in place.
    """

    REDUCE_THRESHOLD = 80.0
    ABSORB_MARGIN = 15.0
    CRITICAL_PATH_UTILIZATION = 80.0
    HIGH_RISK_LEVEL = 7

    async def run(
        self,
        workers: List[Worker],
        projects: List[Project],
        allocations: List[Allocation],
    ) -> Tuple[List[WorkloadBalance], List[FrameworkCapacity]]:
        return self.analyze(workers, projects, allocations)

    def analyze(
        self,
        workers: List[Worker],
        projects: List[Project],
        allocations: List[Allocation],
    ) -> Tuple[List[WorkloadBalance], List[FrameworkCapacity]]:
        balances = self.analyze_workers(workers, projects, allocations)
        capacities = self.analyze_frameworks(workers, projects)
        self.logger.info(
            f"Balance pass: {len(balances)} workers, {len(capacities)} frameworks, "
            f"{sum(1 for b in balances if b.burnout_risk == BurnoutRisk.HIGH)} at high burnout risk"
        )
        return balances, capacities

    def analyze_workers(
        self,
        workers: List[Worker],
        projects: List[Project],
        allocations: List[Allocation],
    ) -> List[WorkloadBalance]:
        distribution = self._framework_distribution(projects, allocations)
        return [
            self.balance_for(worker, distribution.get(worker.id, {}))
            for worker in workers
        ]

    def balance_for(self, worker: Worker, framework_distribution: Dict[str, int]) -> WorkloadBalance:
        load = worker.workload
        optimal = optimal_load_for(worker.performance_score)
        risk = burnout_risk_for(load)

        recommendations = []
        if load > self.REDUCE_THRESHOLD:
            recommendations.append(f"Reduce workload by {load - optimal:.0f}%")
        if load < optimal - self.ABSORB_MARGIN:
            recommendations.append(f"Can absorb {optimal - load:.0f}% additional workload")
        if risk == BurnoutRisk.HIGH:
            recommendations.append("Defer non-critical assignments until load drops below 85%")

        return WorkloadBalance(
            worker_id=worker.id,
            current_load=load,
            optimal_load=optimal,
            utilization_gap=load - optimal,
            burnout_risk=risk,
            efficiency=worker.efficiency,
            framework_distribution=dict(sorted(framework_distribution.items())),
            utilization_trend=[clamp(v, 0.0, 100.0) for v in (70.0, 75.0, load - 10, load)],
            rebalance_recommendations=recommendations,
        )

    def analyze_frameworks(
        self,
        workers: List[Worker],
        projects: List[Project],
    ) -> List[FrameworkCapacity]:
        by_framework: Dict[str, List[Project]] = defaultdict(list)
        for project in projects:
            by_framework[project.framework].append(project)

        horizon_hours = self.settings.PLANNING_HORIZON_HOURS
        capacities = []

        for name in sorted(by_framework):
            framework_projects = by_framework[name]
            experts = [w for w in workers if name in w.expertise_set]

            open_hours = sum(p.estimated_hours for p in framework_projects if p.is_open)
            capacity_hours = sum(
                w.availability * (1 - w.workload / 100) / 100 * horizon_hours
                for w in experts
            )

            if capacity_hours > 0:
                utilization = min(100.0, open_hours / capacity_hours * 100)
            else:
                utilization = 100.0 if open_hours > 0 else 0.0

            if len(experts) < 2:
                gap = 80.0
            elif len(experts) < 3:
                gap = 40.0
            else:
                gap = 0.0

            total = len(framework_projects)
            active = sum(1 for p in framework_projects if p.is_active)
            pending = sum(1 for p in framework_projects if p.status == ProjectStatus.PENDING)
            demand_trend = float(round((pending - active) / total * 100)) if total else 0.0

            has_critical_work = any(
                p.is_open and (p.priority == Priority.CRITICAL or p.risk_level >= self.HIGH_RISK_LEVEL)
                for p in framework_projects
            )

            capacities.append(FrameworkCapacity(
                name=name,
                total_projects=total,
                active_projects=active,
                team_utilization=round(utilization, 1),
                expertise_gap=gap,
                demand_trend=demand_trend,
                critical_path=utilization > self.CRITICAL_PATH_UTILIZATION and has_critical_work,
                expert_count=len(experts),
            ))

        return capacities

    def _framework_distribution(
        self,
        projects: List[Project],
        allocations: List[Allocation],
    ) -> Dict[str, Dict[str, int]]:
        """Count each worker's stored allocations per framework."""
        project_index = {p.id: p for p in projects}
        distribution: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))

        for allocation in allocations:
            project = project_index.get(allocation.project_id)
            if not project or not project.is_open:
                continue
            for worker_id in allocation.worker_ids:
                distribution[worker_id][project.framework] += 1

        return {worker_id: dict(counts) for worker_id, counts in distribution.items()}
