"""
Capacity Forecaster

Projects each worker's available capacity over a rolling weekly horizon and
flags skill and development gaps.

Projection:
```
base       = availability × (1 − workload/100)
capacity_i = clamp(base + sin(i × 0.5) × 10 + trend_adj + load_adj, 0, 100)   for i in 1..horizon

trend_adj  = +5 if performance > 90, −5 if performance < 80, else 0
load_adj   = −10 if current_load > optimal_load, else +5
```
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from staffmind.domain.models import BurnoutRisk, Project, Worker

from .base import SchedulerBase, clamp
from .workload_balancer import WorkloadBalance, WorkloadBalanceAnalyzer


@dataclass
class CapacityForecast:
    """Projected weekly capacity and development gaps for one worker."""
    worker_id: str
    current_capacity: float
    projected_capacity: List[float] = field(default_factory=list)
    skill_gaps: List[str] = field(default_factory=list)
    development_needs: List[str] = field(default_factory=list)


class CapacityForecaster(SchedulerBase):
    """
    Forecasts near-term capacity per worker.

    Balances are recomputed from the roster when the caller does not
    supply them.
    """

    MAX_SKILL_GAPS = 3
    HIGH_PERFORMER = 90
    LOW_PERFORMER = 80
    TRAINING_THRESHOLD = 85

    async def run(
        self,
        workers: List[Worker],
        projects: List[Project],
        balances: Optional[List[WorkloadBalance]] = None,
        horizon_weeks: Optional[int] = None,
    ) -> List[CapacityForecast]:
        return self.forecast(workers, projects, balances, horizon_weeks)

    def forecast(
        self,
        workers: List[Worker],
        projects: List[Project],
        balances: Optional[List[WorkloadBalance]] = None,
        horizon_weeks: Optional[int] = None,
    ) -> List[CapacityForecast]:
        """
        Forecast capacity for every worker.

        Args:
            workers: Roster snapshot
            projects: Catalog snapshot, used to rank skill gaps by demand
            balances: Workload balances for the same snapshot
            horizon_weeks: Number of weeks to project

        Returns:
            One CapacityForecast per worker, in roster order
        """
        if horizon_weeks is None:
            horizon_weeks = self.settings.DEFAULT_FORECAST_WEEKS
        if horizon_weeks < 1:
            raise ValueError(f"horizon_weeks must be at least 1, got {horizon_weeks}")

        if balances is None:
            balances = WorkloadBalanceAnalyzer(self.settings, self.clock).analyze_workers(
                workers, projects, []
            )
        balance_index = {b.worker_id: b for b in balances}

        demand = Counter(p.framework for p in projects if p.is_open)
        frameworks = sorted({p.framework for p in projects}, key=lambda name: (-demand[name], name))

        self.logger.info(f"Forecasting capacity for {len(workers)} workers over {horizon_weeks} weeks")

        return [
            self._forecast_worker(worker, balance_index.get(worker.id), frameworks, horizon_weeks)
            for worker in workers
        ]

    def _forecast_worker(
        self,
        worker: Worker,
        balance: Optional[WorkloadBalance],
        frameworks: List[str],
        horizon_weeks: int,
    ) -> CapacityForecast:
        base = worker.availability * (1 - worker.workload / 100)

        if worker.performance_score > self.HIGH_PERFORMER:
            trend_adj = 5.0
        elif worker.performance_score < self.LOW_PERFORMER:
            trend_adj = -5.0
        else:
            trend_adj = 0.0

        overloaded = balance is not None and balance.current_load > balance.optimal_load
        load_adj = -10.0 if overloaded else 5.0

        projected = [
            round(clamp(base + math.sin(week * 0.5) * 10 + trend_adj + load_adj, 0.0, 100.0), 1)
            for week in range(1, horizon_weeks + 1)
        ]

        skill_gaps = [name for name in frameworks if name not in worker.expertise_set]

        return CapacityForecast(
            worker_id=worker.id,
            current_capacity=round(base, 1),
            projected_capacity=projected,
            skill_gaps=skill_gaps[:self.MAX_SKILL_GAPS],
            development_needs=self._development_needs(worker, balance),
        )

    def _development_needs(self, worker: Worker, balance: Optional[WorkloadBalance]) -> List[str]:
        needs = []
        if worker.performance_score < self.TRAINING_THRESHOLD:
            needs.append("Efficiency and process optimization training")
        if balance is not None and balance.burnout_risk == BurnoutRisk.HIGH:
            needs.append("Workload management and delegation coaching")

        active_frameworks: Dict[str, int] = balance.framework_distribution if balance else {}
        held = len(worker.expertise)
        if held > 1 and len([n for n in active_frameworks.values() if n > 0]) <= 1:
            needs.append(f"Diversify assignments across {held} held frameworks")
        return needs
