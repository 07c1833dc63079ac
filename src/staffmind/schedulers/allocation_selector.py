"""
Allocation Selector

Builds a ranked team for a project, estimates its timeline and scores the
confidence of the resulting allocation.

Algorithm:
```
team_size      = 2 (+1 complexity ≥ 8, +1 critical, +1 risk ≥ 7, +1 hours > 150), cap 4
eff_efficiency = clamp(mean_eff/100 + mean_collab/100 × 0.1 − complexity_pen − risk_pen, 0.6, 1.2)
adjusted_hours = round(hours / eff_efficiency)
parallel       = min(team_size, ceil(complexity / 2.5))
days           = ceil(adjusted_hours / (parallel × 6))
confidence     = clamp(round(0.4 × expertise + 0.3 × availability + 0.3 × timeline), 60, 95)
```

Usage:
    selector = AllocationSelector()
    allocation = selector.select(project, workers, "balanced")
"""

import math
from datetime import timedelta
from statistics import mean
from typing import Dict, List, Tuple, Union

from staffmind.domain.models import (
    Allocation,
    AllocationStrategy,
    Priority,
    Project,
    Worker,
    WorkerScore,
)
from staffmind.errors import NoEligibleWorkers

from .base import SchedulerBase, clamp
from .scoring import resolve_strategy, score_worker


class AllocationSelector(SchedulerBase):
    """
    Greedy team selection for a single project.

    Features:
    - Strategy-weighted ranking of eligible workers
    - Heuristic team sizing from project attributes
    - Timeline and confidence estimation
    - Risk factor and recommendation generation
    """

    BASE_TEAM_SIZE = 2

    # Penalty thresholds
    HIGH_COMPLEXITY = 8
    MEDIUM_COMPLEXITY = 6
    HIGH_RISK = 7
    MEDIUM_RISK = 5
    LARGE_PROJECT_HOURS = 150

    # Risk factor thresholds
    TARGET_EFFICIENCY = 85
    OVERLOAD_WORKLOAD = 85
    WEAK_EXPERTISE = 60

    # Confidence bounds
    MIN_CONFIDENCE = 60
    MAX_CONFIDENCE = 95
    MIN_EFFECTIVE_EFFICIENCY = 0.6
    MAX_EFFECTIVE_EFFICIENCY = 1.2

    async def run(
        self,
        project: Project,
        workers: List[Worker],
        strategy: Union[str, AllocationStrategy] = AllocationStrategy.BALANCED,
    ) -> Allocation:
        return self.select(project, workers, strategy)

    def determine_team_size(self, project: Project) -> int:
        """Team size from project attributes, in [2, MAX_TEAM_SIZE]."""
        size = self.BASE_TEAM_SIZE
        if project.complexity >= self.HIGH_COMPLEXITY:
            size += 1
        if project.priority == Priority.CRITICAL:
            size += 1
        if project.risk_level >= self.HIGH_RISK:
            size += 1
        if project.estimated_hours > self.LARGE_PROJECT_HOURS:
            size += 1
        return min(size, self.settings.MAX_TEAM_SIZE)

    def rank_workers(
        self,
        project: Project,
        workers: List[Worker],
        strategy: Union[str, AllocationStrategy],
        team_size_hint: int,
    ) -> List[WorkerScore]:
        """
        Score and order every eligible worker.

        Workers with no availability are excluded. Workers under the
        availability floor are kept but placed after all others. Ties fall
        back to performance score, then id, so ordering is deterministic.
        """
        strategy = resolve_strategy(strategy)
        floor = self.settings.MIN_AVAILABILITY_FLOOR
        by_id = {w.id: w for w in workers}

        scores = [
            score_worker(worker, project, strategy, team_size_hint, availability_floor=floor)
            for worker in workers
            if worker.availability > 0
        ]
        scores.sort(key=lambda s: (
            s.below_availability_floor,
            -s.combined,
            -by_id[s.worker_id].performance_score,
            s.worker_id,
        ))
        return scores

    def effective_efficiency(self, team_scores: List[WorkerScore], project: Project) -> float:
        if project.complexity >= self.HIGH_COMPLEXITY:
            complexity_penalty = 0.15
        elif project.complexity >= self.MEDIUM_COMPLEXITY:
            complexity_penalty = 0.10
        else:
            complexity_penalty = 0.0

        if project.risk_level >= self.HIGH_RISK:
            risk_penalty = 0.10
        elif project.risk_level >= self.MEDIUM_RISK:
            risk_penalty = 0.05
        else:
            risk_penalty = 0.0

        raw = (
            mean(s.efficiency for s in team_scores) / 100
            + mean(s.collaboration for s in team_scores) / 100 * 0.1
            - complexity_penalty
            - risk_penalty
        )
        return clamp(raw, self.MIN_EFFECTIVE_EFFICIENCY, self.MAX_EFFECTIVE_EFFICIENCY)

    def estimate_timeline(
        self,
        project: Project,
        team_size: int,
        effective_efficiency: float,
    ) -> Tuple[int, int]:
        """
        Returns:
            (adjusted_hours, estimated_days)
        """
        adjusted_hours = int(round(project.estimated_hours / effective_efficiency))
        parallelization = max(1, min(team_size, math.ceil(project.complexity / 2.5)))
        estimated_days = math.ceil(
            adjusted_hours / (parallelization * self.settings.PRODUCTIVE_HOURS_PER_DAY)
        )
        return adjusted_hours, estimated_days

    def timeline_confidence(self, estimated_days: int, on_time: bool) -> float:
        if on_time:
            return 100.0
        return min(100.0, max(50.0, 100 - (estimated_days - 30) * 2))

    def select(
        self,
        project: Project,
        workers: List[Worker],
        strategy: Union[str, AllocationStrategy] = AllocationStrategy.BALANCED,
    ) -> Allocation:
        """
        Produce the allocation for a project.

        Args:
            project: Project to staff
            workers: Candidate pool
            strategy: Weighting strategy name or enum

        Returns:
            Allocation (not yet persisted)

        Raises:
            InvalidStrategy: Unknown strategy
            NoEligibleWorkers: Empty pool or nobody with availability
        """
        strategy = resolve_strategy(strategy)
        self.logger.info(
            f"Selecting team for project {project.id} with {len(workers)} candidates "
            f"({strategy.value})"
        )

        if not workers:
            raise NoEligibleWorkers(project.id, 0)

        team_size = self.determine_team_size(project)
        ranked = self.rank_workers(project, workers, strategy, team_size)
        if not ranked:
            raise NoEligibleWorkers(project.id, len(workers))

        team_scores = ranked[:team_size]
        by_id: Dict[str, Worker] = {w.id: w for w in workers}
        team = [by_id[s.worker_id] for s in team_scores]

        eff = self.effective_efficiency(team_scores, project)
        adjusted_hours, estimated_days = self.estimate_timeline(project, len(team), eff)

        start = self.now()
        completion = start + timedelta(days=estimated_days)
        overrun_days = (completion.date() - project.deadline).days
        on_time = overrun_days <= 0

        confidence = round(
            0.4 * mean(s.expertise for s in team_scores)
            + 0.3 * mean(s.availability for s in team_scores)
            + 0.3 * self.timeline_confidence(estimated_days, on_time)
        )
        confidence = int(clamp(confidence, self.MIN_CONFIDENCE, self.MAX_CONFIDENCE))

        risk_factors = self._risk_factors(project, team, team_scores, team_size, overrun_days)
        recommendations = self._recommendations(project, team, strategy, overrun_days)

        self.logger.info(
            f"Project {project.id}: team of {len(team)}/{team_size}, "
            f"{estimated_days} days, confidence {confidence}"
        )

        return Allocation(
            project_id=project.id,
            worker_ids=[w.id for w in team],
            team_size=team_size,
            strategy=strategy,
            allocated_hours=adjusted_hours,
            effective_efficiency=round(eff, 4),
            estimated_days=estimated_days,
            start_date=start,
            estimated_completion=completion,
            confidence_score=confidence,
            recommendations=recommendations,
            risk_factors=risk_factors,
            member_scores=team_scores,
        )

    def _risk_factors(
        self,
        project: Project,
        team: List[Worker],
        team_scores: List[WorkerScore],
        team_size: int,
        overrun_days: int,
    ) -> List[str]:
        risks = []

        mean_efficiency = mean(s.efficiency for s in team_scores)
        if mean_efficiency < self.TARGET_EFFICIENCY:
            risks.append(
                f"Team adjusted efficiency {mean_efficiency:.0f}% is below the "
                f"{self.TARGET_EFFICIENCY}% target"
            )

        for worker in team:
            if worker.workload > self.OVERLOAD_WORKLOAD:
                risks.append(
                    f"{worker.name or worker.id} is over-committed ({worker.workload:.0f}% workload)"
                )

        if overrun_days > 0:
            risks.append(f"Estimated completion exceeds deadline by {overrun_days} days")

        if project.risk_level > self.HIGH_RISK and len(team) < 3:
            risks.append(
                f"Risk level {project.risk_level}/10 with a team of only {len(team)}"
            )

        for worker, score in zip(team, team_scores):
            if score.expertise < self.WEAK_EXPERTISE:
                risks.append(
                    f"{worker.name or worker.id} has a weak expertise match ({score.expertise:.0f}%)"
                )

        if len(team) < team_size:
            risks.append(f"Understaffed: {len(team)} of {team_size} required workers available")

        return risks

    def _recommendations(
        self,
        project: Project,
        team: List[Worker],
        strategy: AllocationStrategy,
        overrun_days: int,
    ) -> List[str]:
        lead = team[0]
        recommendations = [
            f"Assign {lead.name or lead.id} as project lead (highest {strategy.value} score)"
        ]

        covered = set()
        for worker in team:
            covered |= worker.expertise_set
        uncovered = [tag for tag in project.required_expertise if tag not in covered]
        if uncovered:
            recommendations.append(f"Source external support for uncovered expertise: {', '.join(uncovered)}")

        if overrun_days > 0:
            recommendations.append(
                f"Negotiate a deadline extension or add capacity to recover {overrun_days} days"
            )

        if any(w.workload > self.OVERLOAD_WORKLOAD for w in team):
            recommendations.append("Monitor burnout risk for over-committed team members")

        if project.risk_level >= self.HIGH_RISK:
            recommendations.append("Schedule weekly risk checkpoint reviews")

        return recommendations
