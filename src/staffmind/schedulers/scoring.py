"""
Scoring Model

Pure functions scoring a worker against a project on four axes.

Scoring:
```
expertise     = (2 × direct + related) / (2 × |required|) × 100
availability  = (1 − workload/100) × (availability/100) × 100
efficiency    = min(100, efficiency + (quality − 3) × 5 + max(0, 30 − avg_hours) × 2)
collaboration = min(100, performance × 0.7 + role_bonus + team_size_hint × 2)

combined      = Σ(sub_score × strategy_weight)
```

Usage:
    score = expertise_score(worker, project)
    ranked = score_worker(worker, project, AllocationStrategy.BALANCED, team_size_hint=3)
"""

import re
from typing import Dict, Union

from staffmind.domain.models import AllocationStrategy, Project, Worker, WorkerScore
from staffmind.errors import InvalidStrategy

from .base import clamp

# Weight tuples per strategy; each sums to 1.0
STRATEGY_WEIGHTS: Dict[AllocationStrategy, Dict[str, float]] = {
    AllocationStrategy.BALANCED: {
        'expertise': 0.35,
        'availability': 0.25,
        'efficiency': 0.25,
        'collaboration': 0.15,
    },
    AllocationStrategy.EFFICIENCY: {
        'efficiency': 0.45,
        'expertise': 0.25,
        'availability': 0.20,
        'collaboration': 0.10,
    },
    AllocationStrategy.EXPERTISE: {
        'expertise': 0.50,
        'efficiency': 0.20,
        'collaboration': 0.20,
        'availability': 0.10,
    },
}

SENIOR_ROLE_PATTERN = re.compile(r"\b(senior|sr|lead|principal|head|manager|director)\b", re.IGNORECASE)
SENIOR_ROLE_BONUS = 10.0
DEFAULT_ROLE_BONUS = 5.0


def resolve_strategy(strategy: Union[str, AllocationStrategy]) -> AllocationStrategy:
    """Map a strategy name onto the enum, raising InvalidStrategy if unknown."""
    if isinstance(strategy, AllocationStrategy):
        return strategy
    try:
        return AllocationStrategy(str(strategy).lower())
    except ValueError:
        raise InvalidStrategy(str(strategy)) from None


def expertise_score(worker: Worker, project: Project) -> float:
    """
    Score expertise overlap between a worker and a project's requirements.

    Direct matches count double; every other tag the worker holds counts
    once as related breadth. No requirements means no constraint (100).
    """
    required = set(project.required_expertise)
    if not required:
        return 100.0

    held = worker.expertise_set
    direct = len(held & required)
    related = len(held) - direct

    score = (2 * direct + related) / (2 * len(required)) * 100
    return clamp(score, 0.0, 100.0)


def availability_score(worker: Worker) -> float:
    return (1 - worker.workload / 100) * (worker.availability / 100) * 100


def efficiency_score(worker: Worker) -> float:
    """Efficiency adjusted for quality rating and turnaround time, capped at 100."""
    quality_bonus = (worker.quality_rating - 3) * 5
    speed_bonus = max(0.0, 30 - worker.average_completion_hours) * 2
    return min(100.0, worker.efficiency + quality_bonus + speed_bonus)


def is_senior_role(role: str) -> bool:
    return bool(SENIOR_ROLE_PATTERN.search(role or ""))


def collaboration_score(worker: Worker, team_size_hint: int) -> float:
    role_bonus = SENIOR_ROLE_BONUS if is_senior_role(worker.role) else DEFAULT_ROLE_BONUS
    return min(100.0, worker.performance_score * 0.7 + role_bonus + team_size_hint * 2)


def combine_scores(
    strategy: AllocationStrategy,
    expertise: float,
    availability: float,
    efficiency: float,
    collaboration: float,
) -> float:
    weights = STRATEGY_WEIGHTS[strategy]
    return (
        expertise * weights['expertise']
        + availability * weights['availability']
        + efficiency * weights['efficiency']
        + collaboration * weights['collaboration']
    )


def score_worker(
    worker: Worker,
    project: Project,
    strategy: Union[str, AllocationStrategy],
    team_size_hint: int,
    availability_floor: float = 0.0,
) -> WorkerScore:
    """
    Compute all four sub-scores and the strategy-weighted total.

    Args:
        worker: Candidate worker
        project: Project being staffed
        strategy: Weighting strategy
        team_size_hint: Expected team size, feeds the collaboration score
        availability_floor: Workers below this availability are flagged to rank last

    Returns:
        WorkerScore with every sub-score bounded to [0, 100]
    """
    strategy = resolve_strategy(strategy)

    expertise = expertise_score(worker, project)
    availability = clamp(availability_score(worker), 0.0, 100.0)
    efficiency = clamp(efficiency_score(worker), 0.0, 100.0)
    collaboration = clamp(collaboration_score(worker, team_size_hint), 0.0, 100.0)

    return WorkerScore(
        worker_id=worker.id,
        expertise=expertise,
        availability=availability,
        efficiency=efficiency,
        collaboration=collaboration,
        combined=combine_scores(strategy, expertise, availability, efficiency, collaboration),
        below_availability_floor=worker.availability < availability_floor,
    )
