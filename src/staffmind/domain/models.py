"""
Domain records for the allocation engine.

Workers, projects and performance metrics arrive from the roster/catalog
collaborator. Allocations are engine-owned and stored keyed by project id.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}


class ProjectStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class BurnoutRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AllocationStrategy(str, Enum):
    BALANCED = "balanced"
    EFFICIENCY = "efficiency"
    EXPERTISE = "expertise"


def _dedupe(tags: List[str]) -> List[str]:
    seen = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return seen


class Worker(BaseModel):
    """A schedulable person with expertise, capacity and performance attributes."""

    id: str
    name: str = ""
    role: str = ""
    expertise: List[str] = Field(default_factory=list)
    efficiency: float = Field(..., ge=0, le=100)
    workload: float = Field(..., ge=0, le=100, description="% of capacity committed")
    availability: float = Field(..., ge=0, le=100, description="% of time theoretically free")
    performance_score: float = Field(..., ge=0, le=100)
    quality_rating: float = Field(..., ge=0, le=5)
    average_completion_hours: float = Field(..., ge=0)
    completed_audits: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("expertise")
    @classmethod
    def normalize_expertise(cls, v: List[str]) -> List[str]:
        return _dedupe(v)

    @property
    def expertise_set(self) -> frozenset:
        return frozenset(self.expertise)


class Project(BaseModel):
    """A discrete unit of demand requiring one or more workers."""

    id: str
    name: str = ""
    framework: str
    priority: Priority = Priority.MEDIUM
    complexity: int = Field(..., ge=1, le=10)
    estimated_hours: float = Field(..., gt=0)
    deadline: date
    required_expertise: List[str] = Field(default_factory=list)
    risk_level: int = Field(..., ge=1, le=10)
    status: ProjectStatus = ProjectStatus.PENDING

    @field_validator("required_expertise")
    @classmethod
    def normalize_required(cls, v: List[str]) -> List[str]:
        return _dedupe(v)

    @property
    def is_open(self) -> bool:
        return self.status != ProjectStatus.COMPLETED

    @property
    def is_active(self) -> bool:
        return self.status in (ProjectStatus.ASSIGNED, ProjectStatus.IN_PROGRESS)


class PerformanceMetric(BaseModel):
    """Team-level historical performance snapshot for one period."""

    period: str
    efficiency: float = Field(..., ge=0, le=100)
    quality: float = Field(..., ge=0, le=100)
    on_time_delivery: float = Field(..., ge=0, le=100)
    utilization: float = Field(..., ge=0, le=100)
    satisfaction: float = Field(..., ge=0, le=5)


class WorkerScore(BaseModel):
    """Sub-scores for one worker/project pair plus the strategy-weighted total."""

    worker_id: str
    expertise: float
    availability: float
    efficiency: float
    collaboration: float
    combined: float
    below_availability_floor: bool = False


class Allocation(BaseModel):
    """Current assignment record for a project. At most one per project."""

    project_id: str
    worker_ids: List[str]
    team_size: int
    strategy: AllocationStrategy
    allocated_hours: int
    effective_efficiency: float
    estimated_days: int
    start_date: datetime
    estimated_completion: datetime
    confidence_score: int = Field(..., ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    member_scores: List[WorkerScore] = Field(default_factory=list)
    advisory_degraded: bool = False
    advisory_summary: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
