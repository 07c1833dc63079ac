from .models import (
    Allocation,
    AllocationStrategy,
    BurnoutRisk,
    PerformanceMetric,
    Priority,
    Project,
    ProjectStatus,
    Worker,
    WorkerScore,
)

__all__ = [
    "Allocation",
    "AllocationStrategy",
    "BurnoutRisk",
    "PerformanceMetric",
    "Priority",
    "Project",
    "ProjectStatus",
    "Worker",
    "WorkerScore",
]
