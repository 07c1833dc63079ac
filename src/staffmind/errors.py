"""
Error taxonomy surfaced by the allocation engine.

Only these kinds are meant to reach callers. AdvisoryServiceUnavailable is
raised by advisory providers and recovered inside the allocation service.
"""


class AllocationError(Exception):
    """Base class for engine errors visible to callers."""


class ProjectNotFound(AllocationError):
    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found")


class NoEligibleWorkers(AllocationError):
    def __init__(self, project_id: str, pool_size: int = 0):
        self.project_id = project_id
        self.pool_size = pool_size
        super().__init__(
            f"No eligible workers for project {project_id} (pool size {pool_size})"
        )


class InvalidStrategy(AllocationError):
    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unknown allocation strategy '{strategy}'")


class StoreUnavailable(AllocationError):
    """Allocation store I/O failed; nothing was written."""


class StaleAllocationError(StoreUnavailable):
    """Optimistic concurrency check failed on the allocation store."""


class AdvisoryServiceUnavailable(AllocationError):
    """The advisory text-generation service failed or timed out."""
