from .allocation_service import ResourceAllocationService
from .roster import InMemoryRoster, RosterProvider

__all__ = ["ResourceAllocationService", "InMemoryRoster", "RosterProvider"]
