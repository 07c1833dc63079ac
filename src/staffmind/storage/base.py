from abc import ABC, abstractmethod
from typing import List, Optional

from staffmind.domain.models import Allocation


class AllocationStore(ABC):
    """
    Durable mapping from project id to its single current allocation.

    put() replaces any existing record for the project. When
    expected_version is given the write only succeeds if the stored version
    still matches (optimistic concurrency); otherwise last write wins.
    """

    @abstractmethod
    def get(self, project_id: str) -> Optional[Allocation]:
        """Return the allocation for a project, or None."""
        pass

    @abstractmethod
    def version(self, project_id: str) -> Optional[int]:
        """Return the stored version for a project, or None if absent."""
        pass

    @abstractmethod
    def put(self, allocation: Allocation, expected_version: Optional[int] = None) -> int:
        """Store an allocation, replacing any prior record. Returns the new version."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> bool:
        pass

    @abstractmethod
    def list(self) -> List[Allocation]:
        """All allocations ordered by project id."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the backend is reachable."""
        pass
