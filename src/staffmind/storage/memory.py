import threading
from typing import Dict, List, Optional, Tuple

from staffmind.domain.models import Allocation
from staffmind.errors import StaleAllocationError

from .base import AllocationStore


class InMemoryAllocationStore(AllocationStore):
    """Process-local store. Records are copied in and out."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[str, Tuple[int, Allocation]] = {}

    def get(self, project_id: str) -> Optional[Allocation]:
        with self._lock:
            record = self._records.get(project_id)
        return record[1].model_copy(deep=True) if record else None

    def version(self, project_id: str) -> Optional[int]:
        with self._lock:
            record = self._records.get(project_id)
        return record[0] if record else None

    def put(self, allocation: Allocation, expected_version: Optional[int] = None) -> int:
        with self._lock:
            current = self._records.get(allocation.project_id)
            current_version = current[0] if current else None
            if expected_version is not None and current_version != expected_version:
                raise StaleAllocationError(
                    f"Allocation for {allocation.project_id} is at version {current_version}, "
                    f"expected {expected_version}"
                )
            new_version = (current_version or 0) + 1
            self._records[allocation.project_id] = (new_version, allocation.model_copy(deep=True))
            return new_version

    def delete(self, project_id: str) -> bool:
        with self._lock:
            return self._records.pop(project_id, None) is not None

    def list(self) -> List[Allocation]:
        with self._lock:
            records = sorted(self._records.items())
        return [allocation.model_copy(deep=True) for _, (_, allocation) in records]

    def health_check(self) -> bool:
        return True
