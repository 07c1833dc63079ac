from .base import AllocationStore
from .memory import InMemoryAllocationStore
from .sql_store import SqlAdapter, SqlAllocationStore

__all__ = [
    "AllocationStore",
    "InMemoryAllocationStore",
    "SqlAdapter",
    "SqlAllocationStore",
]
