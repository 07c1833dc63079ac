from staffmind.advisory import OpenAIAdvisor
from staffmind.data.sample_data import sample_metrics, sample_projects, sample_workers
from staffmind.engine import InMemoryRoster, ResourceAllocationService
from staffmind.platform.config import settings
from staffmind.storage import AllocationStore, InMemoryAllocationStore, SqlAdapter, SqlAllocationStore

# Singletons
_sql_adapter: SqlAdapter | None = None
_allocation_store: AllocationStore | None = None
_allocation_service: ResourceAllocationService | None = None


def get_sql_adapter() -> SqlAdapter | None:
    global _sql_adapter
    if not _sql_adapter and settings.DATABASE_URL:
        _sql_adapter = SqlAdapter(settings.DATABASE_URL, pool_size=settings.DATABASE_POOL_SIZE)
    return _sql_adapter


def get_allocation_store() -> AllocationStore:
    global _allocation_store
    if not _allocation_store:
        adapter = get_sql_adapter()
        _allocation_store = SqlAllocationStore(adapter) if adapter else InMemoryAllocationStore()
    return _allocation_store


def get_allocation_service() -> ResourceAllocationService:
    global _allocation_service
    if not _allocation_service:
        roster = InMemoryRoster(sample_workers(), sample_projects(), sample_metrics())
        advisor = OpenAIAdvisor(settings) if settings.ADVISORY_ENABLED else None
        _allocation_service = ResourceAllocationService(
            roster=roster,
            store=get_allocation_store(),
            advisor=advisor,
            settings=settings,
        )
    return _allocation_service


async def init_resources() -> None:
    """Connect the allocation store and build the service."""
    adapter = get_sql_adapter()
    if adapter:
        adapter.connect()
    get_allocation_service()


async def close_resources() -> None:
    global _sql_adapter, _allocation_store, _allocation_service

    if _sql_adapter:
        _sql_adapter.close()
        _sql_adapter = None

    _allocation_store = None
    _allocation_service = None
