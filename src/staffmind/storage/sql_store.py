from contextlib import contextmanager
from typing import Generator, List, Optional
import logging

from sqlalchemy import create_engine, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from staffmind.domain.models import Allocation
from staffmind.errors import StaleAllocationError, StoreUnavailable

from .base import AllocationStore
from .models import AllocationModel, Base

logger = logging.getLogger(__name__)


class SqlAdapter:
    """
    SQLAlchemy connection adapter for Postgres or SQLite.
    """

    def __init__(self, url: str, pool_size: int = 5):
        self.url = url
        self.pool_size = pool_size
        self._engine = None
        self._session_factory = None

    def connect(self) -> None:
        if self._engine:
            return

        try:
            logger.info(f"Connecting allocation store at {self.url.split('@')[-1]}")

            if self.url.startswith("sqlite"):
                # One shared connection so in-memory databases survive across sessions
                self._engine = create_engine(
                    self.url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self._engine = create_engine(
                    self.url,
                    pool_size=self.pool_size,
                    pool_pre_ping=True,
                )

            Base.metadata.create_all(self._engine)
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            logger.info("Allocation store connection established.")

        except SQLAlchemyError as e:
            logger.error(f"Failed to connect allocation store: {e}")
            raise StoreUnavailable(str(e)) from e

    def close(self) -> None:
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Allocation store connection closed.")

    def health_check(self) -> bool:
        if not self._engine:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception("allocation store unhealthy")
            return False

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        """
        if not self._session_factory:
            raise StoreUnavailable("Allocation store is not connected. Call connect() first.")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class SqlAllocationStore(AllocationStore):
    """Allocation store backed by a single `allocations` table."""

    def __init__(self, adapter: SqlAdapter):
        self.adapter = adapter

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        try:
            with self.adapter.get_session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Allocation store I/O failed: {e}")
            raise StoreUnavailable(str(e)) from e

    def get(self, project_id: str) -> Optional[Allocation]:
        with self._session() as session:
            row = session.get(AllocationModel, project_id)
            return Allocation.model_validate(row.payload) if row else None

    def version(self, project_id: str) -> Optional[int]:
        with self._session() as session:
            row = session.get(AllocationModel, project_id)
            return row.version if row else None

    def put(self, allocation: Allocation, expected_version: Optional[int] = None) -> int:
        payload = allocation.model_dump(mode="json")
        with self._session() as session:
            row = session.get(AllocationModel, allocation.project_id, with_for_update=True)
            current_version = row.version if row else None
            if expected_version is not None and current_version != expected_version:
                raise StaleAllocationError(
                    f"Allocation for {allocation.project_id} is at version {current_version}, "
                    f"expected {expected_version}"
                )

            if row:
                row.payload = payload
                row.version += 1
                return row.version

            session.add(AllocationModel(project_id=allocation.project_id, payload=payload, version=1))
            return 1

    def delete(self, project_id: str) -> bool:
        with self._session() as session:
            row = session.get(AllocationModel, project_id)
            if row:
                session.delete(row)
                return True
            return False

    def list(self) -> List[Allocation]:
        with self._session() as session:
            stmt = select(AllocationModel).order_by(AllocationModel.project_id)
            return [Allocation.model_validate(row.payload) for row in session.scalars(stmt).all()]

    def health_check(self) -> bool:
        return self.adapter.health_check()
