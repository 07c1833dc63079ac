from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# Helper to support both Postgres JSONB and generic JSON (for SQLite tests)
JSON_TYPE = JSON().with_variant(JSONB, 'postgresql')
TIMESTAMP_TYPE = DateTime(timezone=True).with_variant(TIMESTAMP(timezone=True), 'postgresql')


class AllocationModel(Base):
    __tablename__ = "allocations"

    # One row per project enforces the single-allocation invariant
    project_id: Mapped[str] = mapped_column(String, primary_key=True)
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON_TYPE, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP_TYPE, server_default=func.now(), onupdate=func.now())
