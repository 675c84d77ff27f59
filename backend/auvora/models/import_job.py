import enum
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from auvora.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class ImportJobStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    completed = "completed"
    failed = "failed"


class ImportJob(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    """Ledger entry for one import batch. Created at start, finalized once."""

    __tablename__ = "import_jobs"

    source_crm: Mapped[str] = mapped_column(String(100), nullable=False, default="csv")
    data_type: Mapped[str | None] = mapped_column(String(20), nullable=True)  # members, leads, staff, classes
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ImportJobStatus.pending.value, index=True
    )
    total_records: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    imported_records: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_records: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_log: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
