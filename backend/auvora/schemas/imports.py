"""Pydantic schemas for CSV import endpoints and the import job ledger."""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ImportRowError(BaseModel):
    row: int
    error: str


class ImportResponse(BaseModel):
    job_id: uuid.UUID
    total: int
    imported: int
    failed: int
    errors: list[ImportRowError]  # first IMPORT_ERROR_SAMPLE_SIZE only


# ─── Job ledger ───

class ImportJobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    source_crm: str
    data_type: str | None
    status: str
    total_records: int
    imported_records: int
    failed_records: int
    started_at: datetime | None
    completed_at: datetime | None
    created_at: datetime


class ImportJobDetail(ImportJobOut):
    error_log: list[ImportRowError]


class ImportJobListResponse(BaseModel):
    items: list[ImportJobOut]
    total: int
    page: int
    page_size: int
