"""CSV bulk import endpoints for tenant members, leads, staff and classes."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from auvora.core.config import settings
from auvora.core.deps import get_record_store, require_platform_admin
from auvora.core.limiter import limiter
from auvora.db.session import get_session
from auvora.importer.errors import FileTooLargeError, ImportRequestError, TenantNotFoundError
from auvora.importer.ledger import ImportJobLedger
from auvora.importer.parser import decode_upload, parse_csv
from auvora.importer.store import RecordStore
from auvora.models.import_job import ImportJob
from auvora.schemas.imports import (
    ImportJobDetail,
    ImportJobListResponse,
    ImportJobOut,
    ImportResponse,
    ImportRowError,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_platform_admin)])


# ─── POST /admin/import ───

@router.post("", response_model=ImportResponse, summary="Import tenant records from a CSV file")
@limiter.limit(settings.IMPORT_RATE_LIMIT)
async def import_csv(
    request: Request,
    store: Annotated[RecordStore, Depends(get_record_store)],
    file: UploadFile | None = File(default=None),
    tenant_id: str | None = Form(default=None),
    data_type: str | None = Form(default=None, description="members | leads | staff | classes"),
    source_crm: str | None = Form(default=None, description="Origin system label, defaults to 'csv'"),
):
    """Parse the upload, run one import job and report counts.

    Bad rows do not fail the request: they are counted and the first few are
    returned, while the job record keeps the complete error log.
    """
    if file is None or not tenant_id or not data_type:
        raise ImportRequestError("File, tenant_id, and data_type are required")

    try:
        tenant_uuid = uuid.UUID(tenant_id)
    except ValueError:
        raise ImportRequestError(f"Invalid tenant_id: '{tenant_id}'") from None

    if await store.get("tenants", tenant_uuid) is None:
        raise TenantNotFoundError(tenant_uuid)

    content = await file.read()
    if len(content) > settings.IMPORT_MAX_FILE_BYTES:
        raise FileTooLargeError(len(content), settings.IMPORT_MAX_FILE_BYTES)

    rows = parse_csv(decode_upload(content))
    logger.info(
        "CSV import requested: tenant=%s type=%s file=%s rows=%d",
        tenant_uuid, data_type, file.filename, len(rows),
    )

    outcome = await ImportJobLedger(store).run(tenant_uuid, data_type, rows, source_crm=source_crm)
    result = outcome.result

    return ImportResponse(
        job_id=outcome.job_id,
        total=outcome.total,
        imported=result.imported,
        failed=result.failed,
        errors=[
            ImportRowError(row=e.row, error=e.error)
            for e in result.errors[: settings.IMPORT_ERROR_SAMPLE_SIZE]
        ],
    )


# ─── GET /admin/import/jobs ───

@router.get("/jobs", response_model=ImportJobListResponse, summary="List import jobs, newest first")
async def list_import_jobs(
    db: Annotated[AsyncSession, Depends(get_session)],
    tenant_id: uuid.UUID | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
):
    stmt = select(ImportJob)
    if tenant_id:
        stmt = stmt.where(ImportJob.tenant_id == tenant_id)

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    offset = (page - 1) * page_size
    stmt = stmt.order_by(ImportJob.created_at.desc()).offset(offset).limit(page_size)
    jobs = (await db.execute(stmt)).scalars().all()

    return ImportJobListResponse(
        items=[ImportJobOut.model_validate(job) for job in jobs],
        total=total,
        page=page,
        page_size=page_size,
    )


# ─── GET /admin/import/jobs/{job_id} ───

@router.get("/jobs/{job_id}", response_model=ImportJobDetail, summary="Import job with its full error log")
async def get_import_job(
    job_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
):
    result = await db.execute(select(ImportJob).where(ImportJob.id == job_id))
    job = result.scalar_one_or_none()
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Import job not found")
    return ImportJobDetail.model_validate(job)
