"""Import job ledger: persisted bookkeeping around one batch run."""
import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from auvora.importer.errors import EmptyInputError
from auvora.importer.mapping import get_entity_spec
from auvora.importer.runner import BatchResult, BatchRunner
from auvora.importer.store import RecordStore
from auvora.models.import_job import ImportJobStatus

logger = logging.getLogger(__name__)

JOBS_TABLE = "import_jobs"
DEFAULT_SOURCE = "csv"


@dataclass
class ImportOutcome:
    job_id: uuid.UUID
    total: int
    result: BatchResult


class ImportJobLedger:
    def __init__(self, store: RecordStore, runner: BatchRunner | None = None) -> None:
        self._store = store
        self._runner = runner or BatchRunner(store)

    async def run(
        self,
        tenant_id: uuid.UUID,
        data_type: str,
        rows: Sequence[Sequence[str]],
        source_crm: str | None = None,
    ) -> ImportOutcome:
        """Open a job, run the batch, and close the job.

        The job ends ``completed`` even when rows failed; it ends ``failed``
        only if the run itself raised, in which case the exception is
        re-raised after the job is closed. Store errors while opening or
        closing the job propagate to the caller.
        """
        get_entity_spec(data_type)
        if not rows:
            raise EmptyInputError()

        total = len(rows) - 1
        job = await self._store.insert(JOBS_TABLE, {
            "tenant_id": tenant_id,
            "source_crm": source_crm or DEFAULT_SOURCE,
            "data_type": data_type,
            "status": ImportJobStatus.processing.value,
            "total_records": total,
            "started_at": datetime.now(timezone.utc),
        })
        job_id = job["id"]
        logger.info("Import job %s opened: tenant=%s type=%s rows=%d", job_id, tenant_id, data_type, total)

        try:
            result = await self._runner.run_rows(tenant_id, data_type, rows)
        except Exception:
            logger.exception("Import job %s aborted", job_id)
            await self._store.update(JOBS_TABLE, job_id, {
                "status": ImportJobStatus.failed.value,
                "completed_at": datetime.now(timezone.utc),
            })
            raise

        await self._store.update(JOBS_TABLE, job_id, {
            "status": ImportJobStatus.completed.value,
            "imported_records": result.imported,
            "failed_records": result.failed,
            "error_log": [e.as_dict() for e in result.errors],
            "completed_at": datetime.now(timezone.utc),
        })
        logger.info(
            "Import job %s completed: imported=%d failed=%d",
            job_id, result.imported, result.failed,
        )
        return ImportOutcome(job_id=job_id, total=total, result=result)
