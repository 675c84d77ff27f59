"""Batch runner: maps, validates and persists rows one at a time.

One runner serves both sources of rows: parsed CSV (header row + data rows)
and generated demo data (already-canonical records). A failing row is
recorded and counted; it never stops the batch.
"""
import logging
import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from auvora.importer.errors import EmptyInputError, RecordStoreError, RowRejectedError
from auvora.importer.mapping import EntitySpec, Record, get_entity_spec
from auvora.importer.parser import normalize_headers, row_to_record
from auvora.importer.store import RecordStore

logger = logging.getLogger(__name__)

# Rows are shown 1-based and the header occupies row 1.
FIRST_DATA_ROW_NUMBER = 2


def display_row_number(zero_based_index: int) -> int:
    """Spreadsheet row number of the ``zero_based_index``-th data row."""
    return zero_based_index + FIRST_DATA_ROW_NUMBER


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class RowError:
    row: int
    error: str

    def as_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error}


@dataclass
class BatchResult:
    imported: int = 0
    failed: int = 0
    errors: list[RowError] = field(default_factory=list)
    records: list[dict[str, Any]] = field(default_factory=list)  # persisted rows, in order

    @property
    def total(self) -> int:
        return self.imported + self.failed


class BatchRunner:
    def __init__(self, store: RecordStore, today: Callable[[], date] = utc_today) -> None:
        self._store = store
        self._today = today

    async def run_rows(
        self,
        tenant_id: uuid.UUID,
        data_type: str,
        rows: Sequence[Sequence[str]],
    ) -> BatchResult:
        """Import parsed CSV rows; ``rows[0]`` is the header row.

        Raises:
            UnknownDataTypeError: before any row is touched.
            EmptyInputError: ``rows`` has no header row.
        """
        spec = get_entity_spec(data_type)
        if not rows:
            raise EmptyInputError()
        headers = normalize_headers(rows[0])
        records = (row_to_record(headers, row) for row in rows[1:])
        return await self._run(tenant_id, spec, records)

    async def run_records(
        self,
        tenant_id: uuid.UUID,
        data_type: str,
        records: Iterable[Record],
    ) -> BatchResult:
        """Import records already keyed by canonical field name."""
        spec = get_entity_spec(data_type)
        return await self._run(tenant_id, spec, records)

    async def _run(
        self,
        tenant_id: uuid.UUID,
        spec: EntitySpec,
        records: Iterable[Record],
    ) -> BatchResult:
        result = BatchResult()
        today = self._today()

        for index, record in enumerate(records):
            try:
                values = spec.build(tenant_id, record, today)
                persisted = await self._store.insert(spec.table, values)
            except (RowRejectedError, RecordStoreError) as exc:
                row_error = RowError(row=display_row_number(index), error=str(exc))
                result.failed += 1
                result.errors.append(row_error)
                logger.debug("Rejected %s row %d: %s", spec.data_type.value, row_error.row, row_error.error)
                continue
            result.imported += 1
            result.records.append(persisted)

        logger.info(
            "Batch %s for tenant %s: imported=%d failed=%d",
            spec.data_type.value, tenant_id, result.imported, result.failed,
        )
        return result
