"""Exception types raised by the import engine.

Batch-level errors (``ImportEngineError`` subclasses) reject the whole
request and carry the HTTP status the API answers with. Row-level errors
(``RowRejectedError`` and ``RecordStoreError`` raised from a row insert) are
caught by the batch runner and recorded against the row.
"""
from fastapi import status


class ImportEngineError(Exception):
    """Rejects a whole import request before any row is processed."""

    status_code: int = status.HTTP_400_BAD_REQUEST


class ImportRequestError(ImportEngineError):
    """Malformed request: missing file, tenant or data type."""


class EmptyInputError(ImportEngineError):
    def __init__(self, message: str = "CSV file is empty") -> None:
        super().__init__(message)


class UnknownDataTypeError(ImportEngineError):
    def __init__(self, data_type: str) -> None:
        self.data_type = data_type
        super().__init__(f"Unknown data type: {data_type}")


class FileTooLargeError(ImportEngineError):
    status_code = 413

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"File is {size} bytes; the limit is {limit} bytes")


class TenantNotFoundError(ImportEngineError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, tenant_id: object) -> None:
        super().__init__(f"Tenant {tenant_id} not found")


class RowRejectedError(Exception):
    """A single row failed validation; the batch carries on."""


class MissingRequiredFieldError(RowRejectedError):
    def __init__(self, fields: list[str], message: str) -> None:
        self.fields = fields
        super().__init__(message)


class RecordStoreError(Exception):
    """The record store refused a read or write (constraint, connectivity)."""
