"""Shared fixtures: an in-memory record store and API dependency overrides."""
import copy
import uuid
from collections import defaultdict
from collections.abc import Callable
from typing import Any

import pytest

from auvora.core.deps import get_record_store, require_platform_admin
from auvora.core.limiter import limiter
from auvora.importer.errors import RecordStoreError
from auvora.main import app
from auvora.schemas.auth import Principal


# ─── In-memory record store ───────────────────────────────────────────────────

class InMemoryRecordStore:
    """RecordStore fake keeping rows in dicts.

    ``reject_when(table, values)`` may return an error message to make an
    insert fail the way a constraint violation would.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[uuid.UUID, dict[str, Any]]] = defaultdict(dict)
        self.reject_when: Callable[[str, dict[str, Any]], str | None] | None = None
        self.fail_updates_on: set[str] = set()
        self.inserts: list[str] = []

    async def insert(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        self.inserts.append(table)
        if self.reject_when is not None:
            message = self.reject_when(table, values)
            if message:
                raise RecordStoreError(message)
        row = {"id": uuid.uuid4(), **values}
        self.tables[table][row["id"]] = row
        return copy.deepcopy(row)

    async def update(self, table: str, record_id: uuid.UUID, values: dict[str, Any]) -> None:
        if table in self.fail_updates_on:
            raise RecordStoreError(f"connection lost while updating {table}")
        if record_id not in self.tables[table]:
            raise RecordStoreError(f"{table} row {record_id} not found")
        self.tables[table][record_id].update(copy.deepcopy(values))

    async def get(self, table: str, record_id: uuid.UUID) -> dict[str, Any] | None:
        row = self.tables[table].get(record_id)
        return copy.deepcopy(row) if row is not None else None

    async def delete_for_tenant(self, table: str, tenant_id: uuid.UUID) -> int:
        doomed = [rid for rid, row in self.tables[table].items() if row.get("tenant_id") == tenant_id]
        for rid in doomed:
            del self.tables[table][rid]
        return len(doomed)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return list(self.tables[table].values())

    def add_tenant(self, **overrides: Any) -> uuid.UUID:
        tenant_id = uuid.uuid4()
        self.tables["tenants"][tenant_id] = {
            "id": tenant_id,
            "name": "Iron Temple",
            "subdomain": f"iron-{tenant_id.hex[:8]}",
            "is_demo": False,
            "demo_industry": None,
            **overrides,
        }
        return tenant_id


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def tenant_id(store: InMemoryRecordStore) -> uuid.UUID:
    return store.add_tenant()


# ─── API helpers ──────────────────────────────────────────────────────────────

ADMIN = Principal(id="f96955d0-752f-4e0c-b1dc-d26d8dd1460e", role="platform_admin", email="ops@auvora.io")


async def override_require_platform_admin() -> Principal:
    """Dependency override: always return the platform admin."""
    return ADMIN


@pytest.fixture
def api(store: InMemoryRecordStore):
    """Route the app at the in-memory store with an authenticated admin."""
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[require_platform_admin] = override_require_platform_admin
    limiter.enabled = False
    try:
        yield app
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True
