"""Tests for the batch runner: per-row isolation, counting and row numbering."""
from datetime import date

import pytest

from auvora.importer.errors import EmptyInputError, UnknownDataTypeError
from auvora.importer.parser import parse_csv
from auvora.importer.runner import BatchRunner, display_row_number

TODAY = date(2026, 10, 19)


def _runner(store) -> BatchRunner:
    return BatchRunner(store, today=lambda: TODAY)


def test_display_row_number_accounts_for_header():
    assert display_row_number(0) == 2
    assert display_row_number(1) == 3


@pytest.mark.asyncio
async def test_member_import_with_one_missing_email(store, tenant_id):
    """Second data row lacks an email: it sits on spreadsheet row 3."""
    rows = parse_csv(
        "name,email,phone,membership_type,status,join_date\n"
        "Jane Doe,jane@example.com,813-555-0100,Unlimited,Active,2024-01-13\n"
        "John Roe,,813-555-0101,Standard,Active,2024-02-01\n"
        "Ana Lima,ana@example.com,,2x-week,On Hold,13/03/2024\n"
    )

    result = await _runner(store).run_rows(tenant_id, "members", rows)

    assert result.imported == 2
    assert result.failed == 1
    assert [e.as_dict() for e in result.errors] == [{"row": 3, "error": "Name and email are required"}]

    members = store.rows("members")
    assert [m["name"] for m in members] == ["Jane Doe", "Ana Lima"]
    assert all(m["tenant_id"] == tenant_id for m in members)
    assert members[1]["status"] == "frozen"
    assert members[1]["join_date"] == date(2024, 3, 13)


@pytest.mark.asyncio
async def test_counts_add_up_to_data_rows(store, tenant_id):
    lines = ["full name,email address"]
    for i in range(12):
        lines.append(f"Person {i},{'' if i % 3 == 0 else f'p{i}@example.com'}")
    rows = parse_csv("\n".join(lines))

    result = await _runner(store).run_rows(tenant_id, "leads", rows)

    assert result.imported + result.failed == len(rows) - 1
    assert result.total == 12
    assert result.failed == 4
    assert [e.row for e in result.errors] == [2, 5, 8, 11]


@pytest.mark.asyncio
async def test_lead_without_name_does_not_stop_later_rows(store, tenant_id):
    rows = parse_csv(
        "name,full_name,first_name,last_name,email\n"
        ",,,,nameless@example.com\n"
        "Casey White,,,,casey@example.com\n"
    )

    result = await _runner(store).run_rows(tenant_id, "leads", rows)

    assert result.imported == 1
    assert result.errors[0].row == 2
    assert "Name" in result.errors[0].error
    assert store.rows("leads")[0]["email"] == "casey@example.com"


@pytest.mark.asyncio
async def test_store_rejection_is_recorded_against_the_row(store, tenant_id):
    """A failed insert counts as a failed row; the batch carries on."""
    store.reject_when = lambda table, values: (
        'duplicate key value violates unique constraint "members_email_key"'
        if values["email"] == "dup@example.com" else None
    )
    rows = parse_csv(
        "name,email\n"
        "A One,a@example.com\n"
        "Dup,dup@example.com\n"
        "C Three,c@example.com\n"
    )

    result = await _runner(store).run_rows(tenant_id, "members", rows)

    assert result.imported == 2
    assert result.failed == 1
    assert result.errors[0].row == 3
    assert "duplicate key" in result.errors[0].error
    assert len(store.rows("members")) == 2


@pytest.mark.asyncio
async def test_unknown_data_type_rejects_before_any_row(store, tenant_id):
    rows = parse_csv("name,email\nA,a@example.com\n")

    with pytest.raises(UnknownDataTypeError):
        await _runner(store).run_rows(tenant_id, "invoices", rows)

    assert store.inserts == []


@pytest.mark.asyncio
async def test_empty_rows_rejected(store, tenant_id):
    with pytest.raises(EmptyInputError):
        await _runner(store).run_rows(tenant_id, "members", [])


@pytest.mark.asyncio
async def test_header_only_imports_nothing(store, tenant_id):
    result = await _runner(store).run_rows(tenant_id, "staff", parse_csv("name,email,role\n"))
    assert (result.imported, result.failed, result.errors) == (0, 0, [])


@pytest.mark.asyncio
async def test_colliding_email_headers_use_later_column(store, tenant_id):
    rows = parse_csv("Name,Email,email\nJane,old@example.com,new@example.com\n")

    await _runner(store).run_rows(tenant_id, "members", rows)

    assert store.rows("members")[0]["email"] == "new@example.com"


@pytest.mark.asyncio
async def test_email_column_preferred_over_email_address(store, tenant_id):
    rows = parse_csv("name,Email,Email Address\nJane,primary@example.com,other@example.com\n")

    await _runner(store).run_rows(tenant_id, "members", rows)

    assert store.rows("members")[0]["email"] == "primary@example.com"


@pytest.mark.asyncio
async def test_class_rows_with_numeric_fallbacks(store, tenant_id):
    rows = parse_csv(
        "Class Name,Day,Start Time,Duration,Capacity\n"
        "Spin,Tuesday,6:00 AM,45,abc\n"
        ",Monday,7:00 AM,60,10\n"
    )

    result = await _runner(store).run_rows(tenant_id, "classes", rows)

    assert result.imported == 1
    assert result.errors[0].error == "Class name is required"
    spin = store.rows("classes")[0]
    assert (spin["day_of_week"], spin["time"], spin["duration"], spin["capacity"]) == ("Tuesday", "6:00 AM", 45, 20)


@pytest.mark.asyncio
async def test_run_records_returns_persisted_rows(store, tenant_id):
    records = [
        {"name": "Chris Johnson", "email": "chris@demo.com", "role": "head-coach"},
        {"name": "Sam Brown", "email": "sam@demo.com", "role": "front-desk"},
    ]

    result = await _runner(store).run_records(tenant_id, "staff", records)

    assert result.imported == 2
    assert [r["role"] for r in result.records] == ["head-coach", "front-desk"]
    assert all("id" in r for r in result.records)
    assert result.records[0]["hire_date"] == TODAY
