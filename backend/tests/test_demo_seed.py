"""Tests for demo data generation, seeding, reset and the demo endpoints."""
import random
import uuid
from datetime import date, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from auvora.api.v1.demos import demo_tenant_values
from auvora.db.session import get_session
from auvora.models.staff import COACHING_ROLES
from auvora.services.demo_seed import (
    CLASS_DAYS,
    CLASS_TIMES,
    JOIN_WINDOW_DAYS,
    STAFF_ROSTERS,
    DemoDataGenerator,
    industry_color,
    normalize_industry,
    reset_demo_data,
    seed_demo_data,
)

TODAY = date(2026, 10, 19)


def _generator(industry: str = "fitness", seed: int = 7) -> DemoDataGenerator:
    return DemoDataGenerator(industry, rng=random.Random(seed), today=TODAY)


# ─── Generator ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw,expected", [
    ("fitness", "fitness"),
    ("Wellness", "wellness"),
    (" education ", "education"),
    ("martial-arts", "education"),
])
def test_normalize_industry(raw, expected):
    assert normalize_industry(raw) == expected


def test_industry_color_falls_back_to_fitness():
    assert industry_color("wellness") == "#9333ea"
    assert industry_color("dance") == industry_color("fitness")


def test_same_seed_gives_same_records():
    assert _generator(seed=3).member_records(10) == _generator(seed=3).member_records(10)


def test_class_schedule_covers_every_slot():
    coach_ids = [uuid.uuid4(), uuid.uuid4()]
    classes = _generator().class_records(coach_ids)

    assert len(classes) == len(CLASS_DAYS) * len(CLASS_TIMES)
    assert {(c["day_of_week"], c["time"]) for c in classes} == {
        (day, time) for day in CLASS_DAYS for time in CLASS_TIMES
    }
    assert {uuid.UUID(c["coach_id"]) for c in classes} <= set(coach_ids)


def test_classes_without_coaches_have_no_coach():
    assert all(c["coach_id"] == "" for c in _generator().class_records([]))


def test_member_dates_within_window():
    members = _generator().member_records(50)

    assert len({m["email"] for m in members}) == 50
    for member in members:
        joined = date.fromisoformat(member["join_date"])
        assert TODAY - timedelta(days=JOIN_WINDOW_DAYS) < joined <= TODAY
        assert member["payment_status"] in ("current", "overdue")


def test_lead_notes_mention_industry():
    leads = _generator("wellness").lead_records(3)
    assert all(lead["notes"] == "Interested in wellness services" for lead in leads)


# ─── seed_demo_data / reset_demo_data ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_seed_fitness_tenant(store, tenant_id):
    report = await seed_demo_data(store, tenant_id, "fitness", generator=_generator())

    assert report.summary() == {
        "staff": {"imported": 5, "failed": 0},
        "classes": {"imported": 15, "failed": 0},
        "members": {"imported": 30, "failed": 0},
        "leads": {"imported": 15, "failed": 0},
    }
    for table in ("staff", "classes", "members", "leads"):
        assert all(row["tenant_id"] == tenant_id for row in store.rows(table))


@pytest.mark.asyncio
async def test_classes_are_taught_by_coaching_staff(store, tenant_id):
    await seed_demo_data(store, tenant_id, "fitness", generator=_generator())

    coach_ids = {s["id"] for s in store.rows("staff") if s["role"] in COACHING_ROLES}
    front_desk = {s["id"] for s in store.rows("staff") if s["role"] == "front-desk"}
    assigned = {c["coach_id"] for c in store.rows("classes")}
    assert assigned <= coach_ids
    assert not assigned & front_desk


@pytest.mark.asyncio
async def test_seed_counts_can_be_overridden(store, tenant_id):
    report = await seed_demo_data(
        store, tenant_id, "education", generator=_generator("education"), member_count=4, lead_count=2,
    )
    assert report.members.imported == 4
    assert report.leads.imported == 2
    assert len(store.rows("staff")) == len(STAFF_ROSTERS["education"])


@pytest.mark.asyncio
async def test_seed_counts_rejected_rows(store, tenant_id):
    store.reject_when = lambda table, values: "duplicate email" if table == "leads" else None

    report = await seed_demo_data(store, tenant_id, "wellness", generator=_generator("wellness"), lead_count=3)

    assert report.leads.imported == 0
    assert report.leads.failed == 3
    assert report.members.imported == 30


@pytest.mark.asyncio
async def test_reset_replaces_only_this_tenant(store, tenant_id):
    other = store.add_tenant()
    await seed_demo_data(store, other, "fitness", generator=_generator(seed=1), member_count=3, lead_count=1)
    await seed_demo_data(store, tenant_id, "fitness", generator=_generator(seed=2))
    store.tables["members"][uuid.uuid4()] = {"tenant_id": tenant_id, "name": "Walk In"}

    report = await reset_demo_data(store, tenant_id, "fitness", generator=_generator(seed=3))

    mine = [m for m in store.rows("members") if m["tenant_id"] == tenant_id]
    assert len(mine) == report.members.imported == 30
    assert all(m["name"] != "Walk In" for m in mine)
    assert len([m for m in store.rows("members") if m["tenant_id"] == other]) == 3


# ─── /api/v1/admin/demos ──────────────────────────────────────────────────────

def test_demo_tenant_values():
    values = demo_tenant_values("Iron Demo", "Fitness")
    assert values["subdomain"].startswith("demo-fitness-")
    assert values["owner_email"] == "demo-fitness@auvora.demo"
    assert values["is_demo"] is True
    assert values["subscription_status"] == "demo"
    assert values["primary_color"] == "#0f5257"


@pytest.mark.asyncio
async def test_create_demo_returns_201_with_counts(api, store):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.post("/api/v1/admin/demos", json={"industry": "wellness", "name": "Zen Demo"})

    assert response.status_code == 201
    data = response.json()
    assert data["demo"]["is_demo"] is True
    assert data["demo"]["demo_industry"] == "wellness"
    assert data["seeded"]["classes"] == {"imported": 15, "failed": 0}
    assert data["seeded"]["staff"]["imported"] == len(STAFF_ROSTERS["wellness"])

    tenant_id = uuid.UUID(data["demo"]["id"])
    assert len([m for m in store.rows("members") if m["tenant_id"] == tenant_id]) == 30


@pytest.mark.asyncio
async def test_create_demo_requires_industry(api, store):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.post("/api/v1/admin/demos", json={"name": "Zen Demo"})
    assert response.status_code == 400
    assert response.json() == {"error": "industry: Field required"}
    assert store.rows("tenants") == []


@pytest.mark.asyncio
async def test_reset_demo(api, store):
    tenant_id = store.add_tenant(is_demo=True, demo_industry="fitness")
    store.tables["leads"][uuid.uuid4()] = {"tenant_id": tenant_id, "name": "Stale Lead"}

    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.post(f"/api/v1/admin/demos/{tenant_id}/reset")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["seeded"]["leads"]["imported"] == 15
    assert all(lead["name"] != "Stale Lead" for lead in store.rows("leads"))
    assert "updated_at" in store.tables["tenants"][tenant_id]


@pytest.mark.asyncio
async def test_reset_refuses_non_demo_tenant(api, store, tenant_id):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.post(f"/api/v1/admin/demos/{tenant_id}/reset")

    assert response.status_code == 404
    assert response.json() == {"error": "Demo tenant not found"}
    assert store.inserts == []


@pytest.mark.asyncio
async def test_list_demos(api):
    demo = SimpleNamespace(
        id=uuid.uuid4(),
        name="Zen Demo",
        subdomain="demo-wellness-1760880000000",
        custom_domain=None,
        primary_color="#9333ea",
        secondary_color="#d4af37",
        owner_name="Demo User",
        owner_email="demo-wellness@auvora.demo",
        timezone="America/New_York",
        onboarding_status="active",
        subscription_status="demo",
        is_demo=True,
        demo_industry="wellness",
        created_at=None,
    )
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [demo]
    mock_session = AsyncMock()
    mock_session.execute = AsyncMock(return_value=mock_result)

    async def _override():
        yield mock_session

    api.dependency_overrides[get_session] = _override
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.get("/api/v1/admin/demos")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["demo_industry"] == "wellness"


@pytest.mark.asyncio
async def test_create_demo_rejects_blank_name(api, store):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        response = await client.post("/api/v1/admin/demos", json={"industry": "fitness", "name": "  "})

    assert response.status_code == 400
    assert response.json()["error"].startswith("name: ")
    assert store.inserts == []
