"""Synthetic demo data for showcase tenants.

Generated staff, classes, members and leads are written through the same
``BatchRunner`` as CSV imports, so demo rows go through the same mapping and
validation.
"""
import logging
import random
import uuid
from dataclasses import dataclass
from datetime import date, timedelta

from auvora.core.config import settings
from auvora.importer.mapping import DataType
from auvora.importer.runner import BatchResult, BatchRunner, utc_today
from auvora.importer.store import RecordStore
from auvora.models.staff import COACHING_ROLES

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "fitness"

INDUSTRY_COLORS = {
    "fitness": "#0f5257",
    "wellness": "#9333ea",
    "education": "#2563eb",
}

# (name, email, role, phone)
STAFF_ROSTERS: dict[str, list[tuple[str, str, str, str]]] = {
    "fitness": [
        ("Chris Johnson", "chris@demo.com", "head-coach", "813-555-0101"),
        ("Alex Rivera", "alex@demo.com", "coach", "813-555-0102"),
        ("Jordan Martinez", "jordan@demo.com", "coach", "813-555-0103"),
        ("Taylor Anderson", "taylor@demo.com", "coach", "813-555-0104"),
        ("Sam Brown", "sam@demo.com", "front-desk", "813-555-0107"),
    ],
    "wellness": [
        ("Sarah Chen", "sarah@demo.com", "head-coach", "813-555-0201"),
        ("Maya Patel", "maya@demo.com", "instructor", "813-555-0202"),
        ("Emma Wilson", "emma@demo.com", "instructor", "813-555-0203"),
        ("Lisa Thompson", "lisa@demo.com", "front-desk", "813-555-0204"),
    ],
    "education": [
        ("Dr. James Miller", "james@demo.com", "head-coach", "813-555-0301"),
        ("Prof. Emily Davis", "emily@demo.com", "instructor", "813-555-0302"),
        ("Michael Chen", "michael@demo.com", "instructor", "813-555-0303"),
        ("Rachel Green", "rachel@demo.com", "front-desk", "813-555-0304"),
    ],
}

# (name, duration, capacity, location)
CLASS_TEMPLATES: dict[str, list[tuple[str, int, int, str]]] = {
    "fitness": [
        ("Circuit Training", 60, 20, "Main Studio"),
        ("HIIT Blast", 30, 20, "Main Studio"),
        ("Strength & Conditioning", 60, 15, "Weight Room"),
        ("Bootcamp", 60, 25, "Main Studio"),
    ],
    "wellness": [
        ("Yoga Flow", 60, 15, "Zen Studio"),
        ("Meditation", 30, 20, "Quiet Room"),
        ("Pilates", 60, 12, "Mat Room"),
        ("Sound Bath", 45, 10, "Healing Room"),
    ],
    "education": [
        ("Math Tutoring", 60, 8, "Room A"),
        ("SAT Prep", 90, 12, "Room B"),
        ("Science Lab", 60, 10, "Lab"),
        ("Writing Workshop", 60, 8, "Room C"),
    ],
}

MEMBERSHIP_TYPES = {
    "fitness": ["1x-week", "2x-week", "unlimited"],
    "wellness": ["monthly", "class-pack-5", "class-pack-10", "unlimited"],
    "education": ["weekly", "monthly", "semester"],
}

CLASS_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
CLASS_TIMES = ["9:00 AM", "10:00 AM", "2:00 PM"]

MEMBER_FIRST_NAMES = ["James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda", "William", "Elizabeth"]
MEMBER_LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]
LEAD_FIRST_NAMES = ["Alex", "Sam", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Quinn"]
LEAD_LAST_NAMES = ["Anderson", "Thomas", "Jackson", "White", "Harris", "Martin"]
LEAD_SOURCES = ["website", "instagram", "facebook", "walk-in", "referral"]
LEAD_STATUSES = ["new", "contacted", "qualified"]

JOIN_WINDOW_DAYS = 180
OVERDUE_RATE = 0.15

# Child tables first so foreign keys to staff are gone before staff is.
RESET_TABLES = ("leads", "members", "classes", "staff")


def normalize_industry(industry: str | None) -> str:
    """Known industries map to themselves; anything else gets the education set."""
    key = (industry or DEFAULT_INDUSTRY).strip().lower()
    return key if key in STAFF_ROSTERS else "education"


def industry_color(industry: str | None) -> str:
    return INDUSTRY_COLORS.get((industry or "").strip().lower(), INDUSTRY_COLORS[DEFAULT_INDUSTRY])


def _random_phone(rng: random.Random) -> str:
    return f"813-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}"


class DemoDataGenerator:
    """Builds canonical records for one industry.

    ``rng`` and ``today`` are injectable so tests get repeatable output.
    """

    def __init__(self, industry: str, rng: random.Random | None = None, today: date | None = None) -> None:
        self.industry = normalize_industry(industry)
        self.rng = rng or random.Random()
        self.today = today or utc_today()

    def staff_records(self) -> list[dict[str, str]]:
        return [
            {"name": name, "email": email, "role": role, "phone": phone}
            for name, email, role, phone in STAFF_ROSTERS[self.industry]
        ]

    def class_records(self, coach_ids: list[uuid.UUID]) -> list[dict[str, str]]:
        templates = CLASS_TEMPLATES[self.industry]
        records = []
        for day in CLASS_DAYS:
            for time in CLASS_TIMES:
                name, duration, capacity, location = self.rng.choice(templates)
                coach_id = self.rng.choice(coach_ids) if coach_ids else None
                records.append({
                    "name": name,
                    "day_of_week": day,
                    "time": time,
                    "duration": str(duration),
                    "capacity": str(capacity),
                    "location": location,
                    "coach_id": str(coach_id) if coach_id else "",
                })
        return records

    def member_records(self, count: int) -> list[dict[str, str]]:
        membership_types = MEMBERSHIP_TYPES[self.industry]
        records = []
        for i in range(count):
            first = self.rng.choice(MEMBER_FIRST_NAMES)
            last = self.rng.choice(MEMBER_LAST_NAMES)
            join_date = self.today - timedelta(days=self.rng.randrange(JOIN_WINDOW_DAYS))
            next_due = self.today + timedelta(days=self.rng.randrange(30) - 10)
            records.append({
                "name": f"{first} {last}",
                "email": f"{first.lower()}.{last.lower()}{i}@example.com",
                "phone": _random_phone(self.rng),
                "membership_type": self.rng.choice(membership_types),
                "status": "active",
                "join_date": join_date.isoformat(),
                "payment_status": "overdue" if self.rng.random() < OVERDUE_RATE else "current",
                "next_payment_due": next_due.isoformat(),
            })
        return records

    def lead_records(self, count: int) -> list[dict[str, str]]:
        records = []
        for i in range(count):
            first = self.rng.choice(LEAD_FIRST_NAMES)
            last = self.rng.choice(LEAD_LAST_NAMES)
            records.append({
                "name": f"{first} {last}",
                "email": f"{first.lower()}.{last.lower()}.lead{i}@example.com",
                "phone": _random_phone(self.rng),
                "source": self.rng.choice(LEAD_SOURCES),
                "status": self.rng.choice(LEAD_STATUSES),
                "notes": f"Interested in {self.industry} services",
            })
        return records


@dataclass
class SeedReport:
    staff: BatchResult
    classes: BatchResult
    members: BatchResult
    leads: BatchResult

    def summary(self) -> dict[str, dict[str, int]]:
        return {
            name: {"imported": result.imported, "failed": result.failed}
            for name, result in (
                ("staff", self.staff),
                ("classes", self.classes),
                ("members", self.members),
                ("leads", self.leads),
            )
        }


async def seed_demo_data(
    store: RecordStore,
    tenant_id: uuid.UUID,
    industry: str,
    generator: DemoDataGenerator | None = None,
    member_count: int | None = None,
    lead_count: int | None = None,
) -> SeedReport:
    """Generate and persist a full demo data set for one tenant."""
    generator = generator or DemoDataGenerator(industry)
    runner = BatchRunner(store, today=lambda: generator.today)

    staff = await runner.run_records(tenant_id, DataType.staff.value, generator.staff_records())
    coach_ids = [row["id"] for row in staff.records if row["role"] in COACHING_ROLES]

    classes = await runner.run_records(
        tenant_id, DataType.classes.value, generator.class_records(coach_ids)
    )
    members = await runner.run_records(
        tenant_id,
        DataType.members.value,
        generator.member_records(member_count if member_count is not None else settings.DEMO_MEMBER_COUNT),
    )
    leads = await runner.run_records(
        tenant_id,
        DataType.leads.value,
        generator.lead_records(lead_count if lead_count is not None else settings.DEMO_LEAD_COUNT),
    )

    report = SeedReport(staff=staff, classes=classes, members=members, leads=leads)
    logger.info("Seeded %s demo data for tenant %s: %s", generator.industry, tenant_id, report.summary())
    return report


async def reset_demo_data(
    store: RecordStore,
    tenant_id: uuid.UUID,
    industry: str | None,
    generator: DemoDataGenerator | None = None,
) -> SeedReport:
    """Wipe a demo tenant's business records and seed a fresh set."""
    for table in RESET_TABLES:
        deleted = await store.delete_for_tenant(table, tenant_id)
        logger.info("Demo reset: deleted %d %s rows for tenant %s", deleted, table, tenant_id)
    return await seed_demo_data(store, tenant_id, industry or DEFAULT_INDUSTRY, generator=generator)
