"""Field mapping, coercion and validation for importable record types.

Each record type has a builder that takes a normalized record (canonical
header -> raw cell) and returns the column values to persist. Builders only
reject a row when a required field is still empty after every alias has been
tried; every other field falls back to a default.
"""
import enum
import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from auvora.importer.errors import MissingRequiredFieldError, UnknownDataTypeError

Record = Mapping[str, str]
RecordBuilder = Callable[[uuid.UUID, Record, date], dict[str, Any]]


class DataType(str, enum.Enum):
    members = "members"
    leads = "leads"
    staff = "staff"
    classes = "classes"


# ─── Alias resolution ───

def first_value(record: Record, *keys: str) -> str:
    """Return the first non-empty (stripped) value among ``keys``."""
    for key in keys:
        value = (record.get(key) or "").strip()
        if value:
            return value
    return ""


def resolve_name(record: Record) -> str:
    """name <- full_name <- "first_name last_name"."""
    name = first_value(record, "name", "full_name")
    if name:
        return name
    parts = (first_value(record, "first_name"), first_value(record, "last_name"))
    return " ".join(part for part in parts if part)


def resolve_email(record: Record) -> str:
    return first_value(record, "email", "email_address").lower()


def _require(message: str, **fields: str) -> None:
    missing = [field for field, value in fields.items() if not value]
    if missing:
        raise MissingRequiredFieldError(missing, message)


# ─── Fuzzy enum matching ───
# Rules are evaluated top to bottom; the first predicate that matches the
# lowercased cell wins, otherwise the default applies.

FuzzyRule = tuple[Callable[[str], bool], str]


def contains(*needles: str) -> Callable[[str], bool]:
    return lambda value: any(needle in value for needle in needles)


MEMBER_STATUS_RULES: list[FuzzyRule] = [
    (contains("active"), "active"),
    (contains("inactive", "expired"), "inactive"),
    (contains("frozen", "hold"), "frozen"),
    (contains("cancel"), "cancelled"),
]
MEMBER_STATUS_DEFAULT = "active"

LEAD_STATUS_RULES: list[FuzzyRule] = [
    (contains("new"), "new"),
    (contains("contact"), "contacted"),
    (contains("qualif"), "qualified"),
    (contains("convert", "won"), "converted"),
    (contains("lost", "closed"), "lost"),
]
LEAD_STATUS_DEFAULT = "new"

STAFF_ROLE_RULES: list[FuzzyRule] = [
    (contains("manager"), "manager"),
    (contains("head", "lead"), "head-coach"),
    (contains("instructor"), "instructor"),
    (contains("front", "desk", "reception"), "front-desk"),
]
STAFF_ROLE_DEFAULT = "coach"


def match_fuzzy(value: str | None, rules: list[FuzzyRule], default: str) -> str:
    lowered = (value or "").lower()
    for predicate, canonical in rules:
        if predicate(lowered):
            return canonical
    return default


# ─── Coercion ───

_DIRECT_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%B %d, %Y", "%b %d, %Y", "%B %d %Y", "%b %d %Y", "%d %B %Y", "%d %b %Y")
_DATE_SEPARATORS = re.compile(r"[/-]")
_LEADING_INT = re.compile(r"^[+-]?\d+")
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")
_GROUPED_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def parse_flexible_date(value: str | None) -> date | None:
    """Parse a date written in one of several common layouts.

    Unambiguous layouts (ISO dates/timestamps, month names) are parsed
    directly. Otherwise the value is split on ``/`` or ``-`` into three
    numbers ``a, b, c``: when ``a > 12`` it is read day-first (``c-b-a``),
    else month-first (``c-a-b``). ``03/04/2024`` is therefore March 4th.

    Returns None when nothing yields a real calendar date.
    """
    if not value:
        return None
    value = value.strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass
    for fmt in _DIRECT_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            pass

    parts = _DATE_SEPARATORS.split(value)
    if len(parts) != 3:
        return None
    try:
        a, b, c = (int(part) for part in parts)
    except ValueError:
        return None

    year, month, day = (c, b, a) if a > 12 else (c, a, b)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def coerce_int(value: str | None, default: int) -> int:
    """Leading-integer parse; empty, unparseable or zero gives ``default``."""
    match = _LEADING_INT.match((value or "").strip())
    parsed = int(match.group()) if match else 0
    return parsed or default


def coerce_decimal(value: str | None) -> Decimal | None:
    """Leading-number parse after dropping ``$`` and spaces.

    Commas are removed only when they group digits in threes
    (``"1,250.50"``); any other comma ends the number, so ``"12,50"`` is 12.
    """
    cleaned = (value or "").replace("$", "").replace(" ", "").strip()
    if _GROUPED_THOUSANDS.match(cleaned):
        cleaned = cleaned.replace(",", "")
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None
    try:
        return Decimal(match.group())
    except InvalidOperation:
        return None


def coerce_uuid(value: str | None) -> uuid.UUID | None:
    try:
        return uuid.UUID((value or "").strip())
    except ValueError:
        return None


# ─── Builders ───

def build_member(tenant_id: uuid.UUID, record: Record, today: date) -> dict[str, Any]:
    name = resolve_name(record)
    email = resolve_email(record)
    _require("Name and email are required", name=name, email=email)

    return {
        "tenant_id": tenant_id,
        "name": name,
        "email": email,
        "phone": first_value(record, "phone", "phone_number") or None,
        "membership_type": first_value(record, "membership_type", "membership") or "Standard",
        "status": match_fuzzy(record.get("status"), MEMBER_STATUS_RULES, MEMBER_STATUS_DEFAULT),
        "join_date": parse_flexible_date(first_value(record, "join_date", "start_date")) or today,
        "payment_status": first_value(record, "payment_status") or "current",
        "next_payment_due": parse_flexible_date(first_value(record, "next_payment_due")),
        "notes": first_value(record, "notes") or None,
    }


def build_lead(tenant_id: uuid.UUID, record: Record, today: date) -> dict[str, Any]:
    name = resolve_name(record)
    email = resolve_email(record)
    _require("Name and email are required", name=name, email=email)

    return {
        "tenant_id": tenant_id,
        "name": name,
        "email": email,
        "phone": first_value(record, "phone", "phone_number") or None,
        "source": first_value(record, "source", "lead_source") or "Import",
        "status": match_fuzzy(record.get("status"), LEAD_STATUS_RULES, LEAD_STATUS_DEFAULT),
        "notes": first_value(record, "notes") or None,
    }


def build_staff(tenant_id: uuid.UUID, record: Record, today: date) -> dict[str, Any]:
    name = resolve_name(record)
    email = resolve_email(record)
    _require("Name and email are required", name=name, email=email)

    return {
        "tenant_id": tenant_id,
        "name": name,
        "email": email,
        "phone": first_value(record, "phone", "phone_number") or None,
        "role": match_fuzzy(first_value(record, "role", "position"), STAFF_ROLE_RULES, STAFF_ROLE_DEFAULT),
        "hourly_rate": coerce_decimal(record.get("hourly_rate")),
        "hire_date": parse_flexible_date(first_value(record, "hire_date", "start_date")) or today,
        "status": "active",
    }


def build_class(tenant_id: uuid.UUID, record: Record, today: date) -> dict[str, Any]:
    name = first_value(record, "name", "class_name")
    _require("Class name is required", name=name)

    return {
        "tenant_id": tenant_id,
        "name": name,
        "description": first_value(record, "description") or None,
        "coach_id": coerce_uuid(record.get("coach_id")),
        "day_of_week": first_value(record, "day_of_week", "day") or "Monday",
        "time": first_value(record, "time", "start_time") or "09:00",
        "duration": coerce_int(record.get("duration"), 60),
        "capacity": coerce_int(record.get("capacity"), 20),
        "location": first_value(record, "location") or "Main Studio",
    }


# ─── Registry ───

@dataclass(frozen=True)
class EntitySpec:
    data_type: DataType
    table: str
    build: RecordBuilder


ENTITY_SPECS: dict[DataType, EntitySpec] = {
    DataType.members: EntitySpec(DataType.members, "members", build_member),
    DataType.leads: EntitySpec(DataType.leads, "leads", build_lead),
    DataType.staff: EntitySpec(DataType.staff, "staff", build_staff),
    DataType.classes: EntitySpec(DataType.classes, "classes", build_class),
}


def get_entity_spec(data_type: str) -> EntitySpec:
    """Look up the builder for a data-type selector.

    Raises:
        UnknownDataTypeError: the selector is not one of ``DataType``.
    """
    try:
        return ENTITY_SPECS[DataType(data_type)]
    except ValueError:
        raise UnknownDataTypeError(data_type) from None
