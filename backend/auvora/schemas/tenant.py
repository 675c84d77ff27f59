"""Pydantic schemas for tenant provisioning and demo tenants."""
import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

_SUBDOMAIN_DISALLOWED = re.compile(r"[^a-z0-9-]")


def normalize_subdomain(value: str) -> str:
    """Lowercase and drop everything outside ``[a-z0-9-]``."""
    cleaned = _SUBDOMAIN_DISALLOWED.sub("", value.lower())
    if not cleaned:
        raise ValueError("subdomain must contain letters, digits or '-'")
    return cleaned


class TenantCreate(BaseModel):
    name: str
    subdomain: str
    owner_name: str
    owner_email: EmailStr
    custom_domain: str | None = None
    logo_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    business_address: str | None = None
    business_phone: str | None = None
    timezone: str | None = None

    @field_validator("subdomain")
    @classmethod
    def clean_subdomain(cls, value: str) -> str:
        return normalize_subdomain(value)

    @field_validator("name", "owner_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class TenantUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    name: str | None = None
    subdomain: str | None = None
    custom_domain: str | None = None
    logo_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    business_address: str | None = None
    business_phone: str | None = None
    timezone: str | None = None
    onboarding_status: str | None = None
    subscription_status: str | None = None

    @field_validator("subdomain")
    @classmethod
    def clean_subdomain(cls, value: str | None) -> str | None:
        return normalize_subdomain(value) if value is not None else None


class TenantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    subdomain: str
    custom_domain: str | None = None
    logo_url: str | None = None
    primary_color: str
    secondary_color: str
    owner_name: str | None
    owner_email: str | None
    business_address: str | None = None
    business_phone: str | None = None
    timezone: str
    onboarding_status: str
    subscription_status: str
    is_demo: bool
    demo_industry: str | None
    created_at: datetime | None = None


class TenantDetail(TenantOut):
    member_count: int


class TenantListResponse(BaseModel):
    items: list[TenantOut]
    total: int


# ─── Demo tenants ───

class DemoCreate(BaseModel):
    industry: str
    name: str

    @field_validator("industry", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class SeedCounts(BaseModel):
    imported: int
    failed: int


class DemoCreateResponse(BaseModel):
    demo: TenantOut
    seeded: dict[str, SeedCounts]
    message: str


class DemoResetResponse(BaseModel):
    success: bool
    seeded: dict[str, SeedCounts]
    message: str
