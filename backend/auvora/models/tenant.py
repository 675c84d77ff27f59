from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from auvora.db.base import Base, TimestampMixin, UUIDMixin

DEFAULT_PRIMARY_COLOR = "#0f5257"
DEFAULT_SECONDARY_COLOR = "#d4af37"
DEFAULT_TIMEZONE = "America/New_York"


class Tenant(Base, UUIDMixin, TimestampMixin):
    """A customer account; every business record is partitioned by tenant."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    custom_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    primary_color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_PRIMARY_COLOR)
    secondary_color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_SECONDARY_COLOR)
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    business_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    business_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_TIMEZONE)
    onboarding_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="provisioned"
    )  # provisioned, active
    subscription_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="trial"
    )  # trial, active, past_due, cancelled, demo
    is_demo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    demo_industry: Mapped[str | None] = mapped_column(String(50), nullable=True)
