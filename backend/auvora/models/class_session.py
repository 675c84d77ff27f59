import uuid

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from auvora.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class ClassSession(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    """A recurring weekly class slot on a tenant's schedule."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    coach_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("staff.id", ondelete="SET NULL"), nullable=True, index=True
    )
    day_of_week: Mapped[str] = mapped_column(String(20), nullable=False, default="Monday")
    time: Mapped[str] = mapped_column(String(20), nullable=False, default="09:00")  # free text, e.g. "6:00 PM"
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=60)  # minutes
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="Main Studio")
