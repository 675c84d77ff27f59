import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from auvora.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class StaffRole(str, enum.Enum):
    manager = "manager"
    head_coach = "head-coach"
    coach = "coach"
    instructor = "instructor"
    front_desk = "front-desk"


# Roles that can be assigned to teach a class.
COACHING_ROLES = (StaffRole.coach.value, StaffRole.head_coach.value, StaffRole.instructor.value)


class StaffMember(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=StaffRole.coach.value)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
