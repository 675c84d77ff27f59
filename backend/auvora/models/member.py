import enum
from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from auvora.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class MemberStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    frozen = "frozen"
    cancelled = "cancelled"


class PaymentStatus(str, enum.Enum):
    current = "current"
    overdue = "overdue"
    pending = "pending"


class Member(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    __tablename__ = "members"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    membership_type: Mapped[str] = mapped_column(String(100), nullable=False, default="Standard")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=MemberStatus.active.value)
    join_date: Mapped[date] = mapped_column(Date, nullable=False)
    last_visit: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.current.value
    )
    next_payment_due: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
