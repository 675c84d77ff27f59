from auvora.models.tenant import Tenant
from auvora.models.member import Member, MemberStatus, PaymentStatus
from auvora.models.lead import Lead, LeadStatus
from auvora.models.staff import StaffMember, StaffRole, COACHING_ROLES
from auvora.models.class_session import ClassSession
from auvora.models.import_job import ImportJob, ImportJobStatus

__all__ = [
    "Tenant",
    "Member", "MemberStatus", "PaymentStatus",
    "Lead", "LeadStatus",
    "StaffMember", "StaffRole", "COACHING_ROLES",
    "ClassSession",
    "ImportJob", "ImportJobStatus",
]
