"""create tenant crm and import job tables

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 10:12:44.210583

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def _tenant_fk() -> list:
    return [
        sa.Column('tenant_id', sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
    ]


def upgrade() -> None:
    op.create_table('tenants',
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('subdomain', sa.String(length=100), nullable=False),
        sa.Column('custom_domain', sa.String(length=255), nullable=True),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('primary_color', sa.String(length=20), nullable=False),
        sa.Column('secondary_color', sa.String(length=20), nullable=False),
        sa.Column('owner_name', sa.String(length=255), nullable=True),
        sa.Column('owner_email', sa.String(length=255), nullable=True),
        sa.Column('business_phone', sa.String(length=50), nullable=True),
        sa.Column('timezone', sa.String(length=64), nullable=False),
        sa.Column('onboarding_status', sa.String(length=50), nullable=False),
        sa.Column('subscription_status', sa.String(length=50), nullable=False),
        sa.Column('is_demo', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('demo_industry', sa.String(length=50), nullable=True),
        _id(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tenants_subdomain'), 'tenants', ['subdomain'], unique=True)
    op.create_index(op.f('ix_tenants_is_demo'), 'tenants', ['is_demo'], unique=False)

    op.create_table('staff',
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_tenant_fk(),
        _id(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_staff_tenant_id'), 'staff', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_staff_email'), 'staff', ['email'], unique=False)

    op.create_table('members',
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('membership_type', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('join_date', sa.Date(), nullable=False),
        sa.Column('last_visit', sa.Date(), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('next_payment_due', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_tenant_fk(),
        _id(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_members_tenant_id'), 'members', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_members_email'), 'members', ['email'], unique=False)

    op.create_table('leads',
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('source', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('assigned_to', sa.UUID(), nullable=True),
        *_tenant_fk(),
        _id(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['assigned_to'], ['staff.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_leads_tenant_id'), 'leads', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_leads_email'), 'leads', ['email'], unique=False)

    op.create_table('classes',
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('coach_id', sa.UUID(), nullable=True),
        sa.Column('day_of_week', sa.String(length=20), nullable=False),
        sa.Column('time', sa.String(length=20), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        *_tenant_fk(),
        _id(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['coach_id'], ['staff.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_classes_tenant_id'), 'classes', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_classes_coach_id'), 'classes', ['coach_id'], unique=False)

    op.create_table('import_jobs',
        sa.Column('source_crm', sa.String(length=100), nullable=False),
        sa.Column('data_type', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('total_records', sa.Integer(), nullable=False),
        sa.Column('imported_records', sa.Integer(), server_default='0', nullable=False),
        sa.Column('failed_records', sa.Integer(), server_default='0', nullable=False),
        sa.Column('error_log', postgresql.JSONB(astext_type=sa.Text()), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_tenant_fk(),
        _id(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_import_jobs_tenant_id'), 'import_jobs', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_import_jobs_status'), 'import_jobs', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_import_jobs_status'), table_name='import_jobs')
    op.drop_index(op.f('ix_import_jobs_tenant_id'), table_name='import_jobs')
    op.drop_table('import_jobs')
    op.drop_index(op.f('ix_classes_coach_id'), table_name='classes')
    op.drop_index(op.f('ix_classes_tenant_id'), table_name='classes')
    op.drop_table('classes')
    op.drop_index(op.f('ix_leads_email'), table_name='leads')
    op.drop_index(op.f('ix_leads_tenant_id'), table_name='leads')
    op.drop_table('leads')
    op.drop_index(op.f('ix_members_email'), table_name='members')
    op.drop_index(op.f('ix_members_tenant_id'), table_name='members')
    op.drop_table('members')
    op.drop_index(op.f('ix_staff_email'), table_name='staff')
    op.drop_index(op.f('ix_staff_tenant_id'), table_name='staff')
    op.drop_table('staff')
    op.drop_index(op.f('ix_tenants_is_demo'), table_name='tenants')
    op.drop_index(op.f('ix_tenants_subdomain'), table_name='tenants')
    op.drop_table('tenants')
