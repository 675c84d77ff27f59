"""add business_address to tenants

Revision ID: 7c2d4e9a1b36
Revises: 3f1a9c2e7b10
Create Date: 2026-10-19 16:41:07.903118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c2d4e9a1b36'
down_revision: Union[str, None] = '3f1a9c2e7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('tenants', sa.Column('business_address', sa.Text(), nullable=True))


def downgrade() -> None:
    op.drop_column('tenants', 'business_address')
