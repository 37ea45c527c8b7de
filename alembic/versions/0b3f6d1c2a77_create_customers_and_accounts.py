"""Create customers and accounts tables

Revision ID: 0b3f6d1c2a77
Revises:
Create Date: 2025-10-20 09:12:41.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = '0b3f6d1c2a77'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'customers',
        sa.Column('customer_id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('customer_id'),
    )
    op.create_table(
        'accounts',
        sa.Column('account_id', sa.Uuid(), nullable=False),
        sa.Column('customer_id', sa.Uuid(), nullable=False),
        sa.Column('account_type', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('currency', sqlmodel.sql.sqltypes.AutoString(length=3), nullable=False),
        sa.Column('balance', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('frozen_at', sa.DateTime(), nullable=True),
        sa.Column('overdraft_limit', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('interest_rate', sa.Numeric(precision=9, scale=4), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.customer_id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('account_id'),
        sa.UniqueConstraint('customer_id', 'account_id', name='uq_accounts_customer_account'),
    )
    op.create_index(op.f('ix_accounts_customer_id'), 'accounts', ['customer_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_accounts_customer_id'), table_name='accounts')
    op.drop_table('accounts')
    op.drop_table('customers')
