"""create invoices table

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('invoices',
                    sa.Column('id', sa.Integer(), primary_key=True,
                              autoincrement=True),
                    sa.Column('member_email', sa.String(length=255),
                              nullable=False),
                    sa.Column('total_amount_in_cents', sa.Integer(),
                              nullable=False, server_default=sa.text('0')),
                    sa.Column('payment_type', sa.String(length=20),
                              nullable=False, server_default=''),
                    sa.Column('payment_status', sa.String(length=20),
                              nullable=False, server_default='Pending'),
                    sa.Column('payment_date', sa.Date()),
                    sa.Column('reference', sa.String(length=50),
                              nullable=False, server_default=''),
                    sa.Column('transaction_id', sa.String(length=255)),
                    sa.Column('created_at', sa.DateTime(timezone=True),
                              server_default=sa.func.now(), nullable=False),
                    sa.Column('updated_at', sa.DateTime(timezone=True),
                              server_default=sa.func.now(), nullable=False),
                    sa.CheckConstraint('total_amount_in_cents >= 0',
                                       name='check_invoice_total_positive'),
                    sa.CheckConstraint("payment_status IN ('Pending', 'PAID')",
                                       name='check_valid_payment_status'),
                    )
    op.create_index('ix_invoices_member_email', 'invoices', ['member_email'])
    op.create_index('idx_invoice_reference', 'invoices', ['reference'])


def downgrade() -> None:
    op.drop_index('idx_invoice_reference', table_name='invoices')
    op.drop_index('ix_invoices_member_email', table_name='invoices')
    op.drop_table('invoices')
