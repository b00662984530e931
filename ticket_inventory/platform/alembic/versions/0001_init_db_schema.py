"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-06

Schema:
- event: Events with capacity and the attendees counter under contention
- ticket: Purchase ledger; unique (event_id, user_id, idempotency_key) for retry replay
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create event and ticket tables."""

    op.create_table(
        'event',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organizer_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('attendees', sa.Integer(), server_default='0', nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.CheckConstraint(
            'attendees >= 0 AND attendees <= capacity', name='ck_event_attendees'
        ),
        sa.CheckConstraint('capacity >= 0', name='ck_event_capacity'),
        sa.CheckConstraint('price >= 0', name='ck_event_price'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_organizer_id'), 'event', ['organizer_id'], unique=False)
    op.create_index(op.f('ix_event_category'), 'event', ['category'], unique=False)

    op.create_table(
        'ticket',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.BigInteger(), nullable=False),
        sa.Column('buyer_name', sa.String(length=255), nullable=False),
        sa.Column('buyer_email', sa.String(length=255), nullable=False),
        sa.Column('buyer_phone', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('purchase_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('idempotency_key', sa.String(length=255), nullable=True),
        sa.CheckConstraint('quantity >= 1', name='ck_ticket_quantity'),
        sa.CheckConstraint('total_price >= 0', name='ck_ticket_total_price'),
        sa.ForeignKeyConstraint(['event_id'], ['event.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'event_id', 'user_id', 'idempotency_key', name='uq_ticket_idempotency'
        ),
    )
    op.create_index(op.f('ix_ticket_event_id'), 'ticket', ['event_id'], unique=False)
    op.create_index(op.f('ix_ticket_user_id'), 'ticket', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_ticket_user_id'), table_name='ticket')
    op.drop_index(op.f('ix_ticket_event_id'), table_name='ticket')
    op.drop_table('ticket')
    op.drop_index(op.f('ix_event_category'), table_name='event')
    op.drop_index(op.f('ix_event_organizer_id'), table_name='event')
    op.drop_table('event')
