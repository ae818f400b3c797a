"""create_users_and_account_updates

Revision ID: 5c1d7e2a9f30
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1d7e2a9f30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the user directory and the per-account update log."""

    # --- users (authoritative profile records) ---
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('username', sa.String(length=32), nullable=True),
        sa.Column('first_name', sa.String(length=64), nullable=False,
                  server_default=''),
        sa.Column('last_name', sa.String(length=64), nullable=False,
                  server_default=''),
        sa.Column('about', sa.String(length=255), nullable=False,
                  server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('phone'),
        sa.UniqueConstraint('username'),
    )

    # --- account_updates (fan-out log read by other sessions) ---
    op.create_table('account_updates',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('account_id', sa.UUID(), nullable=False),
        sa.Column('pts', sa.Integer(), nullable=False),
        sa.Column('type_name', sa.String(length=64), nullable=False),
        sa.Column('payload', postgresql.JSONB(), nullable=False,
                  server_default='{}'),
        sa.Column('exclude_session_key', sa.String(length=128), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('NOW()')),
        sa.ForeignKeyConstraint(['account_id'], ['users.id'],
                                ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'pts',
                            name='uq_account_updates_account_pts'),
    )
    op.create_index('idx_account_updates_account_pts',
                    'account_updates', ['account_id', 'pts'])


def downgrade() -> None:
    """Drop the update log and the user directory."""
    op.drop_index('idx_account_updates_account_pts', table_name='account_updates')
    op.drop_table('account_updates')
    op.drop_table('users')
