"""Add tokens and swaps tables

Revision ID: v1_001
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'v1_001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tokens',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('symbol', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False, server_default=''),
        sa.Column('block_number', sa.BigInteger(), nullable=True),
        sa.Column('genesis_block', sa.BigInteger(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_tokens'),
        sa.UniqueConstraint('symbol', name='uq_tokens_symbol'),
    )

    op.create_table(
        'swaps',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('token_id', sa.Uuid(), nullable=False),
        sa.Column('tx_hash', sa.String(100), nullable=False),
        sa.Column('block_number', sa.BigInteger(), nullable=True),
        sa.Column('timestamp', sa.BigInteger(), nullable=True),
        sa.Column('swap_type', sa.String(10), nullable=True),
        sa.Column('maker', sa.String(100), nullable=True),
        sa.Column('data', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['token_id'], ['tokens.id'], name='fk_swaps_token_id_tokens'),
        sa.PrimaryKeyConstraint('id', name='pk_swaps'),
        sa.UniqueConstraint('token_id', 'tx_hash', name='uq_token_tx_hash'),
    )
    op.create_index('ix_swaps_tx_hash', 'swaps', ['tx_hash'])
    op.create_index('ix_token_block_number', 'swaps', ['token_id', 'block_number'])


def downgrade() -> None:
    op.drop_index('ix_token_block_number', table_name='swaps')
    op.drop_index('ix_swaps_tx_hash', table_name='swaps')
    op.drop_table('swaps')
    op.drop_table('tokens')
