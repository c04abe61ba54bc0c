"""Create match_analytics table

Revision ID: 002
Revises: 001
Create Date: 2026-09-28 10:30:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade():
    # Append-only; matched_product_id has no FK so rows survive product deletion
    op.create_table(
        'match_analytics',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('customer_request', sa.Text(), nullable=False),
        sa.Column('matched_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('strategy', sa.Text(), nullable=False),
        sa.Column('method', sa.Text(), nullable=True),
        sa.Column('confidence', sa.Float(), nullable=False, server_default='0'),
        sa.Column('execution_time_ms', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tokens_used', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "strategy IN ('exact', 'lexical', 'generative', 'none')",
            name='ck_match_analytics_strategy'
        ),
        sa.CheckConstraint('confidence >= 0 AND confidence <= 1', name='ck_match_analytics_confidence'),
    )

    op.create_index('ix_match_analytics_created', 'match_analytics', ['created_at'])
    op.create_index('ix_match_analytics_strategy', 'match_analytics', ['strategy'])


def downgrade():
    op.drop_index('ix_match_analytics_strategy', table_name='match_analytics')
    op.drop_index('ix_match_analytics_created', table_name='match_analytics')
    op.drop_table('match_analytics')
