"""Create products table with full-text search index

Revision ID: 001
Revises:
Create Date: 2026-09-28 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('product_type', sa.Text(), nullable=False),
        sa.Column('diameter', sa.Text(), nullable=True),
        sa.Column('product_code', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('brand', sa.Text(), nullable=True),
        sa.Column('product_subtype', sa.Text(), nullable=True),
        sa.Column('size_measurement', sa.Text(), nullable=True),
        sa.Column('material', sa.Text(), nullable=True),
        sa.Column('pressure_class', sa.Text(), nullable=True),
        sa.Column('product_features', sa.Text(), nullable=True),
        sa.Column('search_text', sa.Text(), nullable=False, server_default=''),
        sa.Column('base_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.Text(), nullable=False, server_default='TRY'),
        sa.Column('unit', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_products_product_code', 'products', ['product_code'], unique=True)
    op.create_index('ix_products_product_type', 'products', ['product_type'])

    # GIN index for Turkish full-text search over search_text
    op.execute("""
        CREATE INDEX ix_products_search_text_fts ON products
        USING GIN (to_tsvector('turkish', search_text))
    """)

    op.execute("""
        CREATE OR REPLACE FUNCTION products_set_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER update_products_updated_at
        BEFORE UPDATE ON products
        FOR EACH ROW
        EXECUTE FUNCTION products_set_updated_at();
    """)


def downgrade():
    op.execute("DROP TRIGGER IF EXISTS update_products_updated_at ON products")
    op.execute("DROP FUNCTION IF EXISTS products_set_updated_at()")
    op.execute("DROP INDEX IF EXISTS ix_products_search_text_fts")
    op.drop_index('ix_products_product_type', table_name='products')
    op.drop_index('ix_products_product_code', table_name='products')
    op.drop_table('products')
