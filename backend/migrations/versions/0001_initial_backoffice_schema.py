"""initial back office schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the full entity graph:
- users: identity anchor, unique on the case-folded email_normalized column
- stores: owned by a user
- product_categories: lookup table
- products: owned by user + store, classified by category
- customers: owned by user + store
- sales / expenses: single-line money records with sequential ids

Every foreign key is ON DELETE RESTRICT. Money columns are NUMERIC(18, 2).
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def _restrict_fk(column: str, target: str):
    return sa.ForeignKeyConstraint([column], [target], ondelete='RESTRICT')


def _money(name: str):
    return sa.Column(name, sa.Numeric(18, 2), nullable=False)


SEQUENTIAL_ID = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade():
    # ============================================================================
    # users
    # ============================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('email_normalized', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email_normalized'),
    )

    # ============================================================================
    # stores
    # ============================================================================
    op.create_table(
        'stores',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        *_timestamps(),
        _restrict_fk('user_id', 'users.id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_stores_user_id', 'stores', ['user_id'])

    # ============================================================================
    # product_categories
    # ============================================================================
    op.create_table(
        'product_categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_categories_name', 'product_categories', ['name'])

    # ============================================================================
    # products
    # ============================================================================
    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=True),
        _money('price'),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        _restrict_fk('user_id', 'users.id'),
        _restrict_fk('store_id', 'stores.id'),
        _restrict_fk('category_id', 'product_categories.id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_user_id', 'products', ['user_id'])
    op.create_index('ix_products_store_id', 'products', ['store_id'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])

    # ============================================================================
    # customers
    # ============================================================================
    op.create_table(
        'customers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        *_timestamps(),
        _restrict_fk('user_id', 'users.id'),
        _restrict_fk('store_id', 'stores.id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_customers_name', 'customers', ['name'])
    op.create_index('ix_customers_user_id', 'customers', ['user_id'])
    op.create_index('ix_customers_store_id', 'customers', ['store_id'])

    # ============================================================================
    # sales
    # ============================================================================
    op.create_table(
        'sales',
        sa.Column('id', SEQUENTIAL_ID, autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        _money('unit_price'),
        _money('total_price'),
        sa.Column('status', sa.String(length=50), nullable=False, server_default='pending'),
        *_timestamps(),
        _restrict_fk('customer_id', 'customers.id'),
        _restrict_fk('user_id', 'users.id'),
        _restrict_fk('store_id', 'stores.id'),
        _restrict_fk('product_id', 'products.id'),
        sa.CheckConstraint("status IN ('pending', 'completed', 'cancelled')", name='ck_sales_status'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sales_customer_id', 'sales', ['customer_id'])
    op.create_index('ix_sales_user_id', 'sales', ['user_id'])
    op.create_index('ix_sales_store_id', 'sales', ['store_id'])
    op.create_index('ix_sales_product_id', 'sales', ['product_id'])
    op.create_index('ix_sales_status', 'sales', ['status'])
    op.create_index('ix_sales_created_at', 'sales', ['created_at'])

    # ============================================================================
    # expenses
    # ============================================================================
    op.create_table(
        'expenses',
        sa.Column('id', SEQUENTIAL_ID, autoincrement=True, nullable=False),
        sa.Column('customer_id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        _money('unit_price'),
        _money('total_price'),
        *_timestamps(),
        _restrict_fk('customer_id', 'customers.id'),
        _restrict_fk('store_id', 'stores.id'),
        _restrict_fk('product_id', 'products.id'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_expenses_customer_id', 'expenses', ['customer_id'])
    op.create_index('ix_expenses_store_id', 'expenses', ['store_id'])
    op.create_index('ix_expenses_product_id', 'expenses', ['product_id'])
    op.create_index('ix_expenses_created_at', 'expenses', ['created_at'])


def downgrade():
    """Drop all tables (destructive operation)."""
    op.drop_table('expenses')
    op.drop_table('sales')
    op.drop_table('customers')
    op.drop_table('products')
    op.drop_table('product_categories')
    op.drop_table('stores')
    op.drop_table('users')
