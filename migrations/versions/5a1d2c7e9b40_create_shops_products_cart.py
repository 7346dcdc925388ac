"""create shops, shopping_list and cart_items

Revision ID: 5a1d2c7e9b40
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5a1d2c7e9b40'
down_revision = None
branch_labels = None
depends_on = None

BIGINT = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade():
    op.create_table(
        'shops',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'shopping_list',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('brand', sa.String(length=100), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('jan', sa.String(length=32), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('shop_id', BIGINT, nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('amount', sa.String(length=50), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('size', sa.String(length=10), nullable=True),
        sa.Column('quantity_in_pack', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_shopping_list_jan', 'shopping_list', ['jan'])
    op.create_index('ix_shopping_list_shop_id', 'shopping_list', ['shop_id'])
    op.create_table(
        'cart_items',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('amount', sa.String(length=50), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('shop_id', BIGINT, nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('checked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_cart_items_shop_id', 'cart_items', ['shop_id'])


def downgrade():
    op.drop_index('ix_cart_items_shop_id', table_name='cart_items')
    op.drop_table('cart_items')
    op.drop_index('ix_shopping_list_shop_id', table_name='shopping_list')
    op.drop_index('ix_shopping_list_jan', table_name='shopping_list')
    op.drop_table('shopping_list')
    op.drop_table('shops')
