"""Create users, skins, condition prices and tickets

Revision ID: 3c7e91a4d2b0
Revises:
Create Date: 2025-10-02 14:12:45.318204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7e91a4d2b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Tables may already exist on databases created before migrations were introduced
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table('users',
            sa.Column('id', sa.String(36), nullable=False),
            sa.Column('email', sa.String(255), nullable=False),
            sa.Column('name', sa.String(255), nullable=True),
            sa.Column('avatar_url', sa.String(500), nullable=True),
            sa.Column('trade_link', sa.String(255), nullable=True),
            sa.Column('phone_number', sa.String(32), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('email')
        )

    if 'skins' not in tables:
        op.create_table('skins',
            sa.Column('id', sa.String(64), nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('weapon_type', sa.String(20), nullable=True),
            sa.Column('weapon_id', sa.String(64), nullable=True),
            sa.Column('weapon_name', sa.String(100), nullable=True),
            sa.Column('category', sa.String(100), nullable=True),
            sa.Column('rarity', sa.String(20), nullable=True),
            sa.Column('rarity_name', sa.String(50), nullable=True),
            sa.Column('rarity_color', sa.String(10), nullable=True),
            sa.Column('pattern_id', sa.String(64), nullable=True),
            sa.Column('pattern_name', sa.String(255), nullable=True),
            sa.Column('min_float', sa.Float(), nullable=True),
            sa.Column('max_float', sa.Float(), nullable=True),
            sa.Column('stattrak', sa.Boolean(), nullable=True),
            sa.Column('souvenir', sa.Boolean(), nullable=True),
            sa.Column('paint_index', sa.String(20), nullable=True),
            sa.Column('market_hash_name', sa.String(255), nullable=True),
            sa.Column('image_url', sa.String(500), nullable=True),
            sa.Column('type', sa.String(20), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_skins_name', 'skins', ['name'])
        op.create_index('ix_skins_weapon_type', 'skins', ['weapon_type'])
        op.create_index('ix_skins_rarity', 'skins', ['rarity'])
        op.create_index('ix_skins_type', 'skins', ['type'])

    if 'skin_condition_prices' not in tables:
        op.create_table('skin_condition_prices',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('skin_id', sa.String(64), nullable=False),
            sa.Column('condition', sa.String(2), nullable=False),
            sa.Column('condition_name', sa.String(20), nullable=False),
            sa.Column('float_range', sa.String(20), nullable=True),
            sa.Column('base_price', sa.Float(), nullable=False),
            sa.Column('current_price', sa.Float(), nullable=False),
            sa.Column('steam_price', sa.Float(), nullable=True),
            sa.Column('price_change_24h', sa.Float(), nullable=True),
            sa.Column('last_updated', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['skin_id'], ['skins.id']),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('skin_id', 'condition', name='uq_skin_condition')
        )
        op.create_index('ix_skin_condition_prices_skin_id', 'skin_condition_prices', ['skin_id'])

    if 'tickets' not in tables:
        op.create_table('tickets',
            sa.Column('id', sa.String(40), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.Column('type', sa.String(4), nullable=False),
            sa.Column('skin_name', sa.String(255), nullable=False),
            sa.Column('condition', sa.String(2), nullable=False),
            sa.Column('condition_name', sa.String(20), nullable=False),
            sa.Column('price', sa.Float(), nullable=True),
            sa.Column('quoted_price', sa.Float(), nullable=True),
            sa.Column('status', sa.String(20), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('admin_notes', sa.Text(), nullable=True),
            sa.Column('steam_trade_url', sa.String(255), nullable=True),
            sa.Column('payment_method', sa.String(50), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_tickets_user_id', 'tickets', ['user_id'])
        op.create_index('ix_tickets_status', 'tickets', ['status'])


def downgrade():
    op.drop_table('tickets')
    op.drop_table('skin_condition_prices')
    op.drop_table('skins')
    op.drop_table('users')
