"""create location and shipping tables

Revision ID: create_shipping_tables
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'create_shipping_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Geographic reference (UBIGEO)
    op.create_table(
        'departments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(2), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_table(
        'provinces',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(4), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('department_id', sa.Integer(), sa.ForeignKey('departments.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_index('ix_provinces_department_id', 'provinces', ['department_id'])
    op.create_table(
        'districts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(6), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('province_id', sa.Integer(), sa.ForeignKey('provinces.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_index('ix_districts_province_id', 'districts', ['province_id'])

    # Shipping zones, district assignments, rate groups, rates
    op.create_table(
        'shipping_zones',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), server_default='true', nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'shipping_zone_districts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('zone_id', sa.Integer(), sa.ForeignKey('shipping_zones.id', ondelete='CASCADE'), nullable=False),
        sa.Column('district_code', sa.String(6), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('district_code'),
    )
    op.create_index('ix_shipping_zone_districts_zone_id', 'shipping_zone_districts', ['zone_id'])
    op.create_table(
        'shipping_rate_groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('zone_id', sa.Integer(), sa.ForeignKey('shipping_zones.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('active', sa.Boolean(), server_default='true', nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shipping_rate_groups_zone_active', 'shipping_rate_groups', ['zone_id', 'active'])
    op.create_table(
        'shipping_rates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('shipping_rate_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_cost', sa.DECIMAL(10, 2), server_default='0', nullable=False),
        sa.Column('min_order_amount', sa.DECIMAL(10, 2), nullable=True),
        sa.Column('max_order_amount', sa.DECIMAL(10, 2), nullable=True),
        sa.Column('free_shipping_min', sa.DECIMAL(10, 2), nullable=True),
        sa.Column('estimated_days', sa.String(100), nullable=True),
        sa.Column('carrier', sa.String(100), nullable=True),
        sa.Column('time_window', sa.String(100), nullable=True),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('active', sa.Boolean(), server_default='true', nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shipping_rates_group_active', 'shipping_rates', ['group_id', 'active'])


def downgrade() -> None:
    op.drop_index('ix_shipping_rates_group_active', 'shipping_rates')
    op.drop_table('shipping_rates')
    op.drop_index('ix_shipping_rate_groups_zone_active', 'shipping_rate_groups')
    op.drop_table('shipping_rate_groups')
    op.drop_index('ix_shipping_zone_districts_zone_id', 'shipping_zone_districts')
    op.drop_table('shipping_zone_districts')
    op.drop_table('shipping_zones')
    op.drop_index('ix_districts_province_id', 'districts')
    op.drop_table('districts')
    op.drop_index('ix_provinces_department_id', 'provinces')
    op.drop_table('provinces')
    op.drop_table('departments')
