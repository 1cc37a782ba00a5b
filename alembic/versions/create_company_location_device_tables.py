"""create company, location and device tables

Revision ID: createcoretables
Revises:
Create Date: 2025-07-01 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'createcoretables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('licensing', sa.Integer(), nullable=False),
        sa.UniqueConstraint('code', name='uq_companies_code'),
    )
    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
    )
    op.create_index('ix_locations_parent_id', 'locations', ['parent_id'])
    op.create_table(
        'devices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('serial_number', sa.String(length=255), nullable=False),
        sa.Column('type', sa.Integer(), nullable=False),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=False),
    )
    op.create_index('ix_devices_serial_number', 'devices', ['serial_number'], unique=True)
    op.create_index('ix_devices_location_id', 'devices', ['location_id'])


def downgrade() -> None:
    op.drop_index('ix_devices_location_id', table_name='devices')
    op.drop_index('ix_devices_serial_number', table_name='devices')
    op.drop_table('devices')
    op.drop_index('ix_locations_parent_id', table_name='locations')
    op.drop_table('locations')
    op.drop_table('companies')
