"""Initial database schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-01 00:00:00.000000

Tags: schema, initial
"""
from typing import Sequence, Union
import logging

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = logging.getLogger(__name__)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    """
    Create users, services, states, rti_applications, consultations and
    callback_requests. Tables that already exist are left alone.
    """
    connection = op.get_bind()
    inspector = sa.inspect(connection)
    existing_tables = set(inspector.get_table_names())
    created = []

    if 'users' not in existing_tables:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=True),
            sa.Column('email', sa.String(length=255), nullable=True),
            sa.Column('mobile', sa.String(length=20), nullable=True),
            sa.Column('role', sa.String(length=20), server_default='user', nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_mobile'), 'users', ['mobile'], unique=True)
        created.append('users')

    if 'services' not in existing_tables:
        op.create_table(
            'services',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('slug', sa.String(length=100), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('price', sa.Float(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_services_id'), 'services', ['id'], unique=False)
        op.create_index(op.f('ix_services_slug'), 'services', ['slug'], unique=True)
        created.append('services')

    if 'states' not in existing_tables:
        op.create_table(
            'states',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('slug', sa.String(length=100), nullable=False),
            sa.Column('name', sa.String(length=150), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('languages', sa.JSON(), nullable=True),
            sa.Column('departments', sa.JSON(), nullable=True),
            sa.Column('highlights', sa.JSON(), nullable=True),
            sa.Column('faqs', sa.JSON(), nullable=True),
            sa.Column('process_steps', sa.JSON(), nullable=True),
            sa.Column('hero', sa.JSON(), nullable=True),
            sa.Column('rti_portal_url', sa.String(length=500), nullable=True),
            sa.Column('commission', sa.String(length=255), nullable=True),
            sa.Column('fee', sa.String(length=50), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f('ix_states_id'), 'states', ['id'], unique=False)
        op.create_index(op.f('ix_states_slug'), 'states', ['slug'], unique=True)
        created.append('states')

    if 'rti_applications' not in existing_tables:
        op.create_table(
            'rti_applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=True),
            sa.Column('service_id', sa.Integer(), nullable=False),
            sa.Column('state_id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('mobile', sa.String(length=10), nullable=False),
            sa.Column('address', sa.Text(), nullable=True),
            sa.Column('pincode', sa.String(length=6), nullable=True),
            sa.Column('rti_query', sa.Text(), nullable=True),
            sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('payment_id', sa.String(length=255), nullable=True),
            sa.Column('order_id', sa.String(length=255), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
            sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='RESTRICT'),
            sa.ForeignKeyConstraint(['state_id'], ['states.id'], ondelete='RESTRICT'),
            sa.PrimaryKeyConstraint('id'),
        )
        for column in ('id', 'user_id', 'service_id', 'state_id', 'email', 'mobile', 'status', 'created_at'):
            op.create_index(op.f(f'ix_rti_applications_{column}'), 'rti_applications', [column], unique=False)
        op.create_index('idx_rti_status_created', 'rti_applications', ['status', 'created_at'], unique=False)
        created.append('rti_applications')

    if 'consultations' not in existing_tables:
        op.create_table(
            'consultations',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('full_name', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('mobile', sa.String(length=10), nullable=False),
            sa.Column('address', sa.Text(), nullable=True),
            sa.Column('pincode', sa.String(length=6), nullable=True),
            sa.Column('state_slug', sa.String(length=100), nullable=True),
            sa.Column('source', sa.String(length=50), server_default='hero_section', nullable=False),
            sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
        )
        for column in ('id', 'email', 'mobile', 'state_slug', 'status', 'created_at'):
            op.create_index(op.f(f'ix_consultations_{column}'), 'consultations', [column], unique=False)
        created.append('consultations')

    if 'callback_requests' not in existing_tables:
        op.create_table(
            'callback_requests',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('phone', sa.String(length=10), nullable=False),
            sa.Column('state_slug', sa.String(length=100), nullable=True),
            sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
        )
        for column in ('id', 'phone', 'state_slug', 'status', 'created_at'):
            op.create_index(op.f(f'ix_callback_requests_{column}'), 'callback_requests', [column], unique=False)
        created.append('callback_requests')

    if created:
        logger.info(f"Created {len(created)} tables: {', '.join(created)}")
    else:
        logger.info("All tables already exist")


def downgrade() -> None:
    for table in ('callback_requests', 'consultations', 'rti_applications', 'states', 'services', 'users'):
        op.drop_table(table)
