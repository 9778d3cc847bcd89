"""Initial schema

Revision ID: a1c4e7f2b9d3
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7f2b9d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role = sa.Enum('admin', 'manager', 'resident', 'user', name='userrole')
user_status = sa.Enum('pending', 'active', 'activenopaid', 'newuser', 'disabled', name='userstatus')
maintenance_status = sa.Enum('pending', 'in_progress', 'completed', 'cancelled', name='maintenancestatus')
signing_status = sa.Enum('pending', 'signed', 'rejected', 'expired', name='signingstatus')


def upgrade() -> None:
    op.create_table(
        'persons',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('nit', sa.String(64), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_persons_nit', 'persons', ['nit'])

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('role', user_role, nullable=True),
        sa.Column('status', user_status, nullable=False, server_default='pending'),
        sa.Column('person_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_person_id', 'users', ['person_id'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('apt_number', sa.String(50), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('type', sa.String(50), nullable=True),
        sa.Column('resident_id', sa.Uuid(), nullable=True),
        sa.Column('manager_ids', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_properties_resident_id', 'properties', ['resident_id'])

    op.create_table(
        'bank_accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person_id', sa.Uuid(), nullable=False),
        sa.Column('bank_name', sa.String(255), nullable=False),
        sa.Column('account_type', sa.String(50), nullable=True),
        sa.Column('account_number', sa.String(64), nullable=False),
        sa.Column('account_holder', sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
    )
    op.create_index('ix_bank_accounts_person_id', 'bank_accounts', ['person_id'])

    op.create_table(
        'rentals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_id', sa.Uuid(), nullable=False),
        sa.Column('renter_id', sa.Uuid(), nullable=False),
        sa.Column('bank_account_id', sa.Uuid(), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_terms', sa.String(255), nullable=True),
        sa.Column('unpaid_months', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['renter_id'], ['persons.id']),
    )
    op.create_index('ix_rentals_property_id', 'rentals', ['property_id'])
    op.create_index('ix_rentals_renter_id', 'rentals', ['renter_id'])
    op.create_index('ix_rentals_end_date', 'rentals', ['end_date'])

    op.create_table(
        'pricing',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('rental_id', sa.Uuid(), nullable=False),
        sa.Column('monthly_rent', sa.Float(), nullable=False),
        sa.Column('security_deposit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('utilities_included', sa.JSON(), nullable=False),
        sa.Column('tenant_responsible_for', sa.JSON(), nullable=False),
        sa.Column('late_fee', sa.Float(), nullable=False, server_default='0'),
        sa.Column('due_day', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['rental_id'], ['rentals.id']),
    )
    op.create_index('ix_pricing_rental_id', 'pricing', ['rental_id'])

    op.create_table(
        'rent_payments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('rental_id', sa.Uuid(), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('amount_paid', sa.Float(), nullable=False),
        sa.Column('paid_on_time', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['rental_id'], ['rentals.id']),
    )
    op.create_index('ix_rent_payments_rental_id', 'rent_payments', ['rental_id'])
    op.create_index('ix_rent_payments_payment_date', 'rent_payments', ['payment_date'])

    op.create_table(
        'maintenance_requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_id', sa.Uuid(), nullable=False),
        sa.Column('renter_id', sa.Uuid(), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('request_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', maintenance_status, nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['renter_id'], ['persons.id']),
    )
    op.create_index('ix_maintenance_requests_id', 'maintenance_requests', ['id'])
    op.create_index('ix_maintenance_requests_property_id', 'maintenance_requests', ['property_id'])
    op.create_index('ix_maintenance_requests_renter_id', 'maintenance_requests', ['renter_id'])

    op.create_table(
        'contract_signatures',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contract_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_email', sa.String(255), nullable=False),
        sa.Column('status', signing_status, nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('pdf_path', sa.String(1024), nullable=True),
        sa.Column('signed_pdf_path', sa.String(1024), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contract_signatures_contract_id', 'contract_signatures', ['contract_id'])
    op.create_index('ix_contract_signatures_recipient_id', 'contract_signatures', ['recipient_id'])
    op.create_index('ix_contract_signatures_status', 'contract_signatures', ['status'])

    op.create_table(
        'rental_history',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('person_id', sa.Uuid(), nullable=False),
        sa.Column('rental_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('end_reason', sa.String(500), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
        sa.ForeignKeyConstraint(['rental_id'], ['rentals.id']),
    )
    op.create_index('ix_rental_history_person_id', 'rental_history', ['person_id'])
    op.create_index('ix_rental_history_rental_id', 'rental_history', ['rental_id'])
    op.create_index('ix_rental_history_status', 'rental_history', ['status'])
    op.create_index('ix_rental_history_end_date', 'rental_history', ['end_date'])


def downgrade() -> None:
    op.drop_table('rental_history')
    op.drop_table('contract_signatures')
    op.drop_table('maintenance_requests')
    op.drop_table('rent_payments')
    op.drop_table('pricing')
    op.drop_table('rentals')
    op.drop_table('bank_accounts')
    op.drop_table('properties')
    op.drop_table('users')
    op.drop_table('persons')

    bind = op.get_bind()
    for enum in (signing_status, maintenance_status, user_status, user_role):
        enum.drop(bind, checkfirst=True)
