"""initial_goods_transport_schema

Revision ID: 4c1d2a9e7b10
Revises:
Create Date: 2026-10-17 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d2a9e7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('OPERATOR', 'ADMIN', 'SUPERADMIN', name='userrole')
approval_status = sa.Enum('PENDING', 'APPROVED_BY_ADMIN', 'APPROVED', 'REJECTED', name='approvalstatus')
party_type = sa.Enum('SENDER', 'RECEIVER', name='partytype')
return_status = sa.Enum('PENDING', 'IN_TRANSIT', 'COMPLETED', 'CANCELLED', name='returnstatus')
assignment_status = sa.Enum('ASSIGNED', 'DELIVERED', 'COLLECTED', 'SETTLED', name='labourassignmentstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'agencies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        'cities',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        'parties',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('contact_info', sa.String(100), nullable=False),
        sa.Column('opening_balance', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'item_catalog',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('item_description', sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        'vehicles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('vehicle_number', sa.String(50), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_table(
        'shipments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('register_number', sa.String(50), nullable=False),
        sa.Column('bility_number', sa.String(50), nullable=False, unique=True),
        sa.Column('bility_date', sa.Date(), nullable=False),
        sa.Column('departure_city_id', sa.Integer(), sa.ForeignKey('cities.id'), nullable=False),
        sa.Column('to_city_id', sa.Integer(), sa.ForeignKey('cities.id', ondelete='SET NULL')),
        sa.Column('forwarding_agency_id', sa.Integer(), sa.ForeignKey('agencies.id'), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('parties.id'), nullable=False),
        sa.Column('receiver_id', sa.Integer(), sa.ForeignKey('parties.id'), nullable=False),
        sa.Column('walk_in_sender_name', sa.String(100)),
        sa.Column('walk_in_receiver_name', sa.String(100)),
        sa.Column('total_charges', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_delivery_charges', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_date', sa.Date()),
        sa.Column('remarks', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_shipments_register_number', 'shipments', ['register_number'], unique=True)
    op.create_table(
        'goods_details',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shipment_id', sa.String(50),
                  sa.ForeignKey('shipments.register_number', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('item_catalog.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('charges', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_charges', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_goods_details_shipment_id', 'goods_details', ['shipment_id'])
    op.create_table(
        'deliveries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('shipment_id', sa.String(50), sa.ForeignKey('shipments.register_number'), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=False),
        sa.Column('delivery_time', sa.DateTime(timezone=True)),
        sa.Column('station_expense', sa.Numeric(10, 2), nullable=False),
        sa.Column('bility_expense', sa.Numeric(10, 2), nullable=False),
        sa.Column('station_labour', sa.Numeric(10, 2), nullable=False),
        sa.Column('cart_labour', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_expenses', sa.Numeric(10, 2), nullable=False),
        sa.Column('receiver_name', sa.String(100), nullable=False),
        sa.Column('receiver_phone', sa.String(20), nullable=False),
        sa.Column('receiver_cnic', sa.String(20), nullable=False),
        sa.Column('receiver_address', sa.Text(), nullable=False),
        sa.Column('delivery_notes', sa.Text()),
        sa.Column('delivery_status', sa.String(20), nullable=False),
        sa.Column('approval_status', approval_status, nullable=False),
        sa.Column('approved_by', sa.String(100)),
        sa.Column('approved_at', sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index('ix_deliveries_shipment_id', 'deliveries', ['shipment_id'])
    op.create_index('ix_deliveries_approval_status', 'deliveries', ['approval_status'])
    op.create_table(
        'party_transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transaction_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('party_type', party_type, nullable=False),
        sa.Column('party_ref_id', sa.Integer(), nullable=False),
        sa.Column('shipment_id', sa.String(50), sa.ForeignKey('shipments.register_number'), nullable=False),
        sa.Column('credit_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('debit_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.String(255)),
        *_timestamps(),
    )
    op.create_index('ix_party_transactions_party_ref_id', 'party_transactions', ['party_ref_id'])
    op.create_table(
        'trip_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('vehicle_id', sa.Integer(), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('driver_name', sa.String(100), nullable=False),
        sa.Column('driver_mobile', sa.String(20), nullable=False),
        sa.Column('station_name', sa.String(100), nullable=False),
        sa.Column('city', sa.String(50), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('arrival_time', sa.String(10), nullable=False),
        sa.Column('departure_time', sa.String(10), nullable=False),
        sa.Column('total_fare_collected', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_cut', sa.Numeric(10, 2), nullable=False),
        sa.Column('commission', sa.Numeric(10, 2), nullable=False),
        sa.Column('received_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('accountant_reward', sa.Numeric(10, 2), nullable=False),
        sa.Column('remaining_fare', sa.Numeric(10, 2), nullable=False),
        sa.Column('fare_is_paid', sa.Boolean(), nullable=False),
        sa.Column('note', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_trip_logs_vehicle_id', 'trip_logs', ['vehicle_id'])
    op.create_table(
        'trip_shipment_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('trip_log_id', sa.Integer(), sa.ForeignKey('trip_logs.id'), nullable=False),
        sa.Column('shipment_id', sa.String(50), nullable=False),
        sa.Column('serial_number', sa.Integer(), nullable=False),
        sa.Column('receiver_name', sa.String(100), nullable=False),
        sa.Column('item_details', sa.String(255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('delivery_charges', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('trip_log_id', 'shipment_id'),
    )
    op.create_table(
        'vehicle_transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('vehicle_id', sa.Integer(), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('shipment_id', sa.String(50), sa.ForeignKey('shipments.register_number', ondelete='SET NULL')),
        sa.Column('trip_id', sa.Integer(), sa.ForeignKey('trip_logs.id', ondelete='SET NULL')),
        sa.Column('transaction_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('credit_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('debit_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.String(255)),
        *_timestamps(),
    )
    op.create_index('ix_vehicle_transactions_vehicle_id', 'vehicle_transactions', ['vehicle_id'])
    op.create_table(
        'return_shipments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('original_shipment_id', sa.String(50),
                  sa.ForeignKey('shipments.register_number', ondelete='CASCADE'), nullable=False),
        sa.Column('return_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('reason', sa.String(255), nullable=False),
        sa.Column('status', return_status, nullable=False),
        sa.Column('action_taken', sa.String(255)),
        sa.Column('resolution_date', sa.DateTime(timezone=True)),
        sa.Column('comments', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_return_shipments_original_shipment_id', 'return_shipments', ['original_shipment_id'])
    op.create_table(
        'return_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('return_shipment_id', sa.Integer(),
                  sa.ForeignKey('return_shipments.id', ondelete='CASCADE'), nullable=False),
        sa.Column('goods_detail_id', sa.Integer(),
                  sa.ForeignKey('goods_details.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity_returned', sa.Integer(), nullable=False),
        sa.Column('condition', sa.String(50), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'labour_persons',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('contact_info', sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'labour_assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('labour_person_id', sa.Integer(), sa.ForeignKey('labour_persons.id'), nullable=False),
        sa.Column('shipment_id', sa.String(50), sa.ForeignKey('shipments.register_number'), nullable=False),
        sa.Column('assigned_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('due_date', sa.Date()),
        sa.Column('status', assignment_status, nullable=False),
        sa.Column('delivered_date', sa.DateTime(timezone=True)),
        sa.Column('collected_amount', sa.Numeric(10, 2)),
        sa.Column('settled_date', sa.DateTime(timezone=True)),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_labour_assignments_labour_person_id', 'labour_assignments', ['labour_person_id'])
    op.create_index('ix_labour_assignments_shipment_id', 'labour_assignments', ['shipment_id'])
    op.create_table(
        'labour_payment_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('labour_person_id', sa.Integer(), sa.ForeignKey('labour_persons.id'), nullable=False),
        sa.Column('shipment_id', sa.String(50), sa.ForeignKey('shipments.register_number'), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('amount_paid', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text()),
        *_timestamps(),
    )
    op.create_index('ix_labour_payment_history_labour_person_id', 'labour_payment_history', ['labour_person_id'])


def downgrade() -> None:
    for table in (
        'labour_payment_history', 'labour_assignments', 'labour_persons', 'return_items',
        'return_shipments', 'vehicle_transactions', 'trip_shipment_logs', 'trip_logs',
        'party_transactions', 'deliveries', 'goods_details', 'shipments', 'vehicles',
        'item_catalog', 'parties', 'cities', 'agencies', 'users',
    ):
        op.drop_table(table)
    for enum in (assignment_status, return_status, party_type, approval_status, user_role):
        enum.drop(op.get_bind(), checkfirst=True)
