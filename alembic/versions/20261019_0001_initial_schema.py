"""Create initial schema

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    'amenitycategory': ('WIFI', 'PARKING', 'KITCHEN', 'ENTERTAINMENT', 'COMFORT', 'SAFETY', 'CLEANING', 'OUTDOOR', 'OTHER'),
    'propertytype': ('APARTMENT', 'HOUSE', 'VILLA', 'CONDO', 'ROOM', 'OTHER'),
    'cancellationpolicy': ('FLEXIBLE', 'MODERATE', 'STRICT'),
    'stayterm': ('LONG_TERM', 'SHORT_TERM'),
    'bookingstatus': ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED'),
}

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def _enum(bind, name: str):
    # stayterm is shared by two tables, so PostgreSQL types are created once up front
    if bind.dialect.name == 'postgresql':
        return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)
    return sa.Enum(*ENUMS[name], name=name)

def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name, values in ENUMS.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    if not _has_table(bind, 'users'):
        op.create_table('users',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('hashed_password', sa.String(length=255), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('first_name', sa.String(length=100), nullable=True),
            sa.Column('last_name', sa.String(length=100), nullable=True),
            sa.Column('phone', sa.String(length=50), nullable=True),
            sa.Column('profile_picture', sa.String(length=500), nullable=True),
            sa.Column('bio', sa.Text(), nullable=True),
            sa.Column('address', sa.JSON(), nullable=True),
            sa.Column('is_host', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('host_rating', sa.Float(), server_default='0', nullable=False),
            sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('is_superhost', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('payment_methods', sa.JSON(), nullable=False),
            sa.Column('watchlist', sa.JSON(), nullable=False),
            sa.Column('likes', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not _has_table(bind, 'amenities'):
        op.create_table('amenities',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('category', _enum(bind, 'amenitycategory'), nullable=False),
            sa.Column('icon', sa.String(length=200), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('is_popular', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_amenities_name'), 'amenities', ['name'], unique=True)
        op.create_index(op.f('ix_amenities_category'), 'amenities', ['category'], unique=False)

    if not _has_table(bind, 'destinations'):
        op.create_table('destinations',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('country', sa.String(length=100), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('photos', sa.JSON(), nullable=False),
            sa.Column('cover', sa.String(length=500), nullable=True),
            sa.Column('discount', sa.Float(), nullable=True),
            sa.Column('price', sa.Float(), nullable=True),
            sa.Column('guide', sa.Text(), nullable=True),
            sa.Column('rating', sa.Float(), nullable=True),
            sa.Column('overview', sa.Text(), nullable=True),
            sa.Column('likes', sa.JSON(), nullable=False),
            sa.Column('comments', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )

    if not _has_table(bind, 'rents'):
        op.create_table('rents',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('host_id', sa.String(length=32), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=True),
            sa.Column('location', sa.JSON(), nullable=True),
            sa.Column('photos', sa.JSON(), nullable=False),
            sa.Column('cover', sa.String(length=500), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('bedroom_count', sa.Integer(), nullable=False),
            sa.Column('bathroom_count', sa.Integer(), nullable=False),
            sa.Column('max_guests', sa.Integer(), nullable=False),
            sa.Column('square_footage', sa.Float(), nullable=True),
            sa.Column('property_type', _enum(bind, 'propertytype'), server_default='OTHER', nullable=False),
            sa.Column('check_in_time', sa.String(length=20), nullable=True),
            sa.Column('check_out_time', sa.String(length=20), nullable=True),
            sa.Column('cancellation_policy', _enum(bind, 'cancellationpolicy'), server_default='MODERATE', nullable=False),
            sa.Column('house_rules', sa.JSON(), nullable=False),
            sa.Column('price', sa.Float(), nullable=False),
            sa.Column('price_per_night', sa.Float(), nullable=True),
            sa.Column('discount', sa.Float(), nullable=True),
            sa.Column('rating', sa.Float(), server_default='0', nullable=False),
            sa.Column('likes', sa.JSON(), nullable=False),
            sa.Column('availability', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['host_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_rents_host_id'), 'rents', ['host_id'], unique=False)
        op.create_index(op.f('ix_rents_created_at'), 'rents', ['created_at'], unique=False)

    if not _has_table(bind, 'rent_amenities'):
        op.create_table('rent_amenities',
            sa.Column('rent_id', sa.String(length=32), nullable=False),
            sa.Column('amenity_id', sa.String(length=32), nullable=False),
            sa.ForeignKeyConstraint(['rent_id'], ['rents.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['amenity_id'], ['amenities.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('rent_id', 'amenity_id')
        )

    if not _has_table(bind, 'bookings'):
        op.create_table('bookings',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('property_id', sa.String(length=32), nullable=False),
            sa.Column('property_type', _enum(bind, 'stayterm'), server_default='LONG_TERM', nullable=False),
            sa.Column('guest_id', sa.String(length=32), nullable=False),
            sa.Column('host_id', sa.String(length=32), nullable=False),
            sa.Column('check_in_date', sa.DateTime(), nullable=False),
            sa.Column('check_out_date', sa.DateTime(), nullable=False),
            sa.Column('number_of_guests', sa.Integer(), nullable=False),
            sa.Column('number_of_nights', sa.Integer(), nullable=True),
            sa.Column('status', _enum(bind, 'bookingstatus'), server_default='PENDING', nullable=False),
            sa.Column('pricing', sa.JSON(), nullable=False),
            sa.Column('special_requests', sa.Text(), nullable=True),
            sa.Column('cancellation_reason', sa.Text(), nullable=True),
            sa.Column('cancellation_date', sa.DateTime(), nullable=True),
            sa.Column('refund_amount', sa.Float(), nullable=True),
            sa.Column('guest_notes', sa.Text(), nullable=True),
            sa.Column('host_notes', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['property_id'], ['rents.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['guest_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['host_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_bookings_property_id'), 'bookings', ['property_id'], unique=False)
        op.create_index(op.f('ix_bookings_guest_id'), 'bookings', ['guest_id'], unique=False)
        op.create_index(op.f('ix_bookings_host_id'), 'bookings', ['host_id'], unique=False)
        op.create_index(op.f('ix_bookings_check_in_date'), 'bookings', ['check_in_date'], unique=False)

    if not _has_table(bind, 'reviews'):
        op.create_table('reviews',
            sa.Column('id', sa.String(length=32), nullable=False),
            sa.Column('property_id', sa.String(length=32), nullable=False),
            sa.Column('property_type', _enum(bind, 'stayterm'), server_default='LONG_TERM', nullable=False),
            sa.Column('user_id', sa.String(length=32), nullable=False),
            sa.Column('host_id', sa.String(length=32), nullable=False),
            sa.Column('rating', sa.Float(), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=True),
            sa.Column('comment', sa.Text(), nullable=True),
            sa.Column('cleanliness', sa.Integer(), nullable=True),
            sa.Column('communication', sa.Integer(), nullable=True),
            sa.Column('location', sa.Integer(), nullable=True),
            sa.Column('accuracy', sa.Integer(), nullable=True),
            sa.Column('photos', sa.JSON(), nullable=False),
            sa.Column('verified', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('helpful', sa.Integer(), server_default='0', nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['property_id'], ['rents.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['host_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_reviews_property_id'), 'reviews', ['property_id'], unique=False)
        op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)
        op.create_index(op.f('ix_reviews_created_at'), 'reviews', ['created_at'], unique=False)


def downgrade() -> None:
    bind = op.get_bind()
    op.drop_table('reviews')
    op.drop_table('bookings')
    op.drop_table('rent_amenities')
    op.drop_table('rents')
    op.drop_table('destinations')
    op.drop_table('amenities')
    op.drop_table('users')

    # Drop ENUM types for PostgreSQL
    if bind.dialect.name == 'postgresql':
        for name in ENUMS:
            sa.Enum(name=name).drop(bind, checkfirst=True)
