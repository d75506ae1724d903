"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the portal schema.

    Tables:
    1. users - council members who can log in
    2. events - with capacity counters and status
    3. event_registrations - unique per (event_id, lower(email))
    4. event_reminders - sent-marker per (event_id, event_date)
    5. contact_messages
    6. fau_board_members
    """
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('admin', 'member', 'user')", name='check_user_role'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('custom_location', sa.String(), nullable=True),
        sa.Column('max_attendees', sa.Integer(), nullable=True),
        sa.Column('current_attendees', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('current_attendees >= 0', name='check_current_attendees_positive'),
        sa.CheckConstraint(
            'max_attendees IS NULL OR max_attendees > 0', name='check_max_attendees_positive'
        ),
        sa.CheckConstraint("status IN ('active', 'cancelled')", name='check_event_status'),
    )
    op.create_index('idx_events_date_time', 'events', ['date', 'time'])

    op.create_table(
        'event_registrations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column(
            'event_id',
            sa.String(),
            sa.ForeignKey('events.id', ondelete='RESTRICT'),
            nullable=False,
        ),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('attendee_count', sa.Integer(), nullable=False),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('language', sa.String(length=2), nullable=False),
        sa.Column('children_names', sa.JSON(), nullable=True),
        sa.Column('time_slots', sa.JSON(), nullable=True),
        sa.Column('registered_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('attendee_count >= 1', name='check_attendee_count_positive'),
        sa.CheckConstraint("language IN ('no', 'en')", name='check_registration_language'),
    )
    op.create_index(
        'ix_event_registrations_event_id', 'event_registrations', ['event_id']
    )
    op.create_index(
        'uq_event_registrations_event_email',
        'event_registrations',
        ['event_id', sa.text('lower(email)')],
        unique=True,
    )

    op.create_table(
        'event_reminders',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column(
            'event_id',
            sa.String(),
            sa.ForeignKey('events.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('recipient_count', sa.Integer(), nullable=False),
        sa.Column('failed_count', sa.Integer(), nullable=False),
        sa.UniqueConstraint('event_id', 'event_date', name='uq_event_reminder_event_date'),
    )
    op.create_index('ix_event_reminders_event_id', 'event_reminders', ['event_id'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='new'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('new', 'responded', 'archived')", name='check_contact_message_status'
        ),
    )

    op.create_table(
        'fau_board_members',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    """Drop the portal schema"""
    op.drop_table('fau_board_members')
    op.drop_table('contact_messages')
    op.drop_index('ix_event_reminders_event_id', table_name='event_reminders')
    op.drop_table('event_reminders')
    op.drop_index('uq_event_registrations_event_email', table_name='event_registrations')
    op.drop_index('ix_event_registrations_event_id', table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_index('idx_events_date_time', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
