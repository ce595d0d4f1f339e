"""create_participation_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nickname', sa.String(length=50), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'meetings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('host_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('current_participants', sa.Integer(), nullable=False),
        sa.Column('meeting_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('max_participants >= 1', name='ck_meeting_max_positive'),
        # Host seat is always taken; occupancy never exceeds the ceiling
        sa.CheckConstraint(
            'current_participants >= 1 AND current_participants <= max_participants',
            name='ck_meeting_occupancy',
        ),
    )
    op.create_index('idx_meetings_host', 'meetings', ['host_id'])
    op.create_index('idx_meetings_date', 'meetings', ['meeting_date'])

    op.create_table(
        'participations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('meeting_id', sa.Integer(), sa.ForeignKey('meetings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'meeting_id', name='uq_participation_user_meeting'),
    )
    op.create_index('idx_participations_meeting', 'participations', ['meeting_id'])
    op.create_index('idx_participations_user', 'participations', ['user_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('meeting_id', sa.Integer(), sa.ForeignKey('meetings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_notifications_receiver', 'notifications', ['receiver_id', 'is_read'])
    op.create_index('idx_notifications_meeting_sender', 'notifications', ['meeting_id', 'sender_id'])


def downgrade():
    op.drop_index('idx_notifications_meeting_sender', table_name='notifications')
    op.drop_index('idx_notifications_receiver', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('idx_participations_user', table_name='participations')
    op.drop_index('idx_participations_meeting', table_name='participations')
    op.drop_table('participations')
    op.drop_index('idx_meetings_date', table_name='meetings')
    op.drop_index('idx_meetings_host', table_name='meetings')
    op.drop_table('meetings')
    op.drop_table('users')
