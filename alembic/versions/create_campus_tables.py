"""create campus tables

Revision ID: 3b7c0d52a1e4
Revises:
Create Date: 2026-10-18 10:12:40

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7c0d52a1e4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _status(name: str) -> sa.Enum:
    return sa.Enum('PENDING', 'ACTIVE', name=name)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'UNIVERSITY', 'RSO_ADMIN', 'STUDENT', name='user_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'universities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('num_students', sa.Integer(), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
        sa.Column('status', _status('university_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_universities_user_id', 'universities', ['user_id'], unique=True)

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('university_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('status', _status('student_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_user_id', 'students', ['user_id'], unique=True)
    op.create_index('ix_students_university_id', 'students', ['university_id'])

    op.create_table(
        'rsos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('university_id', sa.Integer(), nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', _status('rso_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('university_id', 'name', name='uq_rsos_university_name'),
    )
    op.create_index('ix_rsos_university_id', 'rsos', ['university_id'])
    op.create_index('ix_rsos_admin_id', 'rsos', ['admin_id'])

    op.create_table(
        'rso_memberships',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('rso_id', sa.Integer(), nullable=False),
        sa.Column('status', _status('membership_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['rso_id'], ['rsos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'rso_id', name='uq_rso_memberships_user_rso'),
    )
    op.create_index('ix_rso_memberships_user_id', 'rso_memberships', ['user_id'])
    op.create_index('ix_rso_memberships_rso_id', 'rso_memberships', ['rso_id'])

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum('social', 'fundraising', 'tech talk', 'other', name='event_category'), nullable=False),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('contact_phone', sa.String(length=30), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=True),
        sa.Column('visibility', sa.Enum('public', 'private', 'rso', name='event_visibility'), nullable=False),
        sa.Column('university_id', sa.Integer(), nullable=True),
        sa.Column('rso_id', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['university_id'], ['universities.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['rso_id'], ['rsos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "(visibility != 'private' OR university_id IS NOT NULL) "
            "AND (visibility != 'rso' OR rso_id IS NOT NULL)",
            name='ck_events_visibility_scope',
        ),
    )
    op.create_index('ix_events_visibility', 'events', ['visibility'])
    op.create_index('ix_events_university_id', 'events', ['university_id'])
    op.create_index('ix_events_rso_id', 'events', ['rso_id'])
    op.create_index('ix_events_created_by', 'events', ['created_by'])

    op.create_table(
        'event_comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_event_comments_event_id', 'event_comments', ['event_id'])
    op.create_index('ix_event_comments_user_id', 'event_comments', ['user_id'])

    op.create_table(
        'event_ratings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_ratings_event_user'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_event_ratings_range'),
    )
    op.create_index('ix_event_ratings_event_id', 'event_ratings', ['event_id'])
    op.create_index('ix_event_ratings_user_id', 'event_ratings', ['user_id'])

    op.create_table(
        'approval_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('entity_kind', sa.String(length=20), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('target_user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.Enum('APPROVE', 'DENY', name='approval_action'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_approval_logs_actor_id', 'approval_logs', ['actor_id'])


def downgrade() -> None:
    op.drop_table('approval_logs')
    op.drop_table('event_ratings')
    op.drop_table('event_comments')
    op.drop_table('events')
    op.drop_table('rso_memberships')
    op.drop_table('rsos')
    op.drop_table('students')
    op.drop_table('universities')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    for enum_name in (
        'approval_action', 'event_visibility', 'event_category', 'membership_status',
        'rso_status', 'student_status', 'university_status', 'user_role',
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
