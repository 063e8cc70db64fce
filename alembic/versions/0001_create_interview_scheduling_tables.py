"""Create interview scheduling tables

Revision ID: sched_0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'sched_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tables may already exist from Base.metadata.create_all in main.py
    from sqlalchemy import inspect
    conn = op.get_bind()
    tables = inspect(conn).get_table_names()

    if 'interviews' not in tables:
        op.create_table(
            'interviews',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('interviewer_id', sa.Integer(), nullable=False),
            sa.Column('scheduled_by_id', sa.Integer(), nullable=False),
            sa.Column('round_number', sa.Integer(), nullable=False),
            sa.Column('total_interviews', sa.Integer(), nullable=False, server_default='1'),
            sa.Column('interview_date', sa.Date(), nullable=False),
            sa.Column('from_time', sa.Time(), nullable=False),
            sa.Column('duration_minutes', sa.Integer(), nullable=False),
            sa.Column('event_timezone', sa.String(64), nullable=False),
            sa.Column('from_time_utc', sa.DateTime(timezone=True), nullable=False),
            sa.Column('to_time_utc', sa.DateTime(timezone=True), nullable=False),
            sa.Column('result', sa.String(50), nullable=False, server_default='pending'),
            sa.Column('recruiter_notes', sa.Text(), nullable=True),
            sa.Column('interviewer_feedback', sa.Text(), nullable=True),
            sa.Column('meeting_url', sa.String(500), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True),
                      server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True),
                      server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint('to_time_utc > from_time_utc',
                               name='ck_interviews_interval_positive'),
            sa.CheckConstraint('round_number >= 1', name='ck_interviews_round_positive'),
        )
        op.create_index('ix_interviews_id', 'interviews', ['id'])
        op.create_index('ix_interviews_candidate_id', 'interviews', ['candidate_id'])
        op.create_index('ix_interviews_interviewer_id', 'interviews', ['interviewer_id'])
        op.create_index('ix_interviews_interview_date', 'interviews', ['interview_date'])
        op.create_index('ix_interviews_candidate_window', 'interviews',
                        ['candidate_id', 'from_time_utc', 'to_time_utc'])
        op.create_index('ix_interviews_interviewer_window', 'interviews',
                        ['interviewer_id', 'from_time_utc', 'to_time_utc'])

    if 'audit_logs' not in tables:
        op.create_table(
            'audit_logs',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), nullable=True),
            sa.Column('action', sa.String(20), nullable=False),
            sa.Column('entity_type', sa.String(50), nullable=False),
            sa.Column('entity_id', sa.Integer(), nullable=True),
            sa.Column('old_values', sa.JSON(), nullable=True),
            sa.Column('new_values', sa.JSON(), nullable=True),
            sa.Column('ip_address', sa.String(64), nullable=True),
            sa.Column('user_agent', sa.String(512), nullable=True),
            sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_audit_logs_id', 'audit_logs', ['id'])
        op.create_index('ix_audit_logs_user_id', 'audit_logs', ['user_id'])
        op.create_index('ix_audit_logs_entity_id', 'audit_logs', ['entity_id'])


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('interviews')
