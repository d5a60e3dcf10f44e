"""initial_schema

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-19 10:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, jobs and applications."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('role', sa.String(20), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False, server_default=''),
        sa.Column('email', sa.String(255), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('plan_id', sa.String(32), nullable=False, server_default='buzz'),
        sa.Column('posting_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('skills', sa.JSON, nullable=False),
        sa.Column('education', sa.Text, nullable=False, server_default=''),
        sa.Column('cv_reference', sa.String(512), nullable=True),
        sa.CheckConstraint('posting_count >= 0', name='ck_users_posting_count_nonnegative'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employer_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False, server_default=''),
        sa.Column('location', sa.String(255), nullable=False, server_default=''),
        sa.Column('experience', sa.String(100), nullable=False, server_default=''),
        sa.Column('salary', sa.String(100), nullable=True),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        sa.Column('notice_period', sa.String(100), nullable=False, server_default=''),
        sa.Column('required_skills', sa.JSON, nullable=False),
        sa.Column('screening_questions', sa.JSON, nullable=False),
        sa.Column('posted_at', sa.DateTime, nullable=False, index=True),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('seeker_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False, index=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='applied'),
        sa.Column('answers', sa.JSON, nullable=False),
        sa.Column('cover_letter', sa.Text, nullable=True),
        sa.Column('applied_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('seeker_id', 'job_id', name='uq_applications_seeker_job'),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('users')
