"""baseline job board schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 10:00:00.000000

Production-safe migration: only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('first_name', sa.String(), nullable=False),
            sa.Column('last_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=True),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('company', sa.String(), nullable=True),
            sa.Column('photo_url', sa.String(), nullable=True),
            sa.Column('is_verified', sa.Boolean(), nullable=False),
            sa.Column('provider', sa.String(), nullable=False),
            sa.Column('profile', sa.JSON(), nullable=False),
            sa.Column('last_profile_view', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.Column('last_login', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('company', sa.String(), nullable=False),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('category', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('requirements', sa.Text(), nullable=False),
            sa.Column('responsibilities', sa.Text(), nullable=False),
            sa.Column('experience', sa.String(), nullable=False),
            sa.Column('education', sa.String(), nullable=False),
            sa.Column('salary_range', sa.String(), nullable=True),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('benefits', sa.JSON(), nullable=False),
            sa.Column('tags', sa.JSON(), nullable=False),
            sa.Column('posted_by', sa.Integer(), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('is_featured', sa.Boolean(), nullable=False),
            sa.Column('application_deadline', sa.DateTime(), nullable=True),
            sa.Column('views', sa.Integer(), nullable=False),
            sa.Column('total_applications', sa.Integer(), nullable=False),
            sa.Column('company_logo', sa.String(), nullable=True),
            sa.Column('company_website', sa.String(), nullable=True),
            sa.Column('company_size', sa.String(), nullable=True),
            sa.Column('industry', sa.String(), nullable=True),
            sa.Column('work_mode', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['posted_by'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_job_active_created', 'jobs', ['is_active', 'created_at'], unique=False)
        for column in ('id', 'title', 'company', 'location', 'type', 'category', 'posted_by', 'is_active', 'created_at'):
            op.create_index(op.f(f'ix_jobs_{column}'), 'jobs', [column], unique=False)

    if not table_exists('profile_views'):
        op.create_table('profile_views',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('viewed_user_id', sa.Integer(), nullable=False),
            sa.Column('viewer_id', sa.Integer(), nullable=False),
            sa.Column('viewed_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['viewed_user_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['viewer_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_profile_view_user_viewer', 'profile_views', ['viewed_user_id', 'viewer_id', 'viewed_at'], unique=False)
        for column in ('id', 'viewed_user_id', 'viewer_id', 'viewed_at'):
            op.create_index(op.f(f'ix_profile_views_{column}'), 'profile_views', [column], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('applicant_id', sa.Integer(), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('phone', sa.String(), nullable=False),
            sa.Column('current_location', sa.String(), nullable=False),
            sa.Column('experience', sa.String(), nullable=False),
            sa.Column('education', sa.String(), nullable=False),
            sa.Column('cover_letter', sa.Text(), nullable=True),
            sa.Column('current_company', sa.String(), nullable=True),
            sa.Column('current_position', sa.String(), nullable=True),
            sa.Column('expected_salary', sa.String(), nullable=True),
            sa.Column('notice_period', sa.String(), nullable=True),
            sa.Column('portfolio', sa.String(), nullable=True),
            sa.Column('linkedin_profile', sa.String(), nullable=True),
            sa.Column('resume', sa.String(), nullable=True),
            sa.Column('interview_scheduled', sa.Boolean(), nullable=False),
            sa.Column('interview_date', sa.DateTime(), nullable=True),
            sa.Column('interview_type', sa.String(), nullable=True),
            sa.Column('interview_notes', sa.Text(), nullable=True),
            sa.Column('rejection_reason', sa.Text(), nullable=True),
            sa.Column('offer_details', sa.JSON(), nullable=True),
            sa.Column('applied_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['applicant_id'], ['users.id'], ),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('job_id', 'applicant_id', name='uq_application_job_applicant')
        )
        op.create_index('idx_application_applicant_applied', 'applications', ['applicant_id', 'applied_at'], unique=False)
        for column in ('id', 'job_id', 'applicant_id', 'status', 'applied_at'):
            op.create_index(op.f(f'ix_applications_{column}'), 'applications', [column], unique=False)

    if not table_exists('application_notes'):
        op.create_table('application_notes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('added_by', sa.String(), nullable=False),
            sa.Column('added_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_application_notes_id'), 'application_notes', ['id'], unique=False)
        op.create_index(op.f('ix_application_notes_application_id'), 'application_notes', ['application_id'], unique=False)

    if not table_exists('applied_jobs'):
        op.create_table('applied_jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('applied_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('application_id')
        )
        for column in ('id', 'user_id', 'job_id'):
            op.create_index(op.f(f'ix_applied_jobs_{column}'), 'applied_jobs', [column], unique=False)


def downgrade() -> None:
    for table in ('applied_jobs', 'application_notes', 'applications', 'profile_views', 'jobs', 'users'):
        if table_exists(table):
            op.drop_table(table)
