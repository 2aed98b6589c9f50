"""initial_schema

Revision ID: 4f2a9c1d7e3b
Revises:
Create Date: 2026-10-19 10:12:41.331904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7e3b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, jobs, applications and documents."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='jobseeker'),
        sa.Column('bio', sa.String(500), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('last_login', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='Full-Time'),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('requirements', sa.Text, nullable=False, server_default=''),
        sa.Column('salary', sa.String(100), nullable=False, server_default='Not specified'),
        sa.Column('apply_link', sa.Text, nullable=True),
        sa.Column('source', sa.String(100), nullable=False, server_default='JobHub'),
        sa.Column('deadline', sa.DateTime, nullable=True),
        sa.Column('applications', sa.Integer, nullable=False, server_default='0'),
        sa.Column('posted_by', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_jobs_type', 'jobs', ['type'])
    op.create_index('ix_jobs_posted_by', 'jobs', ['posted_by'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])

    op.create_table(
        'applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('applicant_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('cover_letter', sa.Text, nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='applied'),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('job_id', 'applicant_id', name='uq_application_job_applicant'),
    )
    op.create_index('ix_applications_job_id', 'applications', ['job_id'])
    op.create_index('ix_applications_applicant_id', 'applications', ['applicant_id'])

    op.create_table(
        'documents',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column(
            'application_id',
            sa.String(36),
            sa.ForeignKey('applications.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('url', sa.Text, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='other'),
        sa.Column('size', sa.Integer, nullable=False, server_default='0'),
        sa.Column('position', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_documents_application_id', 'documents', ['application_id'])


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_index('ix_documents_application_id', table_name='documents')
    op.drop_table('documents')
    op.drop_index('ix_applications_applicant_id', table_name='applications')
    op.drop_index('ix_applications_job_id', table_name='applications')
    op.drop_table('applications')
    op.drop_index('ix_jobs_created_at', table_name='jobs')
    op.drop_index('ix_jobs_posted_by', table_name='jobs')
    op.drop_index('ix_jobs_type', table_name='jobs')
    op.drop_table('jobs')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
