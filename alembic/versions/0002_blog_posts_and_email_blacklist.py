"""blog_posts_and_email_blacklist

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 14:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Changes:
    1. users.username is unique case-insensitively (lower(username))
    2. Add blog_posts
    3. Add email_domain_blacklist, checked on registration
    """
    op.drop_index('ix_users_username', table_name='users')
    op.create_index(
        'uq_users_username_lower', 'users', [sa.text('lower(username)')], unique=True
    )

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='published'),
        sa.Column('published_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('author', sa.String(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('published', 'archived')", name='check_blog_post_status'),
    )
    op.create_index(
        'idx_blog_posts_status_published_date', 'blog_posts', ['status', 'published_date']
    )

    op.create_table(
        'email_domain_blacklist',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('domain', sa.String(), nullable=False),
        sa.Column('category', sa.String(length=1), nullable=False),
        sa.Column('action', sa.String(length=16), nullable=False),
        sa.Column('suggested_fix', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("action IN ('block', 'suggest')", name='check_blacklist_action'),
    )
    op.create_index(
        'ix_email_domain_blacklist_domain', 'email_domain_blacklist', ['domain'], unique=True
    )


def downgrade() -> None:
    """Drop blog_posts and email_domain_blacklist, restore the plain username index"""
    op.drop_index('ix_email_domain_blacklist_domain', table_name='email_domain_blacklist')
    op.drop_table('email_domain_blacklist')
    op.drop_index('idx_blog_posts_status_published_date', table_name='blog_posts')
    op.drop_table('blog_posts')
    op.drop_index('uq_users_username_lower', table_name='users')
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
