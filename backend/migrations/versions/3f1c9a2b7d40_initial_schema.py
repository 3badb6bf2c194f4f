"""initial schema: users, blog posts, taxonomy, comments, contact

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2025-03-02 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1c9a2b7d40'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('admin', 'editor', name='user_role')
post_status = sa.Enum('draft', 'published', 'archived', name='post_status')
comment_status = sa.Enum('pending', 'approved', 'rejected', name='comment_status')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', user_role, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=80), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_categories')),
        sa.UniqueConstraint('name', name='uq_categories_name'),
    )
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tags')),
        sa.UniqueConstraint('name', name='uq_tags_name'),
    )

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=220), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('status', post_status, nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('featured_image', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.String(length=300), nullable=True),
        sa.Column('meta_keywords', sa.String(length=300), nullable=True),
        sa.Column('author_id', sa.Integer(), nullable=True),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('likes', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(slug) > 0', name=op.f('ck_blog_posts_slug_not_empty')),
        sa.ForeignKeyConstraint(
            ['author_id'], ['users.id'],
            name=op.f('fk_blog_posts_author_id_users'), ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_blog_posts')),
        sa.UniqueConstraint('slug', name='uq_blog_posts_slug'),
    )
    op.create_index('ix_blog_posts_status', 'blog_posts', ['status'], unique=False)

    op.create_table(
        'blog_post_categories',
        sa.Column('post_id', sa.Integer(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['category_id'], ['categories.id'],
            name=op.f('fk_blog_post_categories_category_id_categories'), ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['post_id'], ['blog_posts.id'],
            name=op.f('fk_blog_post_categories_post_id_blog_posts'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('post_id', 'category_id', name=op.f('pk_blog_post_categories')),
    )
    op.create_table(
        'blog_post_tags',
        sa.Column('post_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['post_id'], ['blog_posts.id'],
            name=op.f('fk_blog_post_tags_post_id_blog_posts'), ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['tag_id'], ['tags.id'],
            name=op.f('fk_blog_post_tags_tag_id_tags'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('post_id', 'tag_id', name=op.f('pk_blog_post_tags')),
    )

    op.create_table(
        'blog_comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('post_id', sa.Integer(), nullable=False),
        sa.Column('author_name', sa.String(length=100), nullable=False),
        sa.Column('author_email', sa.String(length=254), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('status', comment_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['post_id'], ['blog_posts.id'],
            name=op.f('fk_blog_comments_post_id_blog_posts'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_blog_comments')),
    )
    op.create_index(op.f('ix_blog_comments_post_id'), 'blog_comments', ['post_id'], unique=False)

    op.create_table(
        'contact_submissions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('company', sa.String(length=120), nullable=True),
        sa.Column('service', sa.String(length=80), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('consent', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_contact_submissions')),
    )


def downgrade():
    op.drop_table('contact_submissions')
    op.drop_index(op.f('ix_blog_comments_post_id'), table_name='blog_comments')
    op.drop_table('blog_comments')
    op.drop_table('blog_post_tags')
    op.drop_table('blog_post_categories')
    op.drop_index('ix_blog_posts_status', table_name='blog_posts')
    op.drop_table('blog_posts')
    op.drop_table('tags')
    op.drop_table('categories')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    comment_status.drop(op.get_bind(), checkfirst=True)
    post_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
