"""Create users, topics, posts and their custom field tables

Revision ID: create_forum_tables
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_forum_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(80), nullable=False),
        sa.Column('email', sa.String(120), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('locale', sa.String(10), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_moderator', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'topics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_topics_title', 'topics', ['title'])
    op.create_index('ix_topics_user_id', 'topics', ['user_id'])
    op.create_index('ix_topics_created_at', 'topics', ['created_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('topic_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('post_number', sa.Integer(), nullable=False),
        sa.Column('raw', sa.Text(), nullable=False),
        sa.Column('cooked', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['topic_id'], ['topics.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('topic_id', 'post_number', name='unique_post_number')
    )
    op.create_index('ix_posts_topic_id', 'posts', ['topic_id'])
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    for record, parent in (('post', 'posts'), ('topic', 'topics')):
        table = f'{record}_custom_fields'
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column(f'{record}_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(256), nullable=False),
            sa.Column('value', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint([f'{record}_id'], [f'{parent}.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint(f'{record}_id', 'name', name=f'unique_{record}_custom_field')
        )
        op.create_index(f'ix_{table}_{record}_id', table, [f'{record}_id'])


def downgrade():
    op.drop_index('ix_topic_custom_fields_topic_id', table_name='topic_custom_fields')
    op.drop_table('topic_custom_fields')
    op.drop_index('ix_post_custom_fields_post_id', table_name='post_custom_fields')
    op.drop_table('post_custom_fields')
    op.drop_index('ix_posts_created_at', table_name='posts')
    op.drop_index('ix_posts_user_id', table_name='posts')
    op.drop_index('ix_posts_topic_id', table_name='posts')
    op.drop_table('posts')
    op.drop_index('ix_topics_created_at', table_name='topics')
    op.drop_index('ix_topics_user_id', table_name='topics')
    op.drop_index('ix_topics_title', table_name='topics')
    op.drop_table('topics')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
