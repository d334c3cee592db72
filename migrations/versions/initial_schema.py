"""Create users and diaries tables

Revision ID: initial_schema
Revises:
Create Date: 2025-10-18 16:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('password', sa.String(length=150), nullable=False),
        sa.Column('nickname', sa.String(length=150), nullable=False),
        sa.Column('ai_tone', sa.String(length=20), nullable=False, server_default='counselor'),
        sa.Column('last_tone_change_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('nickname'),
    )
    op.create_table(
        'diaries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    # Same-day entries are allowed, so the index is not unique
    op.create_index('idx_user_date', 'diaries', ['user_id', 'date'], unique=False)


def downgrade():
    op.drop_index('idx_user_date', table_name='diaries')
    op.drop_table('diaries')
    op.drop_table('users')
