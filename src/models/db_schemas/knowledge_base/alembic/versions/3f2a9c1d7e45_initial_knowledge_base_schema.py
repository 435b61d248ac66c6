"""initial_knowledge_base_schema

Revision ID: 3f2a9c1d7e45
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e45'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create topics table (current state)
    op.create_table(
        'topics',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('parent_topic_id', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('seq'),
        sa.UniqueConstraint('id', name='uq_topic_id')
    )
    op.create_index('ix_topic_parent_topic_id', 'topics', ['parent_topic_id'], unique=False)
    op.create_index('ix_topic_created_at', 'topics', ['created_at'], unique=False)

    # Create topic_versions table (history)
    op.create_table(
        'topic_versions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('topic_id', sa.Text(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('parent_topic_id', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('topic_id', 'version', name='uq_topic_version_topic_id_version')
    )
    op.create_index('ix_topic_version_topic_id', 'topic_versions', ['topic_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_topic_version_topic_id', table_name='topic_versions')
    op.drop_table('topic_versions')

    op.drop_index('ix_topic_created_at', table_name='topics')
    op.drop_index('ix_topic_parent_topic_id', table_name='topics')
    op.drop_table('topics')
