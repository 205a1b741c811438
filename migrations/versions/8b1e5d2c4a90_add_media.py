"""Add media registry

Revision ID: 8b1e5d2c4a90
Revises: 3f2a9c1d7e45
Create Date: 2026-10-25 14:03:17.552918

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '8b1e5d2c4a90'
down_revision: Union[str, None] = '3f2a9c1d7e45'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('media',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('kind', sa.Enum('IMAGE', 'VIDEO', 'OTHER', name='mediakindenum'), nullable=False),
    sa.Column('key', sa.String(), nullable=False),
    sa.Column('url', sa.String(), nullable=True),
    sa.Column('mime', sa.String(), nullable=True),
    sa.Column('width', sa.Integer(), nullable=True),
    sa.Column('height', sa.Integer(), nullable=True),
    sa.Column('size_bytes', sa.BigInteger(), nullable=True),
    sa.Column('course_id', sa.Integer(), nullable=True),
    sa.Column('lesson_id', sa.Integer(), nullable=True),
    sa.Column('user_id', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='SET NULL'),
    sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id'], ondelete='SET NULL'),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_media_id'), 'media', ['id'], unique=False)
    op.create_index(op.f('ix_media_key'), 'media', ['key'], unique=False)
    op.create_index(op.f('ix_media_course_id'), 'media', ['course_id'], unique=False)
    op.create_index(op.f('ix_media_lesson_id'), 'media', ['lesson_id'], unique=False)
    op.create_index(op.f('ix_media_user_id'), 'media', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_media_user_id'), table_name='media')
    op.drop_index(op.f('ix_media_lesson_id'), table_name='media')
    op.drop_index(op.f('ix_media_course_id'), table_name='media')
    op.drop_index(op.f('ix_media_key'), table_name='media')
    op.drop_index(op.f('ix_media_id'), table_name='media')
    op.drop_table('media')
    sa.Enum(name='mediakindenum').drop(op.get_bind(), checkfirst=True)
