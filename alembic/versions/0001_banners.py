"""banners table

Revision ID: 0001_banners
Revises:
Create Date: 2025-08-12
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_banners'
down_revision = None
branch_labels = None
depends_on = None

link_type = sa.Enum('internal', 'external', 'none', name='banner_link_type')
banner_type = sa.Enum('news', 'promotional', 'featured', name='banner_type')


def upgrade():
    op.create_table(
        'banners',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('link_type', link_type, nullable=False, server_default='none'),
        sa.Column('link_url', sa.Text(), nullable=True),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default=sa.text('TRUE')),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('banner_type', banner_type, nullable=False, server_default='news'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_banners_id', 'banners', ['id'])
    op.create_index('ix_banners_is_enabled', 'banners', ['is_enabled'])
    op.create_index('ix_banners_display_order', 'banners', ['display_order'])
    op.create_index('ix_banners_dates', 'banners', ['start_date', 'end_date'])
    op.create_index('ix_banners_banner_type', 'banners', ['banner_type'])


def downgrade():
    op.drop_index('ix_banners_banner_type', table_name='banners')
    op.drop_index('ix_banners_dates', table_name='banners')
    op.drop_index('ix_banners_display_order', table_name='banners')
    op.drop_index('ix_banners_is_enabled', table_name='banners')
    op.drop_index('ix_banners_id', table_name='banners')
    op.drop_table('banners')
    banner_type.drop(op.get_bind(), checkfirst=True)
    link_type.drop(op.get_bind(), checkfirst=True)
