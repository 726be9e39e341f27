"""fixed banners and priority

Revision ID: 0003_banner_fixed_priority
Revises: 0002_banner_device_images
Create Date: 2025-09-02
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0003_banner_fixed_priority'
down_revision = '0002_banner_device_images'
branch_labels = None
depends_on = None

def upgrade() -> None:
    with op.batch_alter_table('banners') as batch:
        batch.add_column(sa.Column('is_fixed', sa.Boolean(), nullable=False, server_default=sa.text('FALSE')))
        batch.add_column(sa.Column('priority', sa.Integer(), nullable=False, server_default='0'))
    # Existing rows keep their relative order as priority
    op.execute("UPDATE banners SET priority = display_order")
    op.create_index('ix_banners_priority', 'banners', ['priority'])


def downgrade() -> None:
    op.drop_index('ix_banners_priority', table_name='banners')
    with op.batch_alter_table('banners') as batch:
        batch.drop_column('priority')
        batch.drop_column('is_fixed')
