"""device specific banner images

Revision ID: 0002_banner_device_images
Revises: 0001_banners
Create Date: 2025-08-13
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002_banner_device_images'
down_revision = '0001_banners'
branch_labels = None
depends_on = None

def upgrade() -> None:
    with op.batch_alter_table('banners') as batch:
        batch.add_column(sa.Column('image_url_desktop', sa.Text(), nullable=True))
        batch.add_column(sa.Column('image_url_mobile', sa.Text(), nullable=True))
    # Backfill from the legacy single image
    op.execute(
        "UPDATE banners SET image_url_desktop = COALESCE(image_url_desktop, image_url), "
        "image_url_mobile = COALESCE(image_url_mobile, image_url)"
    )


def downgrade() -> None:
    with op.batch_alter_table('banners') as batch:
        batch.drop_column('image_url_mobile')
        batch.drop_column('image_url_desktop')
