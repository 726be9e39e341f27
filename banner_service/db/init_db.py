import logging
from datetime import timedelta

from banner_service.core.errors import RelationMissing
from banner_service.core.timeutil import utcnow
from banner_service.db.banner_store import BannerStore
from banner_service.db.session import engine, SessionLocal
from banner_service.models.banner import Banner, BannerType, LinkType
from banner_service.models.base import Base

logger = logging.getLogger(__name__)

def create_tables(bind=None):
    Base.metadata.create_all(bind=bind or engine)

def seed_demo_data():
    """Insert one timed and one fixed demo banner when the table is empty (idempotent)."""
    db = SessionLocal()
    try:
        store = BannerStore(db)
        try:
            if store.find_all():
                return
        except RelationMissing:
            logger.warning("banners table missing; run migrations before seeding")
            return
        now = utcnow()
        store.save(Banner(
            title="Welcome",
            image_url="https://placehold.co/1200x400?text=Welcome",
            link_type=LinkType.NONE,
            is_enabled=True,
            is_fixed=False,
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=30),
            display_order=1,
            priority=1,
            banner_type=BannerType.NEWS,
        ))
        store.save(Banner(
            title="Evergreen",
            image_url="https://placehold.co/1200x400?text=Evergreen",
            link_type=LinkType.INTERNAL,
            link_url="/about",
            is_enabled=False,
            is_fixed=True,
            display_order=2,
            priority=1,
            banner_type=BannerType.FEATURED,
        ))
        logger.info("seeded demo banners")
    finally:
        db.close()
