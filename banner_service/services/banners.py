"""Banner operations on top of the store: the active-list read path with its
auto-enable side effect, CRUD orchestration, reorder and stats."""
import logging
from collections import Counter
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from banner_service.core.errors import NotFound, RelationMissing
from banner_service.core.timeutil import utcnow
from banner_service.db.banner_store import BannerStore
from banner_service.models.banner import Banner
from banner_service.schemas.banner import BannerCreate, BannerOrderItem, BannerStats, BannerUpdate
from banner_service.services.activation import compute_active_banners
from banner_service.services.validation import validate_and_default, validate_update

logger = logging.getLogger(__name__)


def get_active_banners(store: BannerStore, now: Optional[datetime] = None) -> List[Banner]:
    try:
        banners = store.find_all()
    except RelationMissing:
        logger.warning("banners table missing; serving an empty active list")
        return []

    result = compute_active_banners(banners, now or utcnow())
    for banner in result.to_enable:
        banner.is_enabled = True
        try:
            store.save(banner)
        except SQLAlchemyError:
            store.rollback()
            logger.exception("failed to persist auto-enabled banner id=%s", banner.id)
        else:
            logger.info("auto-enabled fixed banner id=%s priority=%s", banner.id, banner.priority)
    return result.active


def list_banners(store: BannerStore) -> List[Banner]:
    return store.find_all()


def create_banner(store: BannerStore, data: BannerCreate) -> Banner:
    banner = validate_and_default(data, store.max_display_order(), store.max_priority())
    banner = store.save(banner)
    logger.info("created banner id=%s fixed=%s", banner.id, banner.is_fixed)
    return banner


def update_banner(store: BannerStore, banner_id: int, patch: BannerUpdate) -> Banner:
    banner = store.find_by_id(banner_id)
    for key, value in validate_update(banner, patch).items():
        setattr(banner, key, value)
    banner = store.save(banner)
    logger.info("updated banner id=%s fields=%s", banner.id, sorted(patch.model_fields_set))
    return banner


def delete_banner(store: BannerStore, banner_id: int) -> None:
    banner = store.find_by_id(banner_id)
    store.delete(banner)
    logger.info("deleted banner id=%s", banner_id)


def reorder(store: BannerStore, items: Sequence[BannerOrderItem]) -> List[Banner]:
    requested = [item.id for item in items]
    found = {b.id for b in store.find_by_ids(requested)}
    missing = [banner_id for banner_id in requested if banner_id not in found]
    if missing:
        raise NotFound.for_ids(missing)
    store.bulk_update_order(items)
    logger.info("reordered %d banners", len(items))
    return store.find_all()


def compute_stats(banners: Sequence[Banner]) -> BannerStats:
    by_type = Counter(getattr(b.banner_type, "value", b.banner_type) for b in banners)
    return BannerStats(
        total=len(banners),
        active=sum(1 for b in banners if b.is_enabled),
        by_type=dict(by_type),
    )
