"""SQLAlchemy-backed Banner Store.

Wraps a request-scoped ``Session``. Writes commit immediately; the bulk order
update commits once for the whole batch.
"""
import logging
from typing import Iterable, List, Sequence

from sqlalchemy import asc, desc, func
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from banner_service.core.errors import NotFound, RelationMissing
from banner_service.models.banner import Banner

logger = logging.getLogger(__name__)

UNDEFINED_TABLE_SQLSTATE = "42P01"


def is_missing_relation(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNDEFINED_TABLE_SQLSTATE:
        return True
    message = str(orig if orig is not None else exc).lower()
    return "no such table" in message or ("relation" in message and "does not exist" in message)


class BannerStore:
    def __init__(self, db: Session):
        self.db = db

    def _missing_relation(self, exc: DBAPIError) -> RelationMissing:
        if not is_missing_relation(exc):
            raise exc
        self.db.rollback()
        return RelationMissing()

    def find_all(self) -> List[Banner]:
        try:
            return (
                self.db.query(Banner)
                .order_by(asc(Banner.display_order), desc(Banner.created_at), desc(Banner.id))
                .all()
            )
        except DBAPIError as exc:
            raise self._missing_relation(exc) from exc

    def find_by_id(self, banner_id: int) -> Banner:
        banner = self.db.get(Banner, banner_id)
        if banner is None:
            raise NotFound.for_id(banner_id)
        return banner

    def find_by_ids(self, banner_ids: Iterable[int]) -> List[Banner]:
        ids = list(set(banner_ids))
        if not ids:
            return []
        return self.db.query(Banner).filter(Banner.id.in_(ids)).all()

    def _max(self, column) -> int:
        try:
            return self.db.query(func.max(column)).scalar() or 0
        except DBAPIError as exc:
            raise self._missing_relation(exc) from exc

    def max_display_order(self) -> int:
        return self._max(Banner.display_order)

    def max_priority(self) -> int:
        return self._max(Banner.priority)

    def save(self, banner: Banner) -> Banner:
        self.db.add(banner)
        self.db.commit()
        self.db.refresh(banner)
        return banner

    def delete(self, banner: Banner) -> None:
        self.db.delete(banner)
        self.db.commit()

    def bulk_update_order(self, items: Sequence) -> None:
        """Apply ``(id, display_order)`` pairs as one transaction."""
        try:
            for item in items:
                (
                    self.db.query(Banner)
                    .filter(Banner.id == item.id)
                    .update({Banner.display_order: item.display_order}, synchronize_session=False)
                )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("reorder of %d banners rolled back", len(items))
            raise
        # Loaded instances still hold the old display_order
        self.db.expire_all()

    def rollback(self) -> None:
        self.db.rollback()
