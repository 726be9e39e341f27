"""Error taxonomy for banner operations.

Each error carries the HTTP status it maps to; the API layer renders
``detail`` as the response body.
"""
from typing import Iterable


class BannerError(Exception):
    status_code = 400
    default_detail = "invalid banner request"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(BannerError):
    status_code = 404
    default_detail = "banner not found"

    @classmethod
    def for_id(cls, banner_id: int) -> "NotFound":
        return cls(f"Banner with ID {banner_id} not found")

    @classmethod
    def for_ids(cls, banner_ids: Iterable[int]) -> "NotFound":
        return cls("Banners with IDs " + ", ".join(str(i) for i in banner_ids) + " not found")


class InvalidLink(BannerError):
    default_detail = 'link_url is required when link_type is not "none"'


class InvalidDateRange(BannerError):
    default_detail = "start_date must be before end_date"


class MissingDates(BannerError):
    default_detail = "start_date and end_date are required for non-fixed banners"


class RelationMissing(BannerError):
    """The banners table does not exist yet (schema not migrated)."""

    status_code = 503
    default_detail = "banners table is not available"
