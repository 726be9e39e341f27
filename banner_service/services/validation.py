"""Create/update rules for banners.

Invariants enforced on every write:
  * a link_type other than "none" needs a non-empty link_url;
  * fixed banners carry no dates;
  * timed banners carry both dates with start_date < end_date.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from banner_service.core.errors import InvalidDateRange, InvalidLink, MissingDates
from banner_service.core.timeutil import as_utc
from banner_service.models.banner import Banner, LinkType
from banner_service.schemas.banner import BannerCreate, BannerUpdate


def _check_link(link_type: Optional[LinkType], link_url: Optional[str]) -> None:
    if link_type is not None and LinkType(link_type) != LinkType.NONE and not (link_url or "").strip():
        raise InvalidLink()


def _check_range(start: Optional[datetime], end: Optional[datetime]) -> None:
    if start is not None and end is not None and as_utc(start) >= as_utc(end):
        raise InvalidDateRange()


def validate_and_default(data: BannerCreate, existing_max_order: int, existing_max_priority: int) -> Banner:
    _check_link(data.link_type, data.link_url)

    if data.is_fixed:
        start_date = end_date = None
    else:
        if data.start_date is None or data.end_date is None:
            raise MissingDates()
        _check_range(data.start_date, data.end_date)
        start_date, end_date = data.start_date, data.end_date

    display_order = data.display_order
    if display_order is None:
        display_order = (existing_max_order or 0) + 1
    priority = data.priority
    if priority is None:
        priority = (existing_max_priority or 0) + 1

    return Banner(
        title=data.title,
        description=data.description,
        image_url=data.image_url,
        image_url_desktop=data.image_url_desktop,
        image_url_mobile=data.image_url_mobile,
        link_type=data.link_type,
        link_url=data.link_url,
        is_enabled=data.is_enabled,
        is_fixed=data.is_fixed,
        start_date=start_date,
        end_date=end_date,
        display_order=display_order,
        priority=priority,
        banner_type=data.banner_type,
    )


def validate_update(existing: Banner, patch: BannerUpdate) -> Dict[str, Any]:
    """Merge ``patch`` over ``existing`` and return the attribute values to assign.

    ``existing`` is not modified.
    """
    sent = patch.provided()
    changes: Dict[str, Any] = dict(sent)

    link_type = sent.get("link_type", existing.link_type)
    link_url = sent.get("link_url", existing.link_url)
    _check_link(link_type, link_url)

    is_fixed = sent.get("is_fixed", existing.is_fixed)
    if is_fixed:
        changes["start_date"] = None
        changes["end_date"] = None
        return changes

    start = sent["start_date"] if "start_date" in sent else existing.start_date
    end = sent["end_date"] if "end_date" in sent else existing.end_date
    becoming_timed = bool(existing.is_fixed)
    cleared = any(k in sent and sent[k] is None for k in ("start_date", "end_date"))
    if (becoming_timed or cleared) and (start is None or end is None):
        raise MissingDates()
    _check_range(start, end)
    changes["start_date"] = start
    changes["end_date"] = end
    return changes
