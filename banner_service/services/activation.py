"""Banner activation engine.

Decides which banners are on screen at a given instant. Timed banners that are
enabled and inside their window come first, ordered by priority; enabled fixed
banners follow, ordered by priority. When fewer than ``MIN_BANNERS`` qualify,
disabled fixed banners are promoted (lowest priority value first) until the
minimum is met, never letting the enabled fixed set grow past
``MAX_AUTO_FIXED``.

The engine only reads its input. Promoted banners are returned in
``to_enable`` and the caller is responsible for persisting them.
"""
from datetime import datetime
from typing import List, NamedTuple, Sequence

from banner_service.core.timeutil import as_utc
from banner_service.models.banner import Banner

MIN_BANNERS = 2
MAX_AUTO_FIXED = 2


class ActivationResult(NamedTuple):
    active: List[Banner]
    to_enable: List[Banner]


def _by_priority(banners):
    return sorted(banners, key=lambda b: b.priority)


def is_within_window(banner: Banner, now: datetime) -> bool:
    start = as_utc(banner.start_date)
    end = as_utc(banner.end_date)
    if start is not None and start > now:
        return False
    if end is not None and end < now:
        return False
    return True


def compute_active_banners(banners: Sequence[Banner], now: datetime) -> ActivationResult:
    now = as_utc(now)
    timed = [b for b in banners if not b.is_fixed]
    fixed = [b for b in banners if b.is_fixed]

    active_timed = _by_priority(b for b in timed if b.is_enabled and is_within_window(b, now))
    enabled_fixed = _by_priority(b for b in fixed if b.is_enabled)

    to_enable: List[Banner] = []
    total = len(active_timed) + len(enabled_fixed)
    if total < MIN_BANNERS:
        candidates = _by_priority(b for b in fixed if not b.is_enabled)
        can_auto_enable = min(MIN_BANNERS - total, MAX_AUTO_FIXED - len(enabled_fixed))
        if can_auto_enable > 0:
            to_enable = candidates[:can_auto_enable]

    final_fixed = _by_priority(enabled_fixed + to_enable)
    return ActivationResult(active_timed + final_fixed, to_enable)
