from datetime import timedelta

from banner_service.services.activation import MAX_AUTO_FIXED, compute_active_banners


def titles(banners):
    return [b.title for b in banners]


def test_empty_collection_yields_nothing(now):
    result = compute_active_banners([], now)
    assert result.active == []
    assert result.to_enable == []


def test_timed_banner_plus_disabled_fixed_is_auto_enabled(banner_factory, now):
    timed = banner_factory(title="timed", priority=1)
    fixed = banner_factory(title="fixed", is_fixed=True, is_enabled=False, priority=1)

    active, to_enable = compute_active_banners([fixed, timed], now)

    assert active == [timed, fixed]
    assert to_enable == [fixed]


def test_only_two_lowest_priority_fixed_banners_are_promoted(banner_factory, now):
    banners = [
        banner_factory(title=f"fixed-{p}", is_fixed=True, is_enabled=False, priority=p)
        for p in (3, 1, 2)
    ]

    active, to_enable = compute_active_banners(banners, now)

    assert titles(to_enable) == ["fixed-1", "fixed-2"]
    assert titles(active) == ["fixed-1", "fixed-2"]
    assert all(not b.is_enabled for b in banners)


def test_timed_banners_precede_fixed_regardless_of_priority(banner_factory, now):
    banners = [
        banner_factory(title="fixed-0", is_fixed=True, priority=0),
        banner_factory(title="timed-9", priority=9),
        banner_factory(title="fixed-5", is_fixed=True, priority=5),
        banner_factory(title="timed-3", priority=3),
    ]

    active, to_enable = compute_active_banners(banners, now)

    assert titles(active) == ["timed-3", "timed-9", "fixed-0", "fixed-5"]
    assert to_enable == []


def test_window_bounds_are_inclusive_and_open_ended(banner_factory, now):
    starts_now = banner_factory(title="starts-now", start_date=now, priority=1)
    ends_now = banner_factory(title="ends-now", end_date=now, priority=2)
    open_ended = banner_factory(title="open", start_date=None, end_date=None, priority=3)
    future = banner_factory(title="future", start_date=now + timedelta(hours=1), end_date=now + timedelta(days=2))
    expired = banner_factory(title="expired", start_date=now - timedelta(days=3), end_date=now - timedelta(seconds=1))
    disabled = banner_factory(title="disabled", is_enabled=False)

    active, _ = compute_active_banners([future, expired, disabled, open_ended, ends_now, starts_now], now)

    assert titles(active) == ["starts-now", "ends-now", "open"]


def test_naive_dates_are_treated_as_utc(banner_factory, now):
    naive_now = now.replace(tzinfo=None)
    banner = banner_factory(
        title="naive",
        start_date=naive_now - timedelta(minutes=1),
        end_date=naive_now + timedelta(minutes=1),
    )
    active, _ = compute_active_banners([banner], now)
    assert active == [banner]


def test_no_promotion_when_minimum_already_met(banner_factory, now):
    banners = [
        banner_factory(title="t1", priority=1),
        banner_factory(title="t2", priority=2),
        banner_factory(title="idle", is_fixed=True, is_enabled=False, priority=0),
    ]
    active, to_enable = compute_active_banners(banners, now)
    assert titles(active) == ["t1", "t2"]
    assert to_enable == []


def test_promotion_fills_only_the_shortfall(banner_factory, now):
    banners = [
        banner_factory(title="enabled-fixed", is_fixed=True, priority=4),
        banner_factory(title="idle-1", is_fixed=True, is_enabled=False, priority=1),
        banner_factory(title="idle-2", is_fixed=True, is_enabled=False, priority=2),
    ]

    active, to_enable = compute_active_banners(banners, now)

    assert titles(to_enable) == ["idle-1"]
    # Promoted banners are merged into the fixed segment by priority
    assert titles(active) == ["idle-1", "enabled-fixed"]


def test_cap_counts_already_enabled_fixed_banners(banner_factory, now):
    expired = banner_factory(title="expired", end_date=now - timedelta(days=1))
    banners = [
        expired,
        banner_factory(title="fixed-a", is_fixed=True, is_enabled=False, priority=1),
    ]
    # Nothing visible: at most MAX_AUTO_FIXED fixed banners may end up enabled
    active, to_enable = compute_active_banners(banners, now)
    assert len(to_enable) <= MAX_AUTO_FIXED
    assert titles(active) == ["fixed-a"]


def test_single_enabled_fixed_with_timed_shortfall(banner_factory, now):
    banners = [
        banner_factory(title="f1", is_fixed=True, priority=2),
        banner_factory(title="f2", is_fixed=True, priority=1, is_enabled=False),
        banner_factory(title="f3", is_fixed=True, priority=0, is_enabled=False),
    ]
    active, to_enable = compute_active_banners(banners, now)
    assert titles(to_enable) == ["f3"]
    assert titles(active) == ["f3", "f1"]
    enabled_fixed_after = [b for b in active if b.is_fixed]
    assert len(enabled_fixed_after) <= MAX_AUTO_FIXED


def test_equal_priorities_keep_input_order(banner_factory, now):
    first = banner_factory(title="first", priority=1)
    second = banner_factory(title="second", priority=1)
    third = banner_factory(title="third", priority=1)

    active, _ = compute_active_banners([first, second, third], now)

    assert active == [first, second, third]


def test_segments_are_sorted_and_timed_first(banner_factory, now):
    banners = [
        banner_factory(title=f"b{i}", priority=(i * 7) % 5, is_fixed=bool(i % 2), is_enabled=bool(i % 3))
        for i in range(12)
    ]
    active, _ = compute_active_banners(banners, now)

    kinds = [b.is_fixed for b in active]
    assert kinds == sorted(kinds)
    timed = [b.priority for b in active if not b.is_fixed]
    fixed = [b.priority for b in active if b.is_fixed]
    assert timed == sorted(timed)
    assert fixed == sorted(fixed)


def test_repeated_runs_give_identical_results(banner_factory, now):
    banners = [
        banner_factory(title="timed", priority=2),
        banner_factory(title="idle-1", is_fixed=True, is_enabled=False, priority=5),
        banner_factory(title="idle-2", is_fixed=True, is_enabled=False, priority=3),
    ]
    first = compute_active_banners(banners, now)
    second = compute_active_banners(banners, now)
    assert first.active == second.active
    assert first.to_enable == second.to_enable
    assert titles(first.to_enable) == ["idle-2"]
