import math
from datetime import timedelta

import pytest

from release_metrics.aggregator import (
    aggregate_releases,
    count_downloads,
    downloads_per_day,
    is_ignored_asset,
)
from release_metrics.models import Asset


def test_three_stable_releases(three_releases, now):
    newest, middle, oldest = aggregate_releases(three_releases, now=now)

    assert oldest.days_active == pytest.approx(15)
    assert oldest.downloads_total == 100
    assert oldest.downloads_per_day == pytest.approx(6.67, abs=0.01)

    assert middle.days_active == pytest.approx(15)
    assert middle.downloads_total == 200
    assert middle.downloads_per_day == pytest.approx(13.33, abs=0.01)

    assert newest.days_active == 0
    assert newest.downloads_total == 0
    assert newest.downloads_per_day == 0.0


def test_newest_release_active_until_now(three_releases, now):
    releases = aggregate_releases(three_releases, now=now)
    assert releases[0].active_until == now


def test_active_until_never_precedes_published(three_releases, now):
    for release in aggregate_releases(three_releases, now=now):
        assert release.active_until >= release.published_at
        assert release.days_active >= 0


def test_zero_window_reports_total(record_factory, now):
    (release,) = aggregate_releases(
        [record_factory("v1", 0, [("tool.zip", 42)])], now=now
    )
    assert release.days_active == 0
    assert release.downloads_per_day == 42.0
    assert math.isfinite(release.downloads_per_day)


def test_ignored_assets_are_not_counted(record_factory, now):
    record = record_factory(
        "v1",
        10,
        [("tool.zip", 30), ("checksums.sha256", 500), ("tool.zip.sha256", 7), ("VERSION", 9)],
    )
    (release,) = aggregate_releases([record], now=now)

    assert release.downloads == {"tool.zip": 30}
    assert release.downloads_total == 30
    assert release.download_ratios == {"tool.zip": 1.0}


@pytest.mark.parametrize(
    "name,ignored",
    [
        ("checksums.sha256", True),
        ("tool.tar.gz.sha256", True),
        ("VERSION", True),
        ("tool.tar.gz", False),
        ("version.txt", False),
    ],
)
def test_is_ignored_asset(name, ignored):
    assert is_ignored_asset(name) is ignored


def test_downloads_sum_to_total_and_ratios_to_one(three_releases, now):
    for release in aggregate_releases(three_releases, now=now):
        assert sum(release.downloads.values()) == release.downloads_total
        if release.downloads_total > 0:
            assert sum(release.download_ratios.values()) == pytest.approx(1.0)
        else:
            assert release.download_ratios == {}


def test_draft_and_prerelease_do_not_advance_horizon(record_factory, now):
    records = [
        record_factory("v2.0.0-rc1", 2, [("a.zip", 5)], prerelease=True),
        record_factory("v2.0.0-draft", 0, draft=True),
        record_factory("v1.0.0", 10, [("a.zip", 100)]),
    ]
    prerelease, draft, stable = aggregate_releases(records, now=now)

    assert prerelease.active_until == now
    assert draft.active_until == now
    assert stable.active_until == now
    assert stable.days_active == pytest.approx(10)
    assert stable.downloads_per_day == pytest.approx(10)


def test_prerelease_window_ends_at_next_stable(record_factory, now):
    records = [
        record_factory("v2", 5),
        record_factory("v2-rc1", 8, prerelease=True),
        record_factory("v1", 20),
    ]
    newest, rc, oldest = aggregate_releases(records, now=now)

    assert rc.active_until == newest.published_at
    assert rc.days_active == pytest.approx(3)
    assert oldest.active_until == newest.published_at
    assert oldest.days_active == pytest.approx(15)


def test_unpublished_draft_has_empty_window(record_factory, now):
    (draft,) = aggregate_releases([record_factory("next", 0, [("a.zip", 3)], draft=True)], now=now)
    assert draft.published_at is None
    assert draft.days_active == 0
    assert draft.downloads_per_day == 3.0


def test_release_after_reference_time_is_clamped(record_factory, now):
    (release,) = aggregate_releases([record_factory("v1", 1)], now=now - timedelta(days=2))
    assert release.days_active == 0
    assert release.active_until == release.published_at


def test_count_downloads_keeps_asset_names():
    downloads, total = count_downloads([Asset("a", 1), Asset("b", 2), Asset("VERSION", 3)])
    assert downloads == {"a": 1, "b": 2}
    assert total == 3


def test_downloads_per_day_divides():
    assert downloads_per_day(30, 3.0) == 10.0
    assert downloads_per_day(30, 0.0) == 30.0


def test_empty_input(now):
    assert aggregate_releases([], now=now) == []
