from datetime import datetime, timedelta, timezone

import pytest

from release_metrics.models import Asset, ReleaseRecord


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_record(
    name: str,
    days_ago: float,
    assets=(),
    draft: bool = False,
    prerelease: bool = False,
) -> ReleaseRecord:
    return ReleaseRecord(
        name=name,
        tag_name=name,
        draft=draft,
        prerelease=prerelease,
        published_at=None if draft else NOW - timedelta(days=days_ago),
        assets=tuple(Asset(n, c) for n, c in assets),
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def three_releases():
    """Stable releases at T-0, T-15 and T-30 with 0, 200 and 100 downloads."""
    return [
        make_record("v3", 0),
        make_record("v2", 15, [("tool-linux.tar.gz", 150), ("tool-darwin.tar.gz", 50)]),
        make_record("v1", 30, [("tool-linux.tar.gz", 100)]),
    ]


@pytest.fixture
def record_factory():
    return make_record
