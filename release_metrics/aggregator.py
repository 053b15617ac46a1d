"""
Per-release download statistics.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Asset, ReleaseRecord, ReleaseStats
from .time_utils import days_between, ensure_utc, utc_now


logger = logging.getLogger(__name__)

# Checksum sidecars and version marker files.
IGNORE_ASSET_PATTERN = re.compile(r"\.sha256|VERSION")


def is_ignored_asset(name: str) -> bool:
    return IGNORE_ASSET_PATTERN.search(name) is not None


def count_downloads(assets: Iterable[Asset]) -> Tuple[Dict[str, int], int]:
    """Return per-asset download counts and their total, skipping ignored assets."""
    downloads: Dict[str, int] = {}
    total = 0
    for asset in assets:
        if is_ignored_asset(asset.name):
            continue
        downloads[asset.name] = asset.download_count
        total += asset.download_count
    return downloads, total


def downloads_per_day(downloads_total: int, days_active: float) -> float:
    """Download rate over the active window.

    A zero-length window reports the total itself rather than dividing by zero.
    """
    if days_active <= 0:
        return float(downloads_total)
    return downloads_total / days_active


def download_ratios(downloads: Dict[str, int], downloads_total: int) -> Dict[str, float]:
    if downloads_total <= 0:
        return {}
    return {name: count / downloads_total for name, count in downloads.items()}


def aggregate_releases(
    records: Iterable[ReleaseRecord], now: Optional[datetime] = None
) -> List[ReleaseStats]:
    """Annotate releases with their active window and download statistics.

    Args:
        records: Releases ordered newest first
        now: Reference time closing the newest release's window (default: current time)

    Returns:
        ReleaseStats in the same order as ``records``
    """
    horizon = ensure_utc(now) if now is not None else utc_now()

    # Newest to oldest: each release stays active until the next newer stable one.
    windows: List[Tuple[ReleaseRecord, datetime, Dict[str, int], int]] = []
    for record in records:
        downloads, total = count_downloads(record.assets)
        windows.append((record, horizon, downloads, total))
        if record.is_stable and record.published_at is not None:
            horizon = ensure_utc(record.published_at)

    result = []
    for record, active_until, downloads, total in windows:
        if record.published_at is None:
            days_active = 0.0
        else:
            days_active = days_between(record.published_at, active_until)
            if days_active < 0:
                logger.warning(
                    "Release %s published after %s; treating its active window as empty",
                    record.name,
                    active_until.isoformat(),
                )
                active_until = ensure_utc(record.published_at)
                days_active = 0.0

        result.append(ReleaseStats(
            name=record.name,
            tag_name=record.tag_name,
            draft=record.draft,
            prerelease=record.prerelease,
            published_at=record.published_at,
            active_until=active_until,
            days_active=days_active,
            downloads_total=total,
            downloads_per_day=downloads_per_day(total, days_active),
            downloads=downloads,
            download_ratios=download_ratios(downloads, total),
            html_url=record.html_url,
        ))
    return result
