"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Sequence

import pandas as pd

from .models import ReleaseStats


logger = logging.getLogger(__name__)

RELEASE_COLUMNS = [
    "name",
    "tag_name",
    "draft",
    "prerelease",
    "published_at",
    "active_until",
    "days_active",
    "downloads_total",
    "downloads_per_day",
    "html_url",
]

ASSET_COLUMNS = ["release", "tag_name", "asset", "downloads", "ratio"]


def log_summary(results: Dict) -> None:
    latest = results["latest"]
    logger.info("=" * 60)
    logger.info("RELEASE STATISTICS")
    logger.info("=" * 60)
    logger.info("Repository: %s", results["repository"])
    logger.info("Releases: %s (%s stable)", results["num_releases"], results["num_stable"])
    logger.info("Total downloads: %s", results["downloads_total"])
    logger.info(
        "Latest: %s (%.2f downloads/day over %.1f days)",
        latest.name,
        latest.downloads_per_day,
        latest.days_active,
    )
    logger.info("=" * 60)


def releases_to_frame(releases: Sequence[ReleaseStats]) -> pd.DataFrame:
    """One row per release, in the given order."""
    rows = [{col: getattr(r, col) for col in RELEASE_COLUMNS} for r in releases]
    df = pd.DataFrame(rows, columns=RELEASE_COLUMNS)
    for col in ("published_at", "active_until"):
        df[col] = pd.to_datetime(df[col], utc=True)
    return df


def assets_to_frame(releases: Sequence[ReleaseStats]) -> pd.DataFrame:
    """One row per counted asset of every release."""
    rows = []
    for r in releases:
        for asset, count in r.downloads.items():
            rows.append({
                "release": r.name,
                "tag_name": r.tag_name,
                "asset": asset,
                "downloads": count,
                "ratio": r.download_ratios.get(asset),
            })
    return pd.DataFrame(rows, columns=ASSET_COLUMNS)


def _strip_timezones(df: pd.DataFrame) -> pd.DataFrame:
    df_copy = df.copy()
    for col in df_copy.columns:
        if isinstance(df_copy[col].dtype, pd.DatetimeTZDtype):
            df_copy[col] = df_copy[col].dt.tz_convert('UTC').dt.tz_localize(None)
    return df_copy


def export_release_csv(releases: Sequence[ReleaseStats], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    releases_to_frame(releases).to_csv(path, index=False)
    return path


def export_worksheets(releases: Sequence[ReleaseStats], path: Path) -> Path:
    """Write release and asset sheets to an Excel workbook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine='openpyxl') as writer:
        _strip_timezones(releases_to_frame(releases)).to_excel(
            writer, sheet_name="releases", index=False
        )
        assets_to_frame(releases).to_excel(writer, sheet_name="assets", index=False)
    return path


def save_results_json(results: Dict, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = dict(results)
    payload["releases"] = [asdict(r) for r in results["releases"]]
    payload["latest"] = results["latest"].name
    with open(path, 'w') as f:
        json.dump(payload, f, indent=2, default=str)
    return path
