"""
Core data models for release download metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class RepositoryId:
    """An organization/project pair identifying a hosted repository."""

    org: str
    project: str

    @property
    def label(self) -> str:
        return f"{self.org}/{self.project}"


@dataclass(frozen=True)
class Asset:
    """A downloadable file attached to a release."""

    name: str
    download_count: int


@dataclass(frozen=True)
class ReleaseRecord:
    """A release as returned by the release source."""

    name: str
    tag_name: str
    draft: bool
    prerelease: bool
    published_at: Optional[datetime]
    assets: Tuple[Asset, ...] = ()
    html_url: Optional[str] = None

    @property
    def is_stable(self) -> bool:
        return not self.draft and not self.prerelease


@dataclass(frozen=True)
class ReleaseStats:
    """Computed download statistics for a single release."""

    name: str
    tag_name: str
    draft: bool
    prerelease: bool
    published_at: Optional[datetime]
    active_until: datetime
    days_active: float
    downloads_total: int
    downloads_per_day: float
    downloads: Dict[str, int] = field(default_factory=dict)
    download_ratios: Dict[str, float] = field(default_factory=dict)
    html_url: Optional[str] = None

    @property
    def is_stable(self) -> bool:
        return not self.draft and not self.prerelease
