"""
Release download analyzer tying the fetch and aggregation stages together.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from .aggregator import aggregate_releases
from .exceptions import EmptyReleaseList
from .interfaces import ReleaseSource
from .models import ReleaseRecord, ReleaseStats, RepositoryId
from .time_utils import ensure_utc, utc_now


logger = logging.getLogger(__name__)


class ReleaseAnalyzer:
    """Compute download statistics for every release of a repository."""

    def __init__(
        self,
        repository: RepositoryId,
        source: ReleaseSource,
        now: Optional[datetime] = None,
    ):
        """Initialize release analyzer.

        Args:
            repository: Repository to analyze
            source: Where release records come from
            now: Reference time closing the newest release's window (default: current time)
        """
        self.repository = repository
        self.source = source
        self.now = ensure_utc(now) if now is not None else utc_now()

    def fetch_releases(self) -> List[ReleaseRecord]:
        """Fetch all releases, newest first."""
        return self.source.list_releases(self.repository)

    def aggregate(self, records: List[ReleaseRecord]) -> List[ReleaseStats]:
        return aggregate_releases(records, now=self.now)

    def analyze(self) -> Dict[str, Any]:
        """Run complete analysis.

        Returns:
            Dictionary with analysis results

        Raises:
            EmptyReleaseList: if the repository has no releases
        """
        records = self.fetch_releases()
        if not records:
            raise EmptyReleaseList(f"No releases found for {self.repository.label}")

        releases = self.aggregate(records)
        stable = [r for r in releases if r.is_stable]

        return {
            'repository': self.repository.label,
            'generated_at': self.now,
            'releases': releases,
            'latest': releases[0],
            'num_releases': len(releases),
            'num_stable': len(stable),
            'downloads_total': sum(r.downloads_total for r in releases),
        }
