"""
Interfaces for release sources and report renderers.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from .models import ReleaseRecord, ReleaseStats, RepositoryId


class ReleaseSource(Protocol):
    """Provide the complete release history of a repository, newest first."""

    def list_releases(self, repository: RepositoryId) -> List[ReleaseRecord]:
        ...


class ReportRenderer(Protocol):
    """Turn aggregated release statistics into a finished document."""

    def render(
        self, repository: str, command: str, releases: Sequence[ReleaseStats]
    ) -> str:
        ...
