"""
GitHub releases API client.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import requests
from tqdm import tqdm

from . import __version__
from .exceptions import FetchError
from .interfaces import ReleaseSource
from .models import Asset, ReleaseRecord, RepositoryId
from .time_utils import parse_timestamp


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
DEFAULT_TIMEOUT = 30.0
API_VERSION = "2022-11-28"


def release_from_json(data: Dict[str, Any]) -> ReleaseRecord:
    """Convert one element of the releases API response into a ReleaseRecord."""
    tag_name = data.get("tag_name") or ""
    name = data.get("name") or tag_name
    assets = tuple(
        Asset(name=asset.get("name") or "", download_count=int(asset.get("download_count") or 0))
        for asset in data.get("assets") or []
    )
    published = data.get("published_at")
    published_at = parse_timestamp(published)
    if published and published_at is None:
        raise FetchError(f"Release {tag_name or name!r} has an unparseable published_at: {published!r}")
    return ReleaseRecord(
        name=name,
        tag_name=tag_name,
        draft=bool(data.get("draft")),
        prerelease=bool(data.get("prerelease")),
        published_at=published_at,
        assets=assets,
        html_url=data.get("html_url"),
    )


class GitHubReleaseSource(ReleaseSource):
    """Fetch the full release list of a repository, following pagination."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        per_page: int = DEFAULT_PER_PAGE,
        timeout: float = DEFAULT_TIMEOUT,
        deadline: Optional[float] = None,
        progress: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the release source.

        Args:
            token: Bearer token sent with every request
            api_url: Base URL of the REST API
            per_page: Releases requested per page
            timeout: Per-request timeout in seconds
            deadline: Overall time limit for the fetch loop in seconds, or None
            progress: Show a page counter on stderr
            session: Session to use instead of a fresh one
        """
        self.api_url = api_url.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout
        self.deadline = deadline
        self.progress = progress
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"release-metrics/{__version__}",
        })

    def __enter__(self) -> "GitHubReleaseSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def releases_url(self, repository: RepositoryId) -> str:
        return f"{self.api_url}/repos/{repository.org}/{repository.project}/releases"

    def list_releases(self, repository: RepositoryId) -> List[ReleaseRecord]:
        """Return every release of ``repository`` in API order (newest first).

        Raises:
            FetchError: on any failed page; no partial result is returned.
        """
        logger.info("Downloading releases for %s ...", repository.label)
        started = time.monotonic()
        result: List[ReleaseRecord] = []

        url: Optional[str] = self.releases_url(repository)
        params: Optional[Dict[str, Any]] = {"per_page": self.per_page}
        page = 0

        with tqdm(desc=repository.label, unit="page", disable=not self.progress) as pbar:
            while url:
                if self.deadline is not None and time.monotonic() - started > self.deadline:
                    raise FetchError(
                        f"Deadline of {self.deadline:g}s exceeded after {page} page(s) "
                        f"of {repository.label}"
                    )
                page += 1
                batch, url = self._get_page(url, params)
                params = None
                logger.debug("Page %d of %s: %d release(s)", page, repository.label, len(batch))
                try:
                    result.extend(release_from_json(item) for item in batch)
                except (AttributeError, TypeError, ValueError) as e:
                    raise FetchError(f"Page {page} of {repository.label} returned a malformed release: {e}") from e
                pbar.update(1)

        logger.info("Fetched %d release(s) for %s", len(result), repository.label)
        return result

    def _get_page(self, url: str, params: Optional[Dict[str, Any]]):
        try:
            with self.session.get(url, params=params, timeout=self.timeout) as response:
                response.raise_for_status()
                batch = response.json()
                next_url = response.links.get("next", {}).get("url")
        except requests.RequestException as e:
            raise FetchError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"GET {url} returned invalid JSON: {e}") from e

        if not isinstance(batch, list):
            raise FetchError(f"GET {url} returned {type(batch).__name__}, expected a list")
        return batch, next_url
