"""
Repository identifier parsing.
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

from .exceptions import InvalidRepositoryIdentifier
from .models import RepositoryId


def _segments(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


def parse_repository(raw: str) -> RepositoryId:
    """Return the organization and project for a URL or partial path.

    Accepts ``https://github.com/org/project`` style URLs as well as bare
    ``org/project`` fragments.

    Raises:
        InvalidRepositoryIdentifier: if fewer than two path segments are present.
    """
    value = (raw or "").strip()
    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidRepositoryIdentifier(f"Malformed repository URL {raw!r}: {e}") from e
    if hostname:
        parts = _segments(parsed.path)
    else:
        parts = _segments(value)

    if len(parts) < 2:
        raise InvalidRepositoryIdentifier(
            f"Expected <org>/<project> or a repository URL, got {raw!r}"
        )

    org, project = parts[0], parts[1]
    if project.endswith(".git"):
        project = project[: -len(".git")]
    if not project:
        raise InvalidRepositoryIdentifier(f"Missing project name in {raw!r}")
    return RepositoryId(org=org, project=project)
