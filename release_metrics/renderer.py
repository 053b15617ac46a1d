"""
HTML report rendering.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from .exceptions import EmptyReleaseList, RenderError
from .interfaces import ReportRenderer
from .models import ReleaseStats
from .time_utils import format_date, utc_now


logger = logging.getLogger(__name__)

CHARTS_LOADER_URL = "https://www.gstatic.com/charts/loader.js"
TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def release_frequency_rows(releases: Sequence[ReleaseStats]) -> List[list]:
    """Days active per stable release, annotated with the rounded day count."""
    return [
        [r.name, r.days_active, f"{r.days_active:.0f}"]
        for r in releases
        if r.is_stable
    ]


def asset_mix_rows(latest: ReleaseStats) -> List[list]:
    return [
        [name, count, f"{name} ({count})"]
        for name, count in sorted(latest.downloads.items())
    ]


def downloads_per_day_rows(releases: Sequence[ReleaseStats]) -> List[list]:
    return [
        [r.name, r.downloads_per_day, str(r.downloads_total)]
        for r in releases
        if r.is_stable
    ]


def downloads_over_time_rows(releases: Sequence[ReleaseStats]) -> List[list]:
    return [
        [format_date(r.active_until), r.downloads_per_day]
        for r in releases
        if r.is_stable
    ]


class HtmlReportRenderer(ReportRenderer):
    """Render release statistics into a self-contained HTML page."""

    def __init__(self, charts_loader_url: str = CHARTS_LOADER_URL) -> None:
        self.charts_loader_url = charts_loader_url
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            undefined=StrictUndefined,
        )

    def render(
        self,
        repository: str,
        command: str,
        releases: Sequence[ReleaseStats],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the report.

        Args:
            repository: Repository label shown as the page title
            command: Invocation command line shown in the report
            releases: Aggregated releases, newest first
            generated_at: Timestamp printed in the subtitle (default: now)

        Returns:
            The HTML document

        Raises:
            EmptyReleaseList: if ``releases`` is empty
            RenderError: if the template fails to render
        """
        if not releases:
            raise EmptyReleaseList(f"No releases to render for {repository}")

        latest = releases[0]
        try:
            template = self.env.get_template(TEMPLATE_NAME)
            html = template.render(
                repository=repository,
                command=command,
                generated_at=format_date(generated_at or utc_now()),
                charts_loader_url=self.charts_loader_url,
                releases=releases,
                latest=latest,
                release_frequency=release_frequency_rows(releases),
                asset_mix=asset_mix_rows(latest),
                downloads_per_day=downloads_per_day_rows(releases),
                downloads_over_time=downloads_over_time_rows(releases),
            )
        except TemplateError as e:
            raise RenderError(f"Failed to render {TEMPLATE_NAME}: {e}") from e

        logger.debug("Rendered %d bytes of HTML for %s", len(html), repository)
        return html
