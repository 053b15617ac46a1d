#!/usr/bin/env python3
"""
Example script showing how to use the release-metrics library API.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from release_metrics.aggregator import aggregate_releases
from release_metrics.analyzer import ReleaseAnalyzer
from release_metrics.github_source import GitHubReleaseSource
from release_metrics.models import Asset, ReleaseRecord
from release_metrics.renderer import HtmlReportRenderer
from release_metrics.reporting import releases_to_frame
from release_metrics.repository import parse_repository


def example_offline_aggregation():
    """Example: Aggregate hand-made release records without the network."""
    print("="*60)
    print("Example 1: Offline Aggregation")
    print("="*60)

    now = datetime.now(timezone.utc)
    records = [
        ReleaseRecord("v1.2.0", "v1.2.0", False, False, now - timedelta(days=3),
                      (Asset("tool-linux.tar.gz", 90), Asset("checksums.sha256", 12))),
        ReleaseRecord("v1.2.0-rc1", "v1.2.0-rc1", False, True, now - timedelta(days=9),
                      (Asset("tool-linux.tar.gz", 4),)),
        ReleaseRecord("v1.1.0", "v1.1.0", False, False, now - timedelta(days=40),
                      (Asset("tool-linux.tar.gz", 600), Asset("tool-darwin.tar.gz", 150))),
    ]

    releases = aggregate_releases(records, now=now)
    print(releases_to_frame(releases)[["name", "days_active", "downloads_total", "downloads_per_day"]])

    html = HtmlReportRenderer().render("example/tool", "usage_examples.py", releases)
    output = Path("./output/example1.html")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"\nReport saved to: {output}")


def example_github_analysis(repo: str, token: str):
    """Example: Analyze a live GitHub repository."""
    print("\n" + "="*60)
    print(f"Example 2: GitHub Analysis ({repo})")
    print("="*60)

    with GitHubReleaseSource(token, progress=True) as source:
        results = ReleaseAnalyzer(parse_repository(repo), source).analyze()

    latest = results["latest"]
    print(f"\nRepository: {results['repository']}")
    print(f"Releases: {results['num_releases']} ({results['num_stable']} stable)")
    print(f"Total downloads: {results['downloads_total']}")
    print(f"Latest: {latest.name}, {latest.downloads_per_day:.2f} downloads/day")


if __name__ == "__main__":
    print("Release Metrics - Example Usage")
    print("="*60)

    example_offline_aggregation()

    token = os.environ.get("GITHUB_TOKEN")
    if token:
        try:
            example_github_analysis("kubernetes/minikube", token)
        except Exception as e:
            print(f"\nError running GitHub example: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print("\nSet GITHUB_TOKEN to also run the GitHub example.")
