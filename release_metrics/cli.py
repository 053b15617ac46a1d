"""
Command-line interface for the release metrics tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .analyzer import ReleaseAnalyzer
from .credentials import read_token
from .exceptions import (
    CredentialReadError,
    EmptyReleaseList,
    FetchError,
    InvalidRepositoryIdentifier,
    RenderError,
)
from .github_source import DEFAULT_API_URL, DEFAULT_TIMEOUT, GitHubReleaseSource
from .renderer import HtmlReportRenderer
from .repository import parse_repository
from .reporting import export_release_csv, export_worksheets, log_summary, save_results_json


logger = logging.getLogger(__name__)

PROG = "release-metrics"
USAGE = f"usage: {PROG} --repo <repository> --token-path <github token path>"
EXIT_USAGE = 2
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Render GitHub release download statistics as an HTML report on stdout",
    )

    parser.add_argument(
        "--repo",
        default="",
        help="GitHub repository URL or <org>/<project>"
    )

    parser.add_argument(
        "--token-path",
        default="",
        help="Path to a file containing a GitHub access token"
    )

    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help=f"Base URL of the GitHub REST API. Default: {DEFAULT_API_URL}"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds. Default: {DEFAULT_TIMEOUT:g}"
    )

    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Give up fetching releases after this many seconds"
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a page counter on stderr while fetching"
    )

    parser.add_argument(
        "--export-csv",
        type=Path,
        default=None,
        help="Also write per-release statistics to this CSV file"
    )

    parser.add_argument(
        "--export-xlsx",
        type=Path,
        default=None,
        help="Also write release and asset sheets to this Excel file"
    )

    parser.add_argument(
        "--export-json",
        type=Path,
        default=None,
        help="Also write the analysis results to this JSON file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def command_line(argv: List[str]) -> str:
    """Reconstruct the invocation for display in the report."""
    return " ".join([Path(sys.argv[0]).name or PROG] + list(argv))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname).1s %(asctime)s %(name)s] %(message)s",
        stream=sys.stderr,
    )


def _fail(message: str, error: Exception) -> NoReturn:
    logger.error("%s: %s", message, error)
    sys.exit(EXIT_FAILURE)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)

    if not args.repo or not args.token_path:
        print(USAGE)
        sys.exit(EXIT_USAGE)

    _configure_logging(args.verbose)

    try:
        token = read_token(args.token_path)
    except CredentialReadError as e:
        _fail("token file", e)

    try:
        repository = parse_repository(args.repo)
    except InvalidRepositoryIdentifier as e:
        _fail("invalid repository", e)

    with GitHubReleaseSource(
        token,
        api_url=args.api_url,
        timeout=args.timeout,
        deadline=args.deadline,
        progress=args.progress,
    ) as source:
        analyzer = ReleaseAnalyzer(repository, source)
        try:
            results = analyzer.analyze()
        except (FetchError, EmptyReleaseList) as e:
            _fail("gather failed", e)

    log_summary(results)

    try:
        html = HtmlReportRenderer().render(
            results["repository"],
            command_line(argv),
            results["releases"],
            generated_at=results["generated_at"],
        )
    except (RenderError, EmptyReleaseList) as e:
        _fail("render failed", e)

    try:
        if args.export_csv:
            logger.info("Release CSV saved to: %s", export_release_csv(results["releases"], args.export_csv))
        if args.export_xlsx:
            logger.info("Worksheets saved to: %s", export_worksheets(results["releases"], args.export_xlsx))
        if args.export_json:
            logger.info("Results saved to: %s", save_results_json(results, args.export_json))
    except OSError as e:
        _fail("export failed", e)

    sys.stdout.write(html)


if __name__ == "__main__":
    main()
