"""CLI for checking package.json dependencies against the npm registry."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .checker import check_dependencies
from .exceptions import AuthError, ManifestParseError, ReadError
from .gitdorker import process_gitdorker_results
from .github import GitHubClient
from .manifest import load_manifest
from .rate_limiter import RateLimiter
from .registry import RegistryClient
from .report import Reporter
from .settings import get_settings


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="npm-checker",
        description="Detect dependency confusion risk in package.json files",
        add_help=False,
    )
    parser.add_argument(
        "manifest",
        nargs="?",
        type=Path,
        help="Path to the package.json to check",
    )
    parser.add_argument(
        "-h",
        "-help",
        "--help",
        dest="help",
        action="store_true",
        help="Display help",
    )
    parser.add_argument(
        "--gitdorker",
        type=Path,
        default=None,
        help="Path to GitDorker results file",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub Personal Access Token (default: GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--requests-per-minute",
        type=positive_int,
        default=None,
        help="Request rate for the rate limiter (default: 29)",
    )
    parser.add_argument(
        "--registry-url",
        default=None,
        help="npm registry base URL (default: https://registry.npmjs.org)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def resolve_token(token: str | None) -> str:
    """Pick the GitHub token from the CLI flag, falling back to settings."""
    token = token or get_settings().github_token
    if not token:
        raise AuthError("GitHub token is required for processing GitDorker results")
    return token


def main(argv: list[str] | None = None, reporter: Reporter | None = None) -> None:
    args = build_parser().parse_args(argv)
    reporter = reporter or Reporter()
    configure_logging(args.verbose)

    settings = get_settings()
    limiter = RateLimiter(
        requests_per_minute=(
            settings.requests_per_minute if args.requests_per_minute is None else args.requests_per_minute
        ),
        burst=settings.rate_limit_burst,
    )
    registry_url = args.registry_url or settings.npm_registry_url

    if args.gitdorker:
        try:
            token = resolve_token(args.token)
        except AuthError as e:
            reporter.error(str(e))
            sys.exit(1)

        with (
            RegistryClient(limiter, registry_url, timeout=settings.request_timeout) as registry,
            GitHubClient(token, limiter, timeout=settings.request_timeout) as github,
        ):
            try:
                stats = process_gitdorker_results(args.gitdorker, github, registry, reporter)
            except ReadError as e:
                reporter.error(str(e))
                sys.exit(1)
        reporter.bulk_summary(stats, limiter)
        return

    if args.help or args.manifest is None:
        reporter.help()
        return

    reporter.info(f"Reading package.json from: {args.manifest}")
    try:
        manifest = load_manifest(args.manifest)
    except (ReadError, ManifestParseError) as e:
        reporter.error(f"Error reading package.json: {e}")
        sys.exit(1)

    reporter.success("Successfully parsed package.json")
    reporter.plain(f"Found {len(manifest)} dependencies\n")

    with RegistryClient(limiter, registry_url, timeout=settings.request_timeout) as registry:
        summary = check_dependencies(manifest, registry, reporter)
    reporter.summary(summary)


if __name__ == "__main__":
    main()
