"""Check dependencies of package.json files surfaced by GitDorker.

GitDorker output is free-form text. Lines holding a github.com code search
URL scoped to ``filename:package.json`` are turned into code search API
calls, and every manifest the search returns is downloaded and checked.
"""

import logging
from pathlib import Path

from .checker import check_dependencies
from .exceptions import ManifestParseError, NetworkError, ReadError, ResultsFileError
from .github import GitHubClient
from .models import BulkStats
from .registry import RegistryClient
from .report import Reporter
from .utils import iter_search_urls

logger = logging.getLogger(__name__)


def process_gitdorker_results(
    path: Path | str,
    github: GitHubClient,
    registry: RegistryClient,
    reporter: Reporter,
) -> BulkStats:
    """Stream a results file once, processing each matching search URL."""
    stats = BulkStats()
    try:
        f = open(path, encoding="utf-8", errors="replace")
    except OSError as e:
        raise ResultsFileError(f"Cannot read GitDorker results file {path}: {e.strerror or e}") from e

    with f:
        for search_url in iter_search_urls(f):
            process_search_results(search_url, github, registry, reporter, stats)
    return stats


def process_search_results(
    search_url: str,
    github: GitHubClient,
    registry: RegistryClient,
    reporter: Reporter,
    stats: BulkStats,
) -> None:
    reporter.plain(f"Processing results from: {search_url}")
    stats.searches += 1
    try:
        items = github.search_code(search_url)
    except NetworkError as e:
        logger.debug("Search failed for %s", search_url, exc_info=True)
        reporter.error(f"Error fetching search results: {e}")
        stats.search_errors += 1
        return

    if not items:
        reporter.plain("No results found")
        return

    for item in items:
        reporter.plain(f"Checking package.json: {item.raw_url}")
        try:
            manifest = github.fetch_manifest(item.raw_url)
        except (ReadError, ManifestParseError, NetworkError) as e:
            reporter.error(f"Error fetching package.json: {e}")
            stats.manifests_skipped += 1
            continue

        stats.manifests += 1
        stats.summary.merge(check_dependencies(manifest, registry, reporter))
        reporter.plain()
