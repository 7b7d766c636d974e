"""Helpers for GitHub search and content URLs."""

import re
from collections.abc import Iterable, Iterator
from urllib.parse import urlsplit, urlunsplit

from .models import MANIFEST_FILENAME

GITHUB_HOST = "github.com"
GITHUB_API_HOST = "api.github.com"
GITHUB_RAW_HOST = "raw.githubusercontent.com"

# Web code searches scoped to the manifest filename, as GitDorker prints them
SEARCH_URL_RE = re.compile(
    r"https://github\.com/search\?q=.*filename%3A" + re.escape(MANIFEST_FILENAME) + r".*"
)


def find_search_url(line: str) -> str | None:
    """Return the manifest search URL in a line of GitDorker output, if any."""
    match = SEARCH_URL_RE.search(line)
    return match.group(0) if match else None


def iter_search_urls(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        url = find_search_url(line.rstrip("\r\n"))
        if url:
            yield url


def to_api_search_url(search_url: str) -> str:
    """Rewrite a github.com web search URL into the code search API URL.

    >>> to_api_search_url("https://github.com/search?q=X")
    'https://api.github.com/search/code?q=X'
    """
    parts = urlsplit(search_url)
    if parts.netloc != GITHUB_HOST or parts.path != "/search":
        raise ValueError(f"Not a GitHub web search URL: {search_url}")
    return urlunsplit(("https", GITHUB_API_HOST, "/search/code", parts.query, parts.fragment))


def to_raw_content_url(html_url: str) -> str:
    """Rewrite a github.com blob URL into its raw.githubusercontent.com URL.

    >>> to_raw_content_url("https://github.com/org/repo/blob/main/package.json")
    'https://raw.githubusercontent.com/org/repo/main/package.json'
    """
    parts = urlsplit(html_url)
    segments = parts.path.split("/")
    # ["", owner, repo, "blob", ref, *path]
    if parts.netloc != GITHUB_HOST or len(segments) < 6 or segments[3] != "blob":
        raise ValueError(f"Not a GitHub blob URL: {html_url}")
    del segments[3]
    return urlunsplit(("https", GITHUB_RAW_HOST, "/".join(segments), "", ""))
