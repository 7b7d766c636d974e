"""GitHub code search and raw content client using httpx.

Every request passes the shared RateLimiter gate and feeds the response's
rate limit headers back into it.
"""

import logging

import httpx

from .exceptions import ManifestReadError, NetworkError
from .manifest import parse_manifest
from .models import GITHUB_SEARCH_ACCEPT, Manifest, SearchResultItem
from .rate_limiter import RateLimiter
from .utils import to_api_search_url, to_raw_content_url

logger = logging.getLogger(__name__)


class GitHubClient:
    """Authenticated GitHub client for code search and manifest downloads."""

    def __init__(
        self,
        token: str,
        limiter: RateLimiter,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.limiter = limiter
        self._client = httpx.Client(
            headers={"Authorization": f"token {token}"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def _get(self, url: str, headers: dict | None = None) -> httpx.Response:
        self.limiter.acquire()
        try:
            resp = self._client.get(url, headers=headers)
        except httpx.RequestError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e
        self.limiter.update_from_headers(resp.headers)
        logger.debug("GET %s -> %s", url, resp.status_code)
        return resp

    def search_code(self, search_url: str) -> list[SearchResultItem]:
        """Run a github.com web search URL through the code search API.

        A body without a usable ``items`` list counts as no results.
        """
        api_url = to_api_search_url(search_url)
        resp = self._get(api_url, headers={"Accept": GITHUB_SEARCH_ACCEPT})

        try:
            body = resp.json()
        except (ValueError, RecursionError):
            logger.debug("Search response from %s is not JSON", api_url)
            return []
        items = body.get("items") if isinstance(body, dict) else None
        if not isinstance(items, list):
            if resp.status_code != httpx.codes.OK:
                logger.warning("Code search returned %s: %s", resp.status_code, body)
            return []

        results = []
        for item in items:
            html_url = item.get("html_url") if isinstance(item, dict) else None
            if not isinstance(html_url, str):
                continue
            try:
                results.append(SearchResultItem(html_url, to_raw_content_url(html_url)))
            except ValueError:
                logger.debug("Skipping unexpected search hit %s", html_url)
        return results

    def fetch_manifest(self, raw_url: str) -> Manifest:
        """Download and parse a package.json from raw.githubusercontent.com."""
        resp = self._get(raw_url)
        if not resp.is_success:
            raise ManifestReadError(f"HTTP {resp.status_code} fetching {raw_url}")
        return parse_manifest(resp.content, source=raw_url)

    def close(self):
        self._client.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc):
        self.close()
