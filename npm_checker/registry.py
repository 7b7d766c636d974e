"""npm registry existence checks."""

import logging

import httpx

from .exceptions import NetworkError
from .rate_limiter import RateLimiter
from .settings import NPM_REGISTRY_URL

logger = logging.getLogger(__name__)


class RegistryClient:
    """Asks the npm registry whether a package name is claimed.

    Any status other than 200 counts as "does not exist", so a 5xx or a
    blocked request reads the same as a real 404.
    """

    def __init__(
        self,
        limiter: RateLimiter,
        registry_url: str = NPM_REGISTRY_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.limiter = limiter
        self.registry_url = registry_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def package_url(self, name: str) -> str:
        # Names are embedded as-is; scoped or path-unsafe names are not escaped
        return f"{self.registry_url}/{name}"

    def exists(self, name: str) -> bool:
        url = self.package_url(name)
        self.limiter.acquire()
        try:
            resp = self._client.get(url)
        except httpx.RequestError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e
        logger.debug("GET %s -> %s", url, resp.status_code)
        return resp.status_code == httpx.codes.OK

    def close(self):
        self._client.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc):
        self.close()
