"""Check package.json dependencies for dependency confusion risk.

Names declared in a manifest but missing from the npm registry can be
registered by anyone. Manifests come from a local path or from GitHub code
searches collected by GitDorker; every request is paced by a shared
RateLimiter.
"""

from .cli import main
from .manifest import load_manifest, parse_manifest
from .models import CheckSummary, Manifest
from .rate_limiter import RateLimiter

__all__ = ["main", "load_manifest", "parse_manifest", "CheckSummary", "Manifest", "RateLimiter"]

if __name__ == "__main__":
    main()
