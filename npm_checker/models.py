"""Data models and constants for dependency checking."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

MANIFEST_FILENAME = "package.json"
GITHUB_SEARCH_ACCEPT = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class Manifest:
    """Dependencies declared by one package.json, keyed by package name."""

    dependencies: Mapping[str, str]
    source: str = ""

    def __post_init__(self):
        # Loaded manifests are read-only
        object.__setattr__(self, "dependencies", MappingProxyType(dict(self.dependencies)))

    def __len__(self) -> int:
        return len(self.dependencies)


@dataclass(frozen=True)
class SearchResultItem:
    """One code search hit: the web blob URL and its raw-content twin."""

    html_url: str
    raw_url: str


@dataclass
class CheckSummary:
    """Outcome counts for a batch of registry existence checks."""

    exists: int = 0
    missing: int = 0
    errors: int = 0
    missing_names: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.exists + self.missing + self.errors

    def merge(self, other: "CheckSummary") -> None:
        self.exists += other.exists
        self.missing += other.missing
        self.errors += other.errors
        self.missing_names.extend(other.missing_names)


@dataclass
class BulkStats:
    """Counters for one pass over a GitDorker results file."""

    searches: int = 0
    search_errors: int = 0
    manifests: int = 0
    manifests_skipped: int = 0
    summary: CheckSummary = field(default_factory=CheckSummary)
