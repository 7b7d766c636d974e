"""Console output: per-package verdicts, summaries and the help screen."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import BulkStats, CheckSummary
from .rate_limiter import RateLimiter

LOGO = r"""
 _   _ ____  __  __    ____ _   _ _____ ____ _  _______ ____
| \ | |  _ \|  \/  |  / ___| | | | ____/ ___| |/ / ____|  _ \
|  \| | |_) | |\/| | | |   | |_| |  _|| |   | ' /|  _| | |_) |
| |\  |  __/| |  | | | |___|  _  | |__| |___| . \| |___|  _ <
|_| \_|_|   |_|  |_|  \____|_| |_|_____\____|_|\_\_____|_| \_\
"""

USAGE = [
    ("npm-checker /path/to/package.json", "Check dependencies in the specified package.json file"),
    (
        "npm-checker --gitdorker results.txt --token TOKEN",
        "Check every package.json found by GitDorker code searches",
    ),
    ("npm-checker -h, npm-checker -help", "Display this help message"),
]


class Reporter:
    """Colored status lines on a rich Console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)

    def info(self, message: str):
        self.console.print(escape(message), style="cyan")

    def success(self, message: str):
        self.console.print(escape(message), style="green")

    def error(self, message: str):
        self.console.print(escape(message), style="red")

    def plain(self, message: str = ""):
        self.console.print(escape(message))

    def checking(self, name: str, version: str):
        self.console.print(escape(f"Checking {name} (version {version}): "), end="")

    def verdict(self, exists: bool):
        if exists:
            self.console.print("✔ Exists", style="green")
        else:
            self.console.print("✘ Does not exist", style="red")

    def check_failed(self, exc: Exception):
        self.console.print(escape(f"Error: {exc}"), style="red")

    def summary(self, summary: CheckSummary):
        self.console.print("\nSummary:")
        self.console.print(f"  ✔ {summary.exists} packages exist", style="green")
        self.console.print(f"  ✘ {summary.missing} packages do not exist", style="red")
        if summary.errors:
            self.console.print(f"  ! {summary.errors} checks failed", style="yellow")
        if summary.missing_names:
            self.console.print("\nUnclaimed on the registry:", style="yellow")
            for name in summary.missing_names:
                self.console.print(escape(f"  - {name}"), style="red")

    def bulk_summary(self, stats: BulkStats, limiter: RateLimiter | None = None):
        self.console.print(
            f"\nProcessed {stats.searches} searches ({stats.search_errors} failed), "
            f"{stats.manifests} manifests ({stats.manifests_skipped} skipped)"
        )
        if limiter is not None:
            self.console.print(
                f"Rate limited {limiter.reactive_waits} times, "
                f"{limiter.throttled_seconds:.0f}s throttled"
            )
        self.summary(stats.summary)

    def help(self):
        self.console.print(LOGO, markup=False)
        self.console.print("Description:", style="yellow")
        self.console.print(
            "npm-checker is a tool to validate dependencies in a package.json file "
            "against the npm registry."
        )
        self.console.print()

        self.console.print("Usage:", style="yellow")
        table = Table(box=None, show_edge=False, header_style="bold")
        table.add_column("Command")
        table.add_column("Description")
        for command, description in USAGE:
            table.add_row(command, description)
        self.console.print(table)
        self.console.print()

        self.console.print("Example:", style="yellow")
        self.console.print("npm-checker /path/to/package.json")
        self.console.print()
