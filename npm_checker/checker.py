"""Check every dependency of a manifest against the registry."""

import logging

from .exceptions import NetworkError
from .models import CheckSummary, Manifest
from .registry import RegistryClient
from .report import Reporter

logger = logging.getLogger(__name__)


def check_dependencies(manifest: Manifest, registry: RegistryClient, reporter: Reporter) -> CheckSummary:
    """Check each dependency in order and tally the verdicts.

    A network failure on one package is reported and counted as an error;
    the rest of the manifest is still checked.
    """
    summary = CheckSummary()
    for name, version in manifest.dependencies.items():
        reporter.checking(name, version)
        try:
            exists = registry.exists(name)
        except NetworkError as e:
            logger.debug("Existence check for %s failed", name, exc_info=True)
            reporter.check_failed(e)
            summary.errors += 1
            continue

        reporter.verdict(exists)
        if exists:
            summary.exists += 1
        else:
            summary.missing += 1
            summary.missing_names.append(name)
    return summary
