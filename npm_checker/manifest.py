"""Read package.json manifests and pull out their dependencies."""

import json
from pathlib import Path

from .exceptions import ManifestParseError, ManifestReadError
from .models import Manifest


def parse_manifest(content: bytes | str, source: str = "") -> Manifest:
    """Parse package.json content into a Manifest.

    Only the ``dependencies`` field is read; a missing or null field gives an
    empty manifest. Version specifiers are kept as opaque strings.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise ManifestParseError(f"{source or 'manifest'} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(
            f"{source or 'manifest'}: expected a JSON object, got {type(data).__name__}"
        )

    dependencies = data.get("dependencies")
    if dependencies is None:
        return Manifest({}, source=source)
    if not isinstance(dependencies, dict):
        raise ManifestParseError(f"{source or 'manifest'}: 'dependencies' must be an object")

    for name, version in dependencies.items():
        if not name:
            raise ManifestParseError(f"{source or 'manifest'}: dependency names must be non-empty")
        if not isinstance(version, str):
            raise ManifestParseError(
                f"{source or 'manifest'}: version of {name!r} must be a string, "
                f"got {type(version).__name__}"
            )

    return Manifest(dependencies, source=source)


def load_manifest(path: Path | str) -> Manifest:
    """Read a package.json from disk."""
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ManifestReadError(f"Cannot read {path}: {e.strerror or e}") from e
    return parse_manifest(content, source=str(path))
