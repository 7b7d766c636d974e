"""Exceptions raised by the dependency checker."""


class CheckerError(Exception):
    """Base class for every error this package raises."""


class ReadError(CheckerError):
    """A local file could not be read."""


class ManifestReadError(ReadError):
    """A manifest could not be read from disk or downloaded."""


class ResultsFileError(ReadError):
    """The GitDorker results file could not be read."""


class ManifestParseError(CheckerError):
    """A manifest was read but is not a valid package.json document."""


class NetworkError(CheckerError):
    """Transport-level failure talking to the registry or GitHub."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason} ({url})")


class AuthError(CheckerError):
    """A GitHub token is required but none was supplied."""
