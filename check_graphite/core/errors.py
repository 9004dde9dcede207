from __future__ import annotations


EXIT_OK = 0
EXIT_WARNING = 1
EXIT_CRITICAL = 2
EXIT_UNKNOWN = 3


class CheckError(Exception):
    """Base class for failures that terminate a check run."""

    exit_code: int = EXIT_UNKNOWN


class UsageError(CheckError):
    """Raised when command-line arguments are missing or invalid."""

    exit_code = EXIT_WARNING


class TransportError(CheckError):
    """Raised when the render API cannot be reached or answers with an error status."""


class ParseError(CheckError):
    """Raised when the render API response is not a JSON array of series."""


class ResourceError(CheckError):
    """Raised when the response body cannot be buffered in memory."""
