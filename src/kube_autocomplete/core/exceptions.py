"""Core exceptions for kube_autocomplete."""

from __future__ import annotations

from pathlib import Path


class AutocompleteError(Exception):
    """Base exception for local (non-API) failures.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize AutocompleteError.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)
        self.message = message


class CacheDirectoryError(AutocompleteError):
    """Raised when the cache directory cannot be created."""

    def __init__(self, cache_dir: Path, original_error: Exception | None = None) -> None:
        """Initialize CacheDirectoryError.

        Args:
            cache_dir: Directory that could not be created.
            original_error: The underlying OSError.
        """
        message = f"Cannot create cache directory '{cache_dir}'"
        if original_error:
            message += f": {original_error}"
        super().__init__(message)
        self.cache_dir = cache_dir
        self.original_error = original_error


class TableParseError(AutocompleteError):
    """Raised when a response body is not a Table/list JSON document."""

    def __init__(self, message: str = "Cannot parse table response", detail: str | None = None) -> None:
        """Initialize TableParseError.

        Args:
            message: Human-readable error message.
            detail: Parser error detail.
        """
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail


class ConfigError(AutocompleteError):
    """Raised when the configuration file cannot be read or is invalid."""
