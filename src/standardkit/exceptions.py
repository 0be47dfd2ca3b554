"""Custom exceptions for StandardKit."""

from typing import Any


class StandardKitError(Exception):
    """Base exception for all StandardKit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class FragmentError(StandardKitError):
    """Raised when a guideline fragment file cannot be parsed."""


class MissingFieldError(FragmentError):
    """Raised when a fragment header lacks a required field."""


class MalformedValueError(FragmentError):
    """Raised when a fragment header value has the wrong shape."""


class ConfigError(StandardKitError):
    """Raised when a profile or ruleset document is invalid."""


class RegistryError(StandardKitError):
    """Raised when a required input directory is missing."""
