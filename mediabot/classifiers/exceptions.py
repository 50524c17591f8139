"""
Custom exceptions for the classifiers module.

All exception classes end with "Error" and do not shadow built-in names.
"""

from __future__ import annotations

from mediabot.core.exceptions import ConfigurationError


class ErrorCatalogError(ConfigurationError):
    """
    Exception raised when an error catalog cannot be loaded.

    This exception is raised in scenarios such as:
    - Catalog file not found
    - Invalid YAML
    - Unknown category or non-integer status code in the catalog

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """
        Initialize ErrorCatalogError with a message.

        Args:
            message: Human-readable description of the error.
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message
