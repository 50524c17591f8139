"""
Error Classifier for upstream download failures.

Maps an HTTP status code and/or a raw error string to the message shown to
the chat user. Resolution order, first match wins:

1. Status code lookup - explicit table (200, 400, 405, 429, 500, 502, 503, 504)
2. Text rules - ordered substring checks on the lower-cased error text:
   rate limit/too many, timeout, bad request/invalid, not found, unavailable
3. Generic message embedding the original error text
4. Unknown-error fallback when there is neither a code nor a text

The classifier never raises; every input yields a usable message.

Pattern: Pipeline / Chain of Responsibility over an injectable ErrorCatalog
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from mediabot.classifiers.error_catalog import (
    DEFAULT_ERROR_CATALOG,
    ERROR_PLACEHOLDER,
    ErrorCatalog,
    ErrorCategory,
    load_error_catalog,
)
from mediabot.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ErrorClassification:
    """Result from the error classifier.

    Attributes:
        category: Matched failure category
        message: User-facing message, never contains the tip
        tip: Remediation tip for the category's status code ("" if none)
    """

    category: ErrorCategory
    message: str
    tip: str = ""

    def render(self) -> str:
        """Return message and tip concatenated for the chat presenter."""
        return f"{self.message}{self.tip}"


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class ErrorClassifierProtocol(Protocol):
    """Protocol for error classifier implementations.

    Handlers depend on this interface so the rule table can be swapped.
    """

    def classify(
        self, status_code: int | None = None, error_message: str | None = ""
    ) -> ErrorClassification:
        """Classify a failure.

        Args:
            status_code: HTTP status code, if known
            error_message: Raw error text, if any

        Returns:
            ErrorClassification
        """
        ...

    def tip(self, status_code: int | None) -> str:
        """Return the remediation tip for a status code ("" if none)."""
        ...


# =============================================================================
# Main Implementation
# =============================================================================


class ErrorClassifier:
    """Classify upstream failures using an ErrorCatalog.

    Implements ErrorClassifierProtocol.

    Usage:
        classifier = ErrorClassifier()
        result = classifier.classify(None, "Connection timeout occurred")
        bot.send_message(chat_id, result.render())
    """

    __slots__ = ("_catalog",)

    def __init__(self, catalog: ErrorCatalog | None = None) -> None:
        """Initialize with a catalog.

        Args:
            catalog: Tables to classify with. DEFAULT_ERROR_CATALOG if None
        """
        self._catalog = catalog or DEFAULT_ERROR_CATALOG

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> ErrorClassifier:
        """Create a classifier from a YAML catalog.

        Raises:
            ErrorCatalogError: If the catalog cannot be loaded
        """
        return cls(load_error_catalog(path))

    @property
    def catalog(self) -> ErrorCatalog:
        """The catalog in use."""
        return self._catalog

    def classify(
        self, status_code: int | None = None, error_message: str | None = ""
    ) -> ErrorClassification:
        """Classify a failure by status code first, error text second.

        Args:
            status_code: HTTP status code, if known
            error_message: Raw error text, if any

        Returns:
            ErrorClassification (never raises)
        """
        catalog = self._catalog

        # Only int codes are looked up; anything else falls through to the text
        if isinstance(status_code, int) and status_code in catalog.status_categories:
            result = self._for_category(catalog.status_categories[status_code])
            logger.debug(
                "error_classified",
                tier="status_code",
                status_code=status_code,
                category=result.category.value,
            )
            return result

        text = "" if error_message is None else str(error_message)
        if not text:
            return self._for_category(ErrorCategory.UNKNOWN)

        lowered = text.lower()
        for rule in catalog.text_rules:
            if rule.matches(lowered):
                result = self._for_category(rule.category)
                logger.debug(
                    "error_classified",
                    tier="text_rule",
                    status_code=status_code,
                    category=result.category.value,
                )
                return result

        logger.debug("error_classified", tier="generic", status_code=status_code)
        return ErrorClassification(
            category=ErrorCategory.UNKNOWN,
            message=catalog.generic_template.replace(ERROR_PLACEHOLDER, text),
        )

    def message(
        self, status_code: int | None = None, error_message: str | None = ""
    ) -> str:
        """Return only the classified message."""
        return self.classify(status_code, error_message).message

    def tip(self, status_code: int | None) -> str:
        """Return the remediation tip for a status code.

        Args:
            status_code: HTTP status code

        Returns:
            Tip text, "" for codes without a tip
        """
        if not isinstance(status_code, int):
            return ""
        return self._catalog.tips.get(status_code, "")

    def _for_category(self, category: ErrorCategory) -> ErrorClassification:
        """Build the classification for a category with its canonical tip."""
        messages = self._catalog.messages
        message = messages.get(category) or messages.get(
            ErrorCategory.UNKNOWN,
            DEFAULT_ERROR_CATALOG.messages[ErrorCategory.UNKNOWN],
        )
        return ErrorClassification(
            category=category,
            message=message,
            tip=self.tip(self._catalog.status_for(category)),
        )


# =============================================================================
# Test Double
# =============================================================================


class FakeErrorClassifier:
    """Fake ErrorClassifier for testing handlers.

    Implements ErrorClassifierProtocol with canned results keyed by status code.

    Usage:
        fake = FakeErrorClassifier(responses={429: ErrorClassification(...)})
        result = fake.classify(429, "")  # Returns configured response
    """

    def __init__(
        self,
        responses: Mapping[int | None, ErrorClassification] | None = None,
        tips: Mapping[int, str] | None = None,
    ) -> None:
        """Initialize with pre-configured responses.

        Args:
            responses: Dict mapping status codes to results
            tips: Dict mapping status codes to tips
        """
        self._responses: dict[int | None, ErrorClassification] = (
            dict(responses) if responses else {}
        )
        self._tips: dict[int, str] = dict(tips) if tips else {}
        self.calls: list[tuple[int | None, str | None]] = []

    def classify(
        self, status_code: int | None = None, error_message: str | None = ""
    ) -> ErrorClassification:
        """Return the configured result, or an UNKNOWN result echoing the text."""
        self.calls.append((status_code, error_message))
        if status_code in self._responses:
            return self._responses[status_code]
        return ErrorClassification(
            category=ErrorCategory.UNKNOWN, message=str(error_message or "")
        )

    def tip(self, status_code: int | None) -> str:
        if status_code is None:
            return ""
        return self._tips.get(status_code, "")
