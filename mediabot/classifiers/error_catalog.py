"""
Error catalog: the tables behind the error classifier.

The catalog holds three tables:
1. status_categories - HTTP status code -> ErrorCategory (explicit lookup)
2. messages - ErrorCategory -> user-facing message
3. tips - HTTP status code -> remediation tip

plus the ordered substring rules used when no status code matches. The
built-in DEFAULT_ERROR_CATALOG carries the canonical tables; an alternative
catalog can be loaded from YAML (see config/error_catalog.yaml).

Pattern: Configuration-Driven Filter
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Final

import yaml  # type: ignore[import-untyped]

from mediabot.classifiers.exceptions import ErrorCatalogError
from mediabot.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_CATALOG_PATH: Final[Path] = (
    Path(__file__).parent.parent.parent / "config" / "error_catalog.yaml"
)

ERROR_PLACEHOLDER: Final[str] = "{error}"


# =============================================================================
# Categories
# =============================================================================


class ErrorCategory(str, Enum):
    """Failure categories shown to chat users."""

    SUCCESS = "success"
    BAD_REQUEST = "bad_request"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    BAD_GATEWAY = "bad_gateway"
    UNAVAILABLE = "unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True)
class TextRule:
    """Substring rule applied to a lower-cased error message.

    Attributes:
        category: Category assigned when any needle matches
        needles: Lower-case substrings to look for
    """

    category: ErrorCategory
    needles: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Return True if any needle occurs in ``text``."""
        return any(needle in text for needle in self.needles)


@dataclass(frozen=True, slots=True)
class ErrorCatalog:
    """Tables used by ErrorClassifier.

    Attributes:
        status_categories: Status codes with a canonical message
        messages: Message per category (UNKNOWN holds the fallback)
        tips: Remediation tip per status code
        text_rules: Ordered substring rules, first match wins
        generic_template: Message for unmatched text; "{error}" is replaced
    """

    status_categories: Mapping[int, ErrorCategory]
    messages: Mapping[ErrorCategory, str]
    tips: Mapping[int, str] = field(default_factory=dict)
    text_rules: tuple[TextRule, ...] = ()
    generic_template: str = "❌ Error: {error}"

    def status_for(self, category: ErrorCategory) -> int | None:
        """Return the canonical status code of a category, if it has one."""
        for code, mapped in self.status_categories.items():
            if mapped is category:
                return code
        return None


# =============================================================================
# Default Catalog
# =============================================================================

DEFAULT_ERROR_CATALOG: Final[ErrorCatalog] = ErrorCatalog(
    status_categories={
        200: ErrorCategory.SUCCESS,
        400: ErrorCategory.BAD_REQUEST,
        405: ErrorCategory.METHOD_NOT_ALLOWED,
        429: ErrorCategory.RATE_LIMITED,
        500: ErrorCategory.SERVER_ERROR,
        502: ErrorCategory.BAD_GATEWAY,
        503: ErrorCategory.UNAVAILABLE,
        504: ErrorCategory.GATEWAY_TIMEOUT,
    },
    messages={
        ErrorCategory.SUCCESS: "✅ Request successful",
        ErrorCategory.BAD_REQUEST: "❌ Bad Request - Invalid parameters or missing required fields",
        ErrorCategory.METHOD_NOT_ALLOWED: "❌ Method Not Allowed - HTTP method not supported",
        ErrorCategory.RATE_LIMITED: "⚠️ Too Many Requests - Rate limit exceeded. Please try again later",
        ErrorCategory.SERVER_ERROR: "❌ Internal Server Error - Server encountered an error",
        ErrorCategory.BAD_GATEWAY: "❌ Bad Gateway - Server is temporarily unavailable",
        ErrorCategory.UNAVAILABLE: "❌ Service Unavailable - Server is temporarily down",
        ErrorCategory.GATEWAY_TIMEOUT: "❌ Gateway Timeout - Request took too long",
        ErrorCategory.NOT_FOUND: "❌ Resource not found - Please check your URL",
        ErrorCategory.UNKNOWN: "❌ An unknown error occurred. Please try again later",
    },
    tips={
        429: "\n\n💡 Tip: Wait a few minutes before trying again",
        400: "\n\n💡 Tip: Check if your URL is correct",
        500: "\n\n💡 If this persists, contact admin",
        502: "\n\n💡 If this persists, contact admin",
        503: "\n\n💡 Server is temporarily down, try again later",
        504: "\n\n💡 Request timeout, try again with a shorter video",
    },
    text_rules=(
        TextRule(ErrorCategory.RATE_LIMITED, ("rate limit", "too many")),
        TextRule(ErrorCategory.GATEWAY_TIMEOUT, ("timeout",)),
        TextRule(ErrorCategory.BAD_REQUEST, ("bad request", "invalid")),
        TextRule(ErrorCategory.NOT_FOUND, ("not found",)),
        TextRule(ErrorCategory.UNAVAILABLE, ("unavailable",)),
    ),
)


# =============================================================================
# YAML Loading
# =============================================================================


def _parse_category(value: Any) -> ErrorCategory:
    try:
        return ErrorCategory(str(value))
    except ValueError as e:
        msg = f"Unknown error category: {value!r}"
        raise ErrorCatalogError(msg) from e


def _parse_status(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        msg = f"Invalid status code: {value!r}"
        raise ErrorCatalogError(msg) from e


def _parse_needles(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        msg = f"Text rule needles must be a list: {value!r}"
        raise ErrorCatalogError(msg)
    return tuple(str(needle).lower() for needle in value)


def catalog_from_dict(data: Mapping[str, Any]) -> ErrorCatalog:
    """Build an ErrorCatalog from parsed YAML data.

    Expected structure:
        status_codes: {<code>: {category: <name>, message: <text>}}
        tips: {<code>: <text>}
        text_rules: [{category: <name>, needles: [<text>, ...]}]
        not_found_message: <text>
        unknown_message: <text>
        generic_template: <text containing {error}>

    Args:
        data: Parsed catalog document

    Returns:
        ErrorCatalog

    Raises:
        ErrorCatalogError: If a section is malformed
    """
    if not isinstance(data, Mapping):
        raise ErrorCatalogError("Error catalog must be a mapping")

    status_categories: dict[int, ErrorCategory] = {}
    messages: dict[ErrorCategory, str] = {}

    try:
        for code, entry in (data.get("status_codes") or {}).items():
            category = _parse_category(entry["category"])
            status_categories[_parse_status(code)] = category
            messages[category] = str(entry["message"])

        tips = {
            _parse_status(code): str(tip)
            for code, tip in (data.get("tips") or {}).items()
        }

        text_rules = tuple(
            TextRule(
                category=_parse_category(rule["category"]),
                needles=_parse_needles(rule["needles"]),
            )
            for rule in (data.get("text_rules") or [])
        )
    except (KeyError, TypeError, AttributeError) as e:
        msg = f"Malformed error catalog: {e}"
        raise ErrorCatalogError(msg) from e

    # Explicit keys win over a status-code message for the same category
    for category, key in (
        (ErrorCategory.NOT_FOUND, "not_found_message"),
        (ErrorCategory.UNKNOWN, "unknown_message"),
    ):
        if key in data:
            messages[category] = str(data[key])
        else:
            messages.setdefault(category, DEFAULT_ERROR_CATALOG.messages[category])

    for rule in text_rules:
        if rule.category not in messages:
            msg = f"Text rule category has no message: {rule.category.value}"
            raise ErrorCatalogError(msg)

    return ErrorCatalog(
        status_categories=status_categories,
        messages=messages,
        tips=tips,
        text_rules=text_rules,
        generic_template=str(
            data.get("generic_template", DEFAULT_ERROR_CATALOG.generic_template)
        ),
    )


def load_error_catalog(path: Path | None = None) -> ErrorCatalog:
    """Load an error catalog from YAML.

    Args:
        path: Catalog file. Uses config/error_catalog.yaml if None

    Returns:
        ErrorCatalog

    Raises:
        ErrorCatalogError: If the file is missing or not a valid catalog
    """
    catalog_path = path or DEFAULT_CATALOG_PATH
    if not catalog_path.exists():
        msg = f"Error catalog not found: {catalog_path}"
        raise ErrorCatalogError(msg)

    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in error catalog: {e}"
        raise ErrorCatalogError(msg) from e

    catalog = catalog_from_dict(data)
    logger.info(
        "error_catalog_loaded",
        path=str(catalog_path),
        status_codes=len(catalog.status_categories),
        text_rules=len(catalog.text_rules),
    )
    return catalog
