"""Normalization of version-like configuration values (e.g. "v5 # prod")."""

from __future__ import annotations

from typing import Any

COMMENT_MARKER = "#"


def sanitize_version(raw: Any, default: str) -> str:
    """Clean a version string, falling back to ``default`` when nothing is left.

    Strips surrounding whitespace and everything from the first ``#`` on, so
    ``" v2 # prod "`` becomes ``"v2"``. ``None``, blank and comment-only
    values all yield ``default``.

    Args:
        raw: Resolved configuration value (any type, ``None`` allowed)
        default: Value returned when ``raw`` carries no version

    Returns:
        The cleaned version string or ``default``
    """
    if raw is None:
        return default

    value = str(raw).strip()
    if not value:
        return default

    value = value.split(COMMENT_MARKER, 1)[0].strip()
    if not value:
        return default

    return value
