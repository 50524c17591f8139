"""
Configuration diagnostics.

Summarizes a BotConfig for operators without leaking secrets: every value is
masked, placeholder defaults are flagged, and missing settings are reported
as critical issues (the bot cannot run) or warnings (some features degrade).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from mediabot.config.models import (
    DEFAULT_BOT_TOKEN,
    DEFAULT_ENCRYPTION_KEY,
    DEFAULT_SECRET_KEY,
    DEFAULT_WEBHOOK_URL,
    BotConfig,
)

EMPTY_MARKER: Final[str] = "(empty)"
MASK_CHAR: Final[str] = "*"
LONG_SECRET_LENGTH: Final[int] = 10


def mask_secret(value: str) -> str:
    """Mask a secret, keeping a few characters at each end.

    Values longer than 10 characters keep 5 on each side, shorter ones keep 2.

    Args:
        value: Secret to mask

    Returns:
        Masked value, or "(empty)" for an empty value
    """
    if not value:
        return EMPTY_MARKER

    length = len(value)
    if length > LONG_SECRET_LENGTH:
        return value[:5] + MASK_CHAR * (length - 10) + value[-5:]
    return value[:2] + MASK_CHAR * max(0, length - 4) + value[-2:]


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    """Masked view of one configuration value.

    Attributes:
        key: Configuration field name
        masked: Masked value
        is_default: True when the value is empty or still the shipped default
    """

    key: str
    masked: str
    is_default: bool


@dataclass(frozen=True, slots=True)
class ConfigReport:
    """Diagnostics for a BotConfig.

    Attributes:
        entries: Masked view of the checked values
        admin_ids: Configured admin IDs
        critical: Problems that keep the bot from working
        warnings: Optional settings that are missing
    """

    entries: tuple[ConfigEntry, ...]
    admin_ids: tuple[int, ...]
    critical: tuple[str, ...] = field(default=())
    warnings: tuple[str, ...] = field(default=())

    @property
    def ready(self) -> bool:
        """True when no critical issue was found."""
        return not self.critical


def is_bot_token_valid(token: str) -> bool:
    """Return True for a non-empty token that is not the placeholder."""
    return bool(token) and token != DEFAULT_BOT_TOKEN


def diagnose_config(config: BotConfig) -> ConfigReport:
    """Build the diagnostics report for a configuration.

    Args:
        config: Resolved configuration

    Returns:
        ConfigReport with masked values and detected issues
    """
    checked = (
        ("bot_token", config.bot_token, DEFAULT_BOT_TOKEN),
        ("webhook_url", config.webhook_url, DEFAULT_WEBHOOK_URL),
        ("secret_key", config.secret_key, DEFAULT_SECRET_KEY),
        ("default_encryption_key", config.default_encryption_key, DEFAULT_ENCRYPTION_KEY),
        ("ferdev_api_key", config.ferdev_api_key, ""),
    )
    entries = tuple(
        ConfigEntry(
            key=key,
            masked=mask_secret(value),
            is_default=not value or value == default,
        )
        for key, value, default in checked
    )

    critical: list[str] = []
    warnings: list[str] = []

    if not is_bot_token_valid(config.bot_token):
        critical.append("BOT_TOKEN not configured")
    if config.webhook_url == DEFAULT_WEBHOOK_URL:
        critical.append("WEBHOOK_URL still using default value")
    if not config.admin_ids:
        warnings.append("ADMIN_IDS not set (optional but recommended)")
    if not config.ferdev_api_key:
        warnings.append("FERDEV_API_KEY not set (required for some features)")

    return ConfigReport(
        entries=entries,
        admin_ids=config.admin_ids,
        critical=tuple(critical),
        warnings=tuple(warnings),
    )
