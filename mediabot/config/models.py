"""
Resolved bot configuration.

BotConfig is built once at startup by ConfigResolver.build_config() and then
shared by reference. Every group is a frozen dataclass, so a field cannot be
reassigned after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_BOT_TOKEN: Final[str] = "YOUR_BOT_TOKEN_HERE"
DEFAULT_WEBHOOK_URL: Final[str] = "https://yourdomain.com/webhook.php"
DEFAULT_SECRET_KEY: Final[str] = "JSK"
DEFAULT_ENCRYPTION_KEY: Final[str] = "Match&Ocean"

DEFAULT_API_VERSION: Final[str] = "v5"
DEFAULT_YOUTUBE_VERSION: Final[str] = "v1"

MIB: Final[int] = 1024 * 1024
DEFAULT_MAX_FILE_SIZE: Final[int] = 50 * MIB
DEFAULT_MAX_HAR_SIZE: Final[int] = 100 * MIB

DEFAULT_SESSION_TIMEOUT: Final[int] = 30 * 60
DEFAULT_SESSION_CLEANUP_INTERVAL: Final[int] = 60 * 60


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ApiVersions:
    """NekoLabs API versions, already sanitized.

    Attributes:
        default: Version used by every endpoint without its own setting
        youtube: Version of the YouTube downloader endpoint
        aio: Version of the all-in-one downloader endpoint
    """

    default: str = DEFAULT_API_VERSION
    youtube: str = DEFAULT_YOUTUBE_VERSION
    aio: str = DEFAULT_API_VERSION


@dataclass(frozen=True, slots=True)
class DirectoryConfig:
    """Working directories, all below the project root."""

    temp: Path
    downloads: Path
    results: Path
    sessions: Path
    logs: Path
    data: Path

    def as_dict(self) -> dict[str, Path]:
        """Return directories keyed by name."""
        return {
            "temp": self.temp,
            "downloads": self.downloads,
            "results": self.results,
            "sessions": self.sessions,
            "logs": self.logs,
            "data": self.data,
        }

    def ensure_exists(self) -> None:
        """Create every directory (and parents) that does not exist yet."""
        for path in self.as_dict().values():
            path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True, slots=True)
class LimitsConfig:
    """Size limits in bytes."""

    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_har_size: int = DEFAULT_MAX_HAR_SIZE


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Session timing in seconds."""

    timeout: int = DEFAULT_SESSION_TIMEOUT
    cleanup_interval: int = DEFAULT_SESSION_CLEANUP_INTERVAL


@dataclass(frozen=True, slots=True)
class BotConfig:
    """Fully resolved configuration snapshot for the process lifetime.

    Attributes:
        bot_token: Telegram bot token
        webhook_url: Public URL Telegram posts updates to
        secret_key: Key guarding the HAR extraction command
        default_encryption_key: Fallback key for HAR decryption
        ferdev_api_key: Deprecated Ferdev API key (empty when unused)
        api_versions: Sanitized NekoLabs API versions
        admin_ids: Telegram user IDs with admin rights, in configured order
        directories: Working directories
        limits: Size limits
        session: Session timing
    """

    bot_token: str = field(repr=False)
    webhook_url: str
    secret_key: str = field(repr=False)
    default_encryption_key: str = field(repr=False)
    ferdev_api_key: str = field(repr=False)
    api_versions: ApiVersions
    admin_ids: tuple[int, ...]
    directories: DirectoryConfig
    limits: LimitsConfig
    session: SessionConfig

    def is_admin(self, user_id: int) -> bool:
        """Check whether a Telegram user ID is configured as admin."""
        return user_id in self.admin_ids
