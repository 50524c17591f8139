"""
Precedence-ordered configuration resolution.

A key is looked up in these sources, highest first:

1. EnvMapping parsed by EnvLoader
2. Process environment variables
3. Secondary store supplied by the host (skipped when there is none)
4. Caller default

The first source that *contains* the key wins, even when its value is an
empty string.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from mediabot.config.env_loader import PROJECT_ROOT, EnvLoader, EnvMapping
from mediabot.config.models import (
    DEFAULT_API_VERSION,
    DEFAULT_BOT_TOKEN,
    DEFAULT_ENCRYPTION_KEY,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_HAR_SIZE,
    DEFAULT_SECRET_KEY,
    DEFAULT_SESSION_CLEANUP_INTERVAL,
    DEFAULT_SESSION_TIMEOUT,
    DEFAULT_WEBHOOK_URL,
    DEFAULT_YOUTUBE_VERSION,
    ApiVersions,
    BotConfig,
    DirectoryConfig,
    LimitsConfig,
    SessionConfig,
)
from mediabot.config.sanitize import sanitize_version
from mediabot.core.logging import get_logger

logger = get_logger(__name__)

# Leading ASCII integer, same reading as a lenient int cast: "12abc" -> 12.
# Exponent notation is not expanded: "1e3" -> 1.
REGEX_LEADING_INT: Final[re.Pattern[str]] = re.compile(r"^[ \t\n\r\v\f]*([+-]?[0-9]+)")

ADMIN_ID_SEPARATOR: Final[str] = ","


def coerce_int(value: Any) -> int:
    """Coerce a configuration value to int, 0 when it is not numeric.

    Args:
        value: Raw value (str, int, or anything else)

    Returns:
        Leading integer of the value, or 0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if value is None:
        return 0

    match = REGEX_LEADING_INT.match(str(value))
    if match is None:
        return 0
    return int(match.group(1))


def parse_admin_ids(raw: Any) -> tuple[int, ...]:
    """Parse a comma-separated admin ID list.

    Every element is integer-coerced; elements that coerce to 0 are dropped.
    Order and duplicates are kept.
    """
    if raw is None:
        return ()
    ids = (coerce_int(part) for part in str(raw).split(ADMIN_ID_SEPARATOR))
    return tuple(user_id for user_id in ids if user_id)


class ConfigResolver:
    """Resolve configuration keys across the precedence chain.

    Usage:
        resolver = ConfigResolver(EnvLoader().load())
        config = resolver.build_config()
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
        secondary: Mapping[str, Any] | None = None,
        project_root: Path | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            env: Parsed environment file. Empty if None
            environ: Process environment. os.environ if None
            secondary: Extra host-provided store, consulted after environ
            project_root: Root the directory fields are composed under
        """
        self._env = env if env is not None else EnvMapping()
        self._environ = environ if environ is not None else os.environ
        self._secondary = secondary
        self._project_root = project_root or PROJECT_ROOT

    def _sources(self) -> list[Mapping[str, Any]]:
        sources: list[Mapping[str, Any]] = [self._env, self._environ]
        if self._secondary is not None:
            sources.append(self._secondary)
        return sources

    def resolve(self, key: str, default: Any = None) -> Any:
        """Resolve a key to its value.

        Args:
            key: Configuration key, e.g. "BOT_TOKEN"
            default: Returned when no source contains the key

        Returns:
            Value from the first source containing ``key``, else ``default``
        """
        for source in self._sources():
            if key in source:
                return source[key]
        return default

    def resolve_int(self, key: str, default: int) -> int:
        """Resolve a key and coerce it to int (0 on non-numeric input)."""
        return coerce_int(self.resolve(key, default))

    def resolve_dir(self, key: str | None, suffix: str) -> Path:
        """Compose a directory below the project root.

        Args:
            key: Override key, or None for a fixed directory
            suffix: Directory name used when the override is absent

        Returns:
            ``project_root / <override or suffix>``
        """
        name = str(self.resolve(key, suffix)) if key else suffix
        # Concatenation, not join: an absolute override still lands under the root
        return self._project_root / name.lstrip("/\\")

    def build_config(self) -> BotConfig:
        """Resolve every configuration field into a frozen BotConfig.

        Returns:
            BotConfig; equal inputs always produce equal objects
        """
        default_version = sanitize_version(
            self.resolve("NEKOLABS_API_VERSION", DEFAULT_API_VERSION),
            DEFAULT_API_VERSION,
        )

        config = BotConfig(
            bot_token=str(self.resolve("BOT_TOKEN", DEFAULT_BOT_TOKEN)),
            webhook_url=str(self.resolve("WEBHOOK_URL", DEFAULT_WEBHOOK_URL)),
            secret_key=str(self.resolve("SECRET_KEY", DEFAULT_SECRET_KEY)),
            default_encryption_key=str(
                self.resolve("DEFAULT_ENCRYPTION_KEY", DEFAULT_ENCRYPTION_KEY)
            ),
            ferdev_api_key=str(self.resolve("FERDEV_API_KEY", "")),
            api_versions=ApiVersions(
                default=default_version,
                youtube=sanitize_version(
                    self.resolve("NEKOLABS_YOUTUBE_VERSION", DEFAULT_YOUTUBE_VERSION),
                    DEFAULT_YOUTUBE_VERSION,
                ),
                aio=sanitize_version(
                    self.resolve("NEKOLABS_AIO_VERSION", default_version),
                    default_version,
                ),
            ),
            admin_ids=parse_admin_ids(self.resolve("ADMIN_IDS", "")),
            directories=DirectoryConfig(
                temp=self.resolve_dir("TEMP_DIR", "temp"),
                downloads=self.resolve_dir(None, "downloads"),
                results=self.resolve_dir(None, "results"),
                sessions=self.resolve_dir("SESSIONS_DIR", "sessions"),
                logs=self.resolve_dir(None, "logs"),
                data=self.resolve_dir(None, "data"),
            ),
            limits=LimitsConfig(
                max_file_size=self.resolve_int("MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
                max_har_size=self.resolve_int("MAX_HAR_SIZE", DEFAULT_MAX_HAR_SIZE),
            ),
            session=SessionConfig(
                timeout=self.resolve_int("SESSION_TIMEOUT", DEFAULT_SESSION_TIMEOUT),
                cleanup_interval=self.resolve_int(
                    "SESSION_CLEANUP_INTERVAL", DEFAULT_SESSION_CLEANUP_INTERVAL
                ),
            ),
        )

        logger.info(
            "config_built",
            api_versions=[
                config.api_versions.default,
                config.api_versions.youtube,
                config.api_versions.aio,
            ],
            admin_count=len(config.admin_ids),
            max_file_size=config.limits.max_file_size,
        )
        return config


def bootstrap_config(
    loader: EnvLoader | None = None,
    environ: Mapping[str, str] | None = None,
    secondary: Mapping[str, Any] | None = None,
    project_root: Path | None = None,
) -> BotConfig:
    """Load the environment file and build the BotConfig.

    Call exactly once at process start and pass the result to every consumer.

    Args:
        loader: EnvLoader to use. Default candidate paths if None
        environ: Process environment. os.environ if None
        secondary: Optional host-provided store
        project_root: Root for directory fields

    Returns:
        The process-wide BotConfig
    """
    env = (loader or EnvLoader()).load()
    resolver = ConfigResolver(
        env=env,
        environ=environ,
        secondary=secondary,
        project_root=project_root,
    )
    return resolver.build_config()
