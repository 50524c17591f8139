"""Bot configuration: env file discovery, resolution, and diagnostics."""
from mediabot.config.diagnostics import ConfigReport, diagnose_config, mask_secret
from mediabot.config.env_loader import EnvLoader, EnvMapping, parse_env_lines, read_env_file
from mediabot.config.models import (
    ApiVersions,
    BotConfig,
    DirectoryConfig,
    LimitsConfig,
    SessionConfig,
)
from mediabot.config.resolver import ConfigResolver, bootstrap_config
from mediabot.config.sanitize import sanitize_version

__all__ = [
    "ApiVersions",
    "BotConfig",
    "ConfigReport",
    "ConfigResolver",
    "DirectoryConfig",
    "EnvLoader",
    "EnvMapping",
    "LimitsConfig",
    "SessionConfig",
    "bootstrap_config",
    "diagnose_config",
    "mask_secret",
    "parse_env_lines",
    "read_env_file",
    "sanitize_version",
]
