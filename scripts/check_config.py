#!/usr/bin/env python3
"""
Check the bot configuration from the command line.

Usage:
    python scripts/check_config.py
    python scripts/check_config.py --env-file /srv/bot/.env

Prints where the environment file was found, the masked configuration values
and every detected issue. Exits with status 1 when a critical issue exists.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Final

from mediabot.config import (
    BotConfig,
    ConfigReport,
    ConfigResolver,
    EnvLoader,
    EnvMapping,
    diagnose_config,
    read_env_file,
)
from mediabot.core.exceptions import ConfigurationError
from mediabot.core.logging import configure_logging

EXIT_OK: Final[int] = 0
EXIT_CRITICAL: Final[int] = 1


def load_env(env_file: Path | None, document_root: str | None) -> EnvMapping:
    """Load an explicit env file, or discover one.

    Raises:
        ConfigurationError: If an explicit env file cannot be read
    """
    if env_file is None:
        return EnvLoader(document_root=document_root).load()

    try:
        return read_env_file(env_file)
    except OSError as e:
        msg = f"Cannot read env file {env_file}: {e}"
        raise ConfigurationError(msg) from e


def format_report(env: EnvMapping, config: BotConfig, report: ConfigReport) -> str:
    """Render the diagnostics report as plain text."""
    lines = [
        "=" * 60,
        "Bot Configuration",
        "=" * 60,
        f"Env file: {env.source if env.source else '(not found, using environment/defaults)'}",
        f"Keys in env file: {len(env)}",
        "",
    ]

    for entry in report.entries:
        state = "default/empty" if entry.is_default else "configured"
        lines.append(f"  {entry.key:<24} {entry.masked:<30} [{state}]")

    versions = config.api_versions
    lines.append("")
    lines.append(
        f"API versions: default={versions.default} youtube={versions.youtube} aio={versions.aio}"
    )
    admin_ids = ", ".join(str(i) for i in report.admin_ids) or "(none)"
    lines.append(f"Admin IDs: {admin_ids}")
    lines.append(f"Max file size: {config.limits.max_file_size} bytes")
    lines.append("")

    for issue in report.critical:
        lines.append(f"❌ {issue}")
    for warning in report.warnings:
        lines.append(f"⚠️ {warning}")
    if report.ready:
        lines.append("✅ All critical settings configured")

    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Check the bot configuration")
    parser.add_argument("--env-file", type=Path, default=None, help="Explicit .env file")
    parser.add_argument("--document-root", default=None, help="Web server document root")
    parser.add_argument("--log-level", default="WARNING", help="Log level")
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level, json_output=False)

    try:
        env = load_env(args.env_file, args.document_root)
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_CRITICAL

    config = ConfigResolver(env=env).build_config()
    report = diagnose_config(config)
    print(format_report(env, config, report))

    return EXIT_OK if report.ready else EXIT_CRITICAL


if __name__ == "__main__":
    sys.exit(main())
