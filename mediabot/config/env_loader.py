"""
Environment file discovery and parsing.

The loader walks an ordered list of candidate ``.env`` locations and parses
the first one that exists and is readable. Nothing is merged across files:

1. ``<config_dir>/../.env``
2. ``<parent of base_dir>/.env``
3. ``<document_root>/../.env``      (only when a document root is known)
4. ``<parent of document_root>/.env`` (only when a document root is known)

File format: one ``KEY=VALUE`` per line, ``#`` full-line comments, optional
single or double quotes around the value. No escapes, no interpolation, no
line continuation. Files are read as UTF-8; invalid bytes are replaced, never
fatal.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

from mediabot.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

ENV_FILENAME: Final[str] = ".env"
DOCUMENT_ROOT_VAR: Final[str] = "DOCUMENT_ROOT"

PACKAGE_DIR: Final[Path] = Path(__file__).parent.parent
PROJECT_ROOT: Final[Path] = PACKAGE_DIR.parent
DEFAULT_CONFIG_DIR: Final[Path] = PROJECT_ROOT / "config"

QUOTE_CHARS: Final[tuple[str, ...]] = ('"', "'")


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class EnvMapping(Mapping[str, str]):
    """Read-only key/value pairs parsed from a single environment file.

    Attributes:
        entries: Parsed pairs in file order
        source: File the pairs were read from, None when no file was found
    """

    entries: Mapping[str, str] = field(default_factory=dict)
    source: Path | None = None

    def __post_init__(self) -> None:
        # Empty keys are never valid, whichever way the mapping was built
        entries = {key: value for key, value in self.entries.items() if key}
        object.__setattr__(self, "entries", MappingProxyType(entries))

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        # Values may be secrets
        return f"EnvMapping(keys={list(self.entries)!r}, source={self.source!r})"


# =============================================================================
# Parsing
# =============================================================================


def _strip_quotes(value: str) -> str:
    """Remove exactly one matching pair of outer quotes."""
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_env_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into an ordered dict.

    Blank lines, ``#`` comments, lines without ``=`` and lines whose key is
    empty are skipped silently.

    Args:
        lines: Raw lines of an environment file

    Returns:
        Parsed pairs; a repeated key keeps its first position, last value
    """
    parsed: dict[str, str] = {}

    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, separator, value = line.partition("=")
        if not separator:
            continue

        key = key.strip()
        if not key:
            continue

        parsed[key] = _strip_quotes(value.strip())

    return parsed


# =============================================================================
# Loader
# =============================================================================


class EnvLoader:
    """Find and parse the first readable environment file.

    Usage:
        loader = EnvLoader()
        env = loader.load()
        token = env.get("BOT_TOKEN")
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        base_dir: Path | None = None,
        document_root: str | Path | None = None,
        filename: str = ENV_FILENAME,
    ) -> None:
        """Initialize the loader.

        Args:
            config_dir: Configuration directory; the file is looked up one level above it
            base_dir: Package or working directory; the file is looked up in its parent
            document_root: Web server document root. Read from DOCUMENT_ROOT if None
            filename: Name of the environment file
        """
        self._config_dir = config_dir or DEFAULT_CONFIG_DIR
        self._base_dir = base_dir or PACKAGE_DIR
        if document_root is None:
            document_root = os.environ.get(DOCUMENT_ROOT_VAR) or None
        self._document_root = Path(document_root) if document_root else None
        self._filename = filename

    def candidate_paths(self) -> list[Path]:
        """Return candidate file locations in lookup order."""
        candidates = [
            self._config_dir / os.pardir / self._filename,
            self._base_dir.parent / self._filename,
        ]
        if self._document_root is not None:
            candidates.append(self._document_root / os.pardir / self._filename)
            candidates.append(self._document_root.parent / self._filename)
        return candidates

    def find_env_file(self) -> Path | None:
        """Return the first candidate that exists and is readable."""
        for path in self.candidate_paths():
            if path.is_file() and os.access(path, os.R_OK):
                return path
        return None

    def load(self, mirror: bool = False) -> EnvMapping:
        """Parse the first readable candidate.

        Args:
            mirror: Also copy every parsed pair into os.environ

        Returns:
            EnvMapping, empty when no candidate could be read
        """
        path = self.find_env_file()
        if path is None:
            logger.info(
                "env_file_not_found",
                candidates=[str(p) for p in self.candidate_paths()],
            )
            return EnvMapping()

        try:
            env = read_env_file(path)
        except OSError as e:
            logger.warning("env_file_unreadable", path=str(path), error=str(e))
            return EnvMapping()

        if mirror:
            os.environ.update(env.entries)

        return env


def read_env_file(path: Path) -> EnvMapping:
    """Parse one environment file.

    Args:
        path: File to read

    Returns:
        EnvMapping with ``source`` set to ``path``

    Raises:
        OSError: If the file cannot be read
    """
    # Undecodable bytes become U+FFFD; only the affected value is altered
    content = path.read_text(encoding="utf-8-sig", errors="replace")
    env = EnvMapping(parse_env_lines(content.splitlines()), source=path)
    logger.info("env_file_loaded", path=str(path), keys=len(env))
    return env
