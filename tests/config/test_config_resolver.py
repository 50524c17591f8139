"""
Tests for ConfigResolver: precedence chain, coercion, and BotConfig assembly.

Tests organized by behavior:
- TestResolvePrecedence: env file > environ > secondary > default
- TestCoercion: integer and admin ID parsing
- TestDirectories: root-relative directory composition
- TestBuildConfig: full BotConfig assembly
- TestBootstrap: loader + resolver wiring
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from mediabot.config import EnvLoader, EnvMapping
from mediabot.config.models import (
    DEFAULT_BOT_TOKEN,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_HAR_SIZE,
    DEFAULT_WEBHOOK_URL,
    BotConfig,
)
from mediabot.config.resolver import (
    ConfigResolver,
    bootstrap_config,
    coerce_int,
    parse_admin_ids,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    return tmp_path / "bot"


def make_resolver(
    env: dict[str, str] | None = None,
    environ: dict[str, str] | None = None,
    secondary: dict[str, str] | None = None,
    project_root: Path | None = None,
) -> ConfigResolver:
    return ConfigResolver(
        env=EnvMapping(env or {}),
        environ=environ or {},
        secondary=secondary,
        project_root=project_root or Path("/srv/bot"),
    )


# =============================================================================
# TestResolvePrecedence
# =============================================================================


class TestResolvePrecedence:
    """Test source precedence."""

    def test_env_file_beats_environ(self) -> None:
        resolver = make_resolver(env={"X": "file"}, environ={"X": "process"})
        assert resolver.resolve("X", "d") == "file"

    def test_environ_used_when_file_lacks_key(self) -> None:
        resolver = make_resolver(env={}, environ={"X": "process"})
        assert resolver.resolve("X", "d") == "process"

    def test_secondary_used_after_environ(self) -> None:
        resolver = make_resolver(environ={}, secondary={"X": "secondary"})
        assert resolver.resolve("X", "d") == "secondary"

    def test_environ_beats_secondary(self) -> None:
        resolver = make_resolver(environ={"X": "process"}, secondary={"X": "secondary"})
        assert resolver.resolve("X", "d") == "process"

    def test_default_when_absent_everywhere(self) -> None:
        assert make_resolver().resolve("X", "d") == "d"

    def test_default_is_none_when_omitted(self) -> None:
        assert make_resolver().resolve("X") is None

    def test_presence_not_truthiness_decides(self) -> None:
        """An empty string in the file still wins over the environment."""
        resolver = make_resolver(env={"X": ""}, environ={"X": "process"})
        assert resolver.resolve("X", "d") == ""

    def test_empty_environ_value_beats_default(self) -> None:
        resolver = make_resolver(environ={"X": ""})
        assert resolver.resolve("X", "d") == ""

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEDIABOT_TEST_KEY", "from-os")
        resolver = ConfigResolver(env=EnvMapping())
        assert resolver.resolve("MEDIABOT_TEST_KEY", "d") == "from-os"

    def test_resolve_is_repeatable(self) -> None:
        resolver = make_resolver(env={"X": "1"}, environ={"Y": "2"})
        assert resolver.resolve("X", "d") == resolver.resolve("X", "d")
        assert resolver.resolve("Y", "d") == resolver.resolve("Y", "d")


# =============================================================================
# TestCoercion
# =============================================================================


class TestCoercion:
    """Test integer coercion and admin ID parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("42", 42),
            (" 42 ", 42),
            ("-7", -7),
            ("+8", 8),
            ("12abc", 12),
            ("abc", 0),
            ("", 0),
            (None, 0),
            (52428800, 52428800),
            (3.9, 3),
            ("1e3", 1),
            ("\u0661\u0662", 0),
            ("\u00a012", 0),
        ],
    )
    def test_coerce_int(self, raw: object, expected: int) -> None:
        assert coerce_int(raw) == expected

    def test_admin_ids_parsed_in_order(self) -> None:
        assert parse_admin_ids("111,222,333") == (111, 222, 333)

    def test_admin_ids_trim_whitespace(self) -> None:
        assert parse_admin_ids(" 111 , 222 ") == (111, 222)

    def test_admin_ids_drop_zero_and_non_numeric(self) -> None:
        assert parse_admin_ids("111,abc,0,,222") == (111, 222)

    def test_admin_ids_keep_duplicates(self) -> None:
        assert parse_admin_ids("5,5,05") == (5, 5, 5)

    def test_empty_admin_ids(self) -> None:
        assert parse_admin_ids("") == ()
        assert parse_admin_ids(None) == ()


# =============================================================================
# TestDirectories
# =============================================================================


class TestDirectories:
    """Test directory composition under the project root."""

    def test_fixed_suffix(self) -> None:
        resolver = make_resolver(project_root=Path("/srv/bot"))
        assert resolver.resolve_dir(None, "logs") == Path("/srv/bot/logs")

    def test_override_key(self) -> None:
        resolver = make_resolver(env={"TEMP_DIR": "scratch"}, project_root=Path("/srv/bot"))
        assert resolver.resolve_dir("TEMP_DIR", "temp") == Path("/srv/bot/scratch")

    def test_missing_override_uses_suffix(self) -> None:
        resolver = make_resolver(project_root=Path("/srv/bot"))
        assert resolver.resolve_dir("TEMP_DIR", "temp") == Path("/srv/bot/temp")

    def test_absolute_override_stays_under_root(self) -> None:
        resolver = make_resolver(env={"TEMP_DIR": "/var/tmp"}, project_root=Path("/srv/bot"))
        assert resolver.resolve_dir("TEMP_DIR", "temp") == Path("/srv/bot/var/tmp")

    def test_composition_is_reproducible(self) -> None:
        first = make_resolver(env={"SESSIONS_DIR": "s"}).resolve_dir("SESSIONS_DIR", "sessions")
        second = make_resolver(env={"SESSIONS_DIR": "s"}).resolve_dir("SESSIONS_DIR", "sessions")
        assert first == second


# =============================================================================
# TestBuildConfig
# =============================================================================


class TestBuildConfig:
    """Test BotConfig assembly."""

    def test_defaults(self, project_root: Path) -> None:
        config = make_resolver(project_root=project_root).build_config()

        assert config.bot_token == DEFAULT_BOT_TOKEN
        assert config.webhook_url == DEFAULT_WEBHOOK_URL
        assert config.secret_key == "JSK"
        assert config.default_encryption_key == "Match&Ocean"
        assert config.ferdev_api_key == ""
        assert config.api_versions.default == "v5"
        assert config.api_versions.youtube == "v1"
        assert config.api_versions.aio == "v5"
        assert config.admin_ids == ()
        assert config.limits.max_file_size == DEFAULT_MAX_FILE_SIZE == 50 * 1024 * 1024
        assert config.limits.max_har_size == DEFAULT_MAX_HAR_SIZE == 100 * 1024 * 1024
        assert config.session.timeout == 1800
        assert config.session.cleanup_interval == 3600

    def test_default_directories(self, project_root: Path) -> None:
        config = make_resolver(project_root=project_root).build_config()
        assert config.directories.as_dict() == {
            "temp": project_root / "temp",
            "downloads": project_root / "downloads",
            "results": project_root / "results",
            "sessions": project_root / "sessions",
            "logs": project_root / "logs",
            "data": project_root / "data",
        }

    def test_values_from_env_file(self, project_root: Path) -> None:
        env = {
            "BOT_TOKEN": "123:abc",
            "WEBHOOK_URL": "https://bot.example.com/webhook",
            "SECRET_KEY": "s3cret",
            "DEFAULT_ENCRYPTION_KEY": "k",
            "FERDEV_API_KEY": "ferdev",
            "ADMIN_IDS": "10,20",
            "TEMP_DIR": "tmp2",
            "SESSIONS_DIR": "sess2",
            "MAX_FILE_SIZE": "1024",
        }
        config = make_resolver(env=env, project_root=project_root).build_config()

        assert config.bot_token == "123:abc"
        assert config.webhook_url == "https://bot.example.com/webhook"
        assert config.secret_key == "s3cret"
        assert config.default_encryption_key == "k"
        assert config.ferdev_api_key == "ferdev"
        assert config.admin_ids == (10, 20)
        assert config.directories.temp == project_root / "tmp2"
        assert config.directories.sessions == project_root / "sess2"
        assert config.limits.max_file_size == 1024

    def test_versions_are_sanitized(self) -> None:
        env = {
            "NEKOLABS_API_VERSION": " v2 # prod ",
            "NEKOLABS_YOUTUBE_VERSION": "#onlycomment",
        }
        config = make_resolver(env=env).build_config()
        assert config.api_versions.default == "v2"
        assert config.api_versions.youtube == "v1"

    def test_aio_version_defaults_to_sanitized_api_version(self) -> None:
        config = make_resolver(env={"NEKOLABS_API_VERSION": "v3 # new"}).build_config()
        assert config.api_versions.aio == "v3"

    def test_blank_aio_version_falls_back_to_api_version(self) -> None:
        env = {"NEKOLABS_API_VERSION": "v3", "NEKOLABS_AIO_VERSION": "   "}
        config = make_resolver(env=env).build_config()
        assert config.api_versions.aio == "v3"

    def test_non_numeric_limits_become_zero(self) -> None:
        env = {"MAX_FILE_SIZE": "big", "SESSION_TIMEOUT": "soon"}
        config = make_resolver(env=env).build_config()
        assert config.limits.max_file_size == 0
        assert config.session.timeout == 0

    def test_empty_token_in_file_wins(self) -> None:
        config = make_resolver(env={"BOT_TOKEN": ""}, environ={"BOT_TOKEN": "x"}).build_config()
        assert config.bot_token == ""

    def test_build_is_idempotent(self) -> None:
        resolver = make_resolver(env={"BOT_TOKEN": "t", "ADMIN_IDS": "1,2"})
        first = resolver.build_config()
        second = resolver.build_config()
        assert first == second
        for f in dataclasses.fields(BotConfig):
            assert getattr(first, f.name) == getattr(second, f.name)

    def test_config_is_frozen(self) -> None:
        config = make_resolver().build_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bot_token = "changed"  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.limits.max_file_size = 1  # type: ignore[misc]

    def test_repr_hides_secrets(self) -> None:
        config = make_resolver(env={"BOT_TOKEN": "123:supersecret"}).build_config()
        assert "supersecret" not in repr(config)

    def test_is_admin(self) -> None:
        config = make_resolver(env={"ADMIN_IDS": "10,20"}).build_config()
        assert config.is_admin(10)
        assert not config.is_admin(30)

    def test_ensure_directories(self, project_root: Path) -> None:
        config = make_resolver(project_root=project_root).build_config()
        config.directories.ensure_exists()
        assert all(p.is_dir() for p in config.directories.as_dict().values())
        # Second call is a no-op
        config.directories.ensure_exists()


# =============================================================================
# TestBootstrap
# =============================================================================


class TestBootstrap:
    """Test bootstrap_config wiring."""

    def test_bootstrap_reads_env_file(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "app" / "config"
        config_dir.mkdir(parents=True)
        (tmp_path / "app" / ".env").write_text("BOT_TOKEN=from-file\nADMIN_IDS=7\n")

        loader = EnvLoader(
            config_dir=config_dir,
            base_dir=tmp_path / "elsewhere" / "pkg",
            document_root="",
        )
        config = bootstrap_config(
            loader=loader,
            environ={"BOT_TOKEN": "from-environ"},
            project_root=tmp_path / "app",
        )
        assert config.bot_token == "from-file"
        assert config.admin_ids == (7,)

    def test_bootstrap_without_env_file_uses_environ(self, tmp_path: Path) -> None:
        loader = EnvLoader(
            config_dir=tmp_path / "none" / "config",
            base_dir=tmp_path / "none" / "pkg",
            document_root="",
        )
        config = bootstrap_config(loader=loader, environ={"BOT_TOKEN": "from-environ"})
        assert config.bot_token == "from-environ"

    def test_bootstrap_twice_gives_equal_configs(self, tmp_path: Path) -> None:
        loader = EnvLoader(
            config_dir=tmp_path / "none" / "config",
            base_dir=tmp_path / "none" / "pkg",
            document_root="",
        )
        environ = {"BOT_TOKEN": "t"}
        assert bootstrap_config(loader=loader, environ=environ) == bootstrap_config(
            loader=loader, environ=environ
        )

    def test_bootstrap_survives_undecodable_env_file(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "app" / "config"
        config_dir.mkdir(parents=True)
        (tmp_path / "app" / ".env").write_bytes(b"# caf\xe9 settings\nBOT_TOKEN=abc\n")

        loader = EnvLoader(
            config_dir=config_dir,
            base_dir=tmp_path / "elsewhere" / "pkg",
            document_root="",
        )
        config = bootstrap_config(loader=loader, environ={}, project_root=tmp_path / "app")
        assert config.bot_token == "abc"
