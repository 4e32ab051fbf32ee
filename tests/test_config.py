"""Tests for credential and settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from streamfeeds.config import load_config, load_env_file
from streamfeeds.exceptions import ConfigurationError
from streamfeeds.exit_codes import EXIT_CONFIG_ERROR
from streamfeeds.models import DEFAULT_BASE_URL


def _write_env(path: Path, **values: str) -> Path:
    path.write_text("".join(f"{key}={value}\n" for key, value in values.items()))
    return path


# ---------------------------------------------------------------------------
# Explicit values
# ---------------------------------------------------------------------------


class TestExplicit:
    def test_explicit_values(self) -> None:
        config = load_config(
            api_key="k", api_secret="s", base_url="https://x.example.com/", timeout=5
        )
        assert config.api_key == "k"
        assert config.api_secret.get_secret_value() == "s"
        assert config.base_url == "https://x.example.com"
        assert config.timeout == 5.0

    def test_defaults(self) -> None:
        config = load_config(api_key="k", api_secret="s")
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0
        assert config.verify_ssl is True

    def test_secret_hidden_in_repr(self) -> None:
        config = load_config(api_key="k", api_secret="very-secret")
        assert "very-secret" not in repr(config)

    def test_config_is_frozen(self) -> None:
        config = load_config(api_key="k", api_secret="s")
        with pytest.raises(Exception):
            config.api_key = "other"  # type: ignore[misc]

    def test_explicit_beats_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_API_KEY", "env-key")
        monkeypatch.setenv("STREAM_API_SECRET", "env-secret")
        config = load_config(api_key="arg-key")
        assert config.api_key == "arg-key"
        assert config.api_secret.get_secret_value() == "env-secret"


# ---------------------------------------------------------------------------
# Environment and .env files
# ---------------------------------------------------------------------------


class TestEnvironment:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_API_KEY", "env-key")
        monkeypatch.setenv("STREAM_API_SECRET", "env-secret")
        monkeypatch.setenv("STREAM_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("STREAM_TIMEOUT", "12.5")
        config = load_config()
        assert config.api_key == "env-key"
        assert config.base_url == "https://env.example.com"
        assert config.timeout == 12.5

    def test_bad_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_API_KEY", "k")
        monkeypatch.setenv("STREAM_API_SECRET", "s")
        monkeypatch.setenv("STREAM_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="STREAM_TIMEOUT"):
            load_config()

    def test_explicit_env_file(self, tmp_path: Path) -> None:
        env = _write_env(
            tmp_path / "custom.env", STREAM_API_KEY="file-key", STREAM_API_SECRET="file-secret"
        )
        config = load_config(env_file=env)
        assert config.api_key == "file-key"
        assert config.api_secret.get_secret_value() == "file-secret"

    def test_discovered_env_file(self, tmp_path: Path) -> None:
        _write_env(tmp_path / ".env", STREAM_API_KEY="found-key", STREAM_API_SECRET="found")
        assert load_env_file() == tmp_path / ".env"
        assert load_config().api_key == "found-key"

    def test_environment_beats_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env = _write_env(tmp_path / "x.env", STREAM_API_KEY="file-key", STREAM_API_SECRET="s")
        monkeypatch.setenv("STREAM_API_KEY", "env-key")
        assert load_config(env_file=env).api_key == "env-key"

    def test_missing_env_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Env file not found"):
            load_env_file(tmp_path / "absent.env")

    def test_load_env_false_ignores_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAM_API_KEY", "env-key")
        monkeypatch.setenv("STREAM_API_SECRET", "env-secret")
        with pytest.raises(ConfigurationError):
            load_config(load_env=False)


# ---------------------------------------------------------------------------
# Missing values
# ---------------------------------------------------------------------------


class TestMissing:
    def test_missing_key(self) -> None:
        with pytest.raises(ConfigurationError, match="STREAM_API_KEY") as excinfo:
            load_config(api_secret="s")
        assert excinfo.value.exit_code == EXIT_CONFIG_ERROR

    def test_missing_secret(self) -> None:
        with pytest.raises(ConfigurationError, match="STREAM_API_SECRET"):
            load_config(api_key="k")

    def test_empty_values_count_as_missing(self) -> None:
        with pytest.raises(ConfigurationError):
            load_config(api_key="", api_secret="", load_env=False)

    def test_invalid_timeout_value(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid client configuration"):
            load_config(api_key="k", api_secret="s", timeout="never")  # type: ignore[arg-type]
