"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from tidal_session.config import (
    ENV_MAPPINGS,
    Config,
    ConfigError,
    dict_to_config,
    load_config,
    load_env_config,
    load_yaml_config,
    merge_configs,
    validate_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of the tests."""
    for env_var in ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)


def _make_valid_config() -> Config:
    config = Config()
    config.tidal.token = "some_token"
    config.tidal.username = "myuser@example.com"
    config.tidal.password = "somepassword"
    return config


class TestDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.tidal.token == ""
        assert config.tidal.username == ""
        assert config.tidal.password == ""
        assert config.logging.level == "info"


class TestValidation:
    """Test validate_config."""

    def test_valid(self) -> None:
        validate_config(_make_valid_config())  # Should not raise

    def test_empty_token_rejected(self) -> None:
        config = _make_valid_config()
        config.tidal.token = ""
        with pytest.raises(ConfigError, match="application token is required"):
            validate_config(config)

    def test_missing_credentials(self) -> None:
        config = _make_valid_config()
        config.tidal.username = ""
        config.tidal.password = ""
        with pytest.raises(ConfigError) as exc_info:
            validate_config(config)
        assert "username is required" in str(exc_info.value)
        assert "password is required" in str(exc_info.value)

    def test_invalid_log_level(self) -> None:
        config = _make_valid_config()
        config.logging.level = "verbose"
        with pytest.raises(ConfigError, match="Invalid log level"):
            validate_config(config)

    def test_log_level_case_insensitive(self) -> None:
        config = _make_valid_config()
        config.logging.level = "DEBUG"
        validate_config(config)


class TestSources:
    """Test the individual config sources."""

    def test_yaml_missing_file(self, tmp_path: Path) -> None:
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("tidal:\n  token: abc\n  username: me\nlogging:\n  level: debug\n")
        assert load_yaml_config(path) == {
            "tidal": {"token": "abc", "username": "me"},
            "logging": {"level": "debug"},
        }

    def test_yaml_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_yaml_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("tidal: [unclosed\n")
        with pytest.raises(ConfigError, match="Error parsing YAML"):
            load_yaml_config(path)

    def test_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_yaml_config(path)

    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIDAL_TOKEN", "env_token")
        monkeypatch.setenv("TIDALSESSION_LOG_LEVEL", "warning")
        assert load_env_config() == {
            "tidal": {"token": "env_token"},
            "logging": {"level": "warning"},
        }

    def test_merge_later_wins(self) -> None:
        merged = merge_configs(
            {"tidal": {"token": "a", "username": "me"}},
            {"tidal": {"token": "b"}},
        )
        assert merged == {"tidal": {"token": "b", "username": "me"}}

    def test_dict_to_config_partial(self) -> None:
        config = dict_to_config({"tidal": {"token": "abc"}})
        assert config.tidal.token == "abc"
        assert config.tidal.username == ""
        assert config.logging.level == "info"

    def test_dict_to_config_numeric_token(self) -> None:
        """YAML may parse an all-digit token as an int."""
        config = dict_to_config({"tidal": {"token": 12345}})
        assert config.tidal.token == "12345"


class TestLoadConfig:
    """Test priority across sources."""

    def test_priority(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "tidal:\n  token: file_token\n  username: file_user\n  password: file_pw\n"
        )
        monkeypatch.setenv("TIDAL_USERNAME", "env_user")
        monkeypatch.setenv("TIDAL_PASSWORD", "env_pw")

        config = load_config(path, {"tidal": {"password": "cli_pw"}})

        assert config.tidal.token == "file_token"
        assert config.tidal.username == "env_user"
        assert config.tidal.password == "cli_pw"

    def test_nothing_configured(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")
