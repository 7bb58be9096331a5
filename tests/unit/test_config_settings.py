"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Unit tests for configuration management.

Tests configuration loading, environment overrides and validation.
"""

import os

import pytest

from picado.config.settings import (
    ApiConfig,
    NavigationConfig,
    PicadoConfig,
    SessionConfig,
    _validate_config,
    get_default_config,
    load_config,
    resolve_base_url,
)
from picado.exceptions import InvalidConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PICADO_API_URL", raising=False)
    monkeypatch.delenv("PICADO_API_BASE_URL", raising=False)


class TestConfigurationDataclasses:
    """Test configuration dataclass structures."""

    def test_api_config_defaults(self):
        config = ApiConfig()
        assert config.base_url == ""
        assert config.timeout == 30.0
        assert config.debug_url_normalization is False

    def test_navigation_config_defaults(self):
        config = NavigationConfig()
        assert config.entry_point == "/login"
        assert config.public_paths == ["/login", "/register", "/forgot"]

    def test_default_config(self):
        config = get_default_config()
        assert config.session.store == "file"
        assert config.session.path.endswith(os.path.join(".picado", "session.json"))
        assert config.logging.level == "INFO"


class TestResolveBaseUrl:
    def test_configured_value(self):
        assert resolve_base_url(" https://picado.test/api/ ") == "https://picado.test/api"

    def test_empty(self):
        assert resolve_base_url() == ""

    def test_primary_variable_wins(self, monkeypatch):
        monkeypatch.setenv("PICADO_API_URL", "https://primary.test")
        monkeypatch.setenv("PICADO_API_BASE_URL", "https://legacy.test")
        assert resolve_base_url("https://configured.test") == "https://primary.test"

    def test_legacy_variable(self, monkeypatch):
        monkeypatch.setenv("PICADO_API_BASE_URL", "https://legacy.test/")
        assert resolve_base_url("https://configured.test") == "https://legacy.test"


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, temp_dir):
        config = load_config(str(temp_dir / "absent.yaml"))
        assert config == get_default_config()

    def test_empty_file_uses_defaults(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == get_default_config()

    def test_full_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(
            f"""
api:
  base_url: https://picado.test/api/
  timeout: 5
  debug_url_normalization: true
session:
  store: file
  path: {temp_dir}/session.json
navigation:
  entry_point: /signin
  public_paths: [/signin, /signup]
logging:
  level: DEBUG
  format: json
"""
        )

        config = load_config(str(path))

        assert config.api.base_url == "https://picado.test/api"
        assert config.api.timeout == 5.0
        assert config.api.debug_url_normalization is True
        assert config.session.path == f"{temp_dir}/session.json"
        assert config.navigation.entry_point == "/signin"
        assert config.navigation.public_paths == ["/signin", "/signup"]
        assert config.logging.format == "json"

    def test_environment_substitution(self, temp_dir, monkeypatch):
        monkeypatch.setenv("PICADO_TEST_HOST", "staging.picado.test")
        path = temp_dir / "config.yaml"
        path.write_text(
            "api:\n"
            "  base_url: https://${PICADO_TEST_HOST}/api\n"
            "session:\n"
            "  store: ${PICADO_TEST_STORE:memory}\n"
        )

        config = load_config(str(path))

        assert config.api.base_url == "https://staging.picado.test/api"
        assert config.session.store == "memory"

    def test_environment_overrides_file(self, temp_dir, monkeypatch):
        monkeypatch.setenv("PICADO_API_URL", "https://override.test")
        path = temp_dir / "config.yaml"
        path.write_text("api:\n  base_url: https://file.test\n")
        assert load_config(str(path)).api.base_url == "https://override.test"

    def test_malformed_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("api: [unclosed")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    def test_non_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))

    def test_bad_timeout_type(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("api:\n  timeout: soon\n")
        with pytest.raises(InvalidConfigurationError):
            load_config(str(path))


class TestValidateConfig:
    def test_valid_default(self):
        _validate_config(PicadoConfig())

    def test_non_positive_timeout(self):
        with pytest.raises(InvalidConfigurationError):
            _validate_config(PicadoConfig(api=ApiConfig(timeout=0)))

    def test_unknown_store(self):
        with pytest.raises(InvalidConfigurationError):
            _validate_config(PicadoConfig(session=SessionConfig(store="redis")))

    def test_file_store_needs_path(self):
        with pytest.raises(InvalidConfigurationError):
            _validate_config(PicadoConfig(session=SessionConfig(store="file", path="")))

    def test_memory_store_needs_no_path(self):
        _validate_config(PicadoConfig(session=SessionConfig(store="memory", path="")))

    def test_entry_point_must_be_public(self):
        navigation = NavigationConfig(entry_point="/home", public_paths=["/login"])
        with pytest.raises(InvalidConfigurationError):
            _validate_config(PicadoConfig(navigation=navigation))

    def test_public_paths_required(self):
        navigation = NavigationConfig(entry_point="/login", public_paths=[])
        with pytest.raises(InvalidConfigurationError):
            _validate_config(PicadoConfig(navigation=navigation))
