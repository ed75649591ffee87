"""
Tests for federation configuration loading
"""

import json

import pytest

from fedisig.config import (
    DEFAULT_USER_AGENT,
    DebugConfig,
    FederationConfig,
    create_config,
    load_config_from_env,
    load_config_from_file,
    load_config_from_json,
)
from fedisig.exceptions import ConfigurationError


class TestFederationConfig:
    """Test configuration validation"""

    def test_defaults(self):
        config = FederationConfig(instance_url="https://example.social/")

        assert config.instance_url == "https://example.social"
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.timeout == 30.0
        assert config.verify_ssl is True
        assert config.debug == DebugConfig()

    def test_key_id_for(self):
        config = create_config("https://example.social")
        assert config.key_id_for("9abc") == "https://example.social/users/9abc#main-key"

        with pytest.raises(ConfigurationError):
            config.key_id_for("")

    @pytest.mark.parametrize("overrides", [
        {"instance_url": ""},
        {"instance_url": "example.social"},
        {"instance_url": "ftp://example.social"},
        {"instance_url": "https://example.social", "timeout": 0},
        {"instance_url": "https://example.social", "user_agent": ""},
        {"instance_url": "https://example.social", "debug": {"slow_signing_threshold_ms": -1}},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ConfigurationError) as exc_info:
            FederationConfig.from_dict(overrides)
        assert exc_info.value.error_code == "INVALID_CONFIG"

    def test_unknown_field(self):
        with pytest.raises(ConfigurationError):
            FederationConfig.from_dict({"instance_url": "https://example.social", "colour": "blue"})

    def test_debug_from_mapping(self):
        config = create_config("https://example.social", debug={"log_signing_strings": True})
        assert config.debug.log_signing_strings is True
        assert config.debug.log_timing is False
        assert config.debug.slow_signing_threshold_ms == 20.0
        assert config.debug.slow_signing_threshold_ms == 50.0

    def test_round_trip_dict(self):
        config = create_config("https://example.social", user_agent="Misskey/13 (https://example.social)")
        assert FederationConfig.from_dict(config.to_dict()) == config


class TestConfigLoaders:
    """Test JSON, file and environment loaders"""

    def test_load_from_json(self):
        config = load_config_from_json(json.dumps({
            "instance_url": "https://example.social",
            "user_agent": "test/1.0",
            "verify_ssl": False,
        }))

        assert config.user_agent == "test/1.0"
        assert config.verify_ssl is False

    @pytest.mark.parametrize("payload", ["{not json", "[]"])
    def test_load_from_bad_json(self, payload):
        with pytest.raises(ConfigurationError):
            load_config_from_json(payload)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "fedisig.json"
        path.write_text(json.dumps({"instance_url": "https://example.social", "timeout": 5}), encoding='utf-8')

        assert load_config_from_file(path).timeout == 5

    def test_load_from_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_file(tmp_path / "missing.json")
        assert "original_error" in exc_info.value.details

    def test_load_from_env(self):
        config = load_config_from_env(environ={
            "FEDISIG_INSTANCE_URL": "https://example.social",
            "FEDISIG_USER_AGENT": "test/1.0",
            "FEDISIG_TIMEOUT": "2.5",
            "FEDISIG_VERIFY_SSL": "no",
            "FEDISIG_LOG_SIGNING_STRINGS": "true",
            "FEDISIG_LOG_TIMING": "off",
            "FEDISIG_SLOW_SIGNING_THRESHOLD_MS": "20",
        })

        assert config.user_agent == "test/1.0"
        assert config.timeout == 2.5
        assert config.verify_ssl is False
        assert config.debug.log_signing_strings is True
        assert config.debug.log_timing is False
        assert config.debug.slow_signing_threshold_ms == 20.0

    def test_load_from_env_custom_prefix(self):
        config = load_config_from_env(prefix="AP_", environ={"AP_INSTANCE_URL": "https://example.social"})
        assert config.instance_url == "https://example.social"

    def test_load_from_os_environ(self, monkeypatch):
        monkeypatch.setenv("FEDISIG_INSTANCE_URL", "https://env.example")
        assert load_config_from_env().instance_url == "https://env.example"

    @pytest.mark.parametrize("environ", [
        {},
        {"FEDISIG_INSTANCE_URL": "https://example.social", "FEDISIG_VERIFY_SSL": "maybe"},
        {"FEDISIG_INSTANCE_URL": "https://example.social", "FEDISIG_TIMEOUT": "soon"},
        {"FEDISIG_INSTANCE_URL": "https://example.social", "FEDISIG_LOG_TIMING": "sometimes"},
    ])
    def test_load_from_bad_env(self, environ):
        with pytest.raises(ConfigurationError):
            load_config_from_env(environ=environ)
