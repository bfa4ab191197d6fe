"""
Tests for swiftparser.core.config

Covers YAML and environment loading, validation and the process-wide
configuration accessors.
"""

import pytest
import yaml

from swiftparser.core import config as config_module
from swiftparser.core.config import (
    Environment,
    LogLevel,
    ParserConfig,
    get_config,
    load_config,
    set_config,
)
from swiftparser.core.exceptions import ConfigurationException


@pytest.fixture(autouse=True)
def reset_global_config():
    """Restore the global configuration after each test."""
    saved = config_module._config
    yield
    config_module._config = saved


class TestParserConfig:
    """Test ParserConfig defaults and conversions."""

    def test_defaults(self):
        """Test default configuration values."""
        config = ParserConfig()

        assert config.environment == Environment.DEVELOPMENT
        assert config.log_level == LogLevel.INFO
        assert config.log_format == "json"
        assert config.enable_logging is True
        assert config.strict_validation is True
        assert config.enable_metrics is True
        assert config.preview_length == 100

    def test_from_dict(self):
        """Test building configuration from a dictionary."""
        config = ParserConfig.from_dict({
            "environment": "production",
            "log_level": "debug",
            "log_format": "TEXT",
            "strict_validation": False,
            "preview_length": 40,
        })

        assert config.environment == Environment.PRODUCTION
        assert config.log_level == LogLevel.DEBUG
        assert config.log_format == "text"
        assert config.strict_validation is False
        assert config.enable_metrics is True
        assert config.preview_length == 40

    def test_from_dict_invalid_environment(self):
        """Test an unknown environment name."""
        with pytest.raises(ConfigurationException, match="Invalid configuration value"):
            ParserConfig.from_dict({"environment": "moon"})

    def test_to_dict_round_trip(self):
        """Test to_dict output feeds back into from_dict."""
        config = ParserConfig(environment=Environment.STAGING, enable_logging=False)
        assert ParserConfig.from_dict(config.to_dict()) == config

    def test_validate(self):
        """Test validation of log format and preview length."""
        ParserConfig().validate()

        with pytest.raises(ConfigurationException, match="Log format must be one of"):
            ParserConfig(log_format="xml").validate()
        with pytest.raises(ConfigurationException, match="Preview length must be positive") as exc_info:
            ParserConfig(preview_length=0).validate()
        assert exc_info.value.error_code == "CONFIG_ERROR"


class TestConfigSources:
    """Test loading configuration from files and the environment."""

    def test_load_from_file(self, tmp_path):
        """Test loading a YAML file."""
        path = tmp_path / "swiftparser.yaml"
        path.write_text(yaml.safe_dump({"environment": "testing", "enable_metrics": False}))

        config = ParserConfig.load_from_file(path)

        assert config.environment == Environment.TESTING
        assert config.enable_metrics is False

    def test_load_from_empty_file(self, tmp_path):
        """Test an empty YAML file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ParserConfig.load_from_file(path) == ParserConfig()

    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        with pytest.raises(ConfigurationException, match="Configuration file not found"):
            ParserConfig.load_from_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test unparseable YAML."""
        path = tmp_path / "broken.yaml"
        path.write_text("environment: [unclosed")
        with pytest.raises(ConfigurationException, match="Invalid YAML"):
            ParserConfig.load_from_file(path)

    def test_non_mapping_yaml(self, tmp_path):
        """Test YAML whose top level is not a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n")
        with pytest.raises(ConfigurationException, match="must contain a mapping"):
            ParserConfig.load_from_file(path)

    def test_load_from_env(self, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("SWIFTPARSER_ENVIRONMENT", "staging")
        monkeypatch.setenv("SWIFTPARSER_LOG_LEVEL", "warning")
        monkeypatch.setenv("SWIFTPARSER_LOG_FORMAT", "TEXT")
        monkeypatch.setenv("SWIFTPARSER_STRICT_VALIDATION", "false")
        monkeypatch.setenv("SWIFTPARSER_ENABLE_METRICS", "0")
        monkeypatch.setenv("SWIFTPARSER_PREVIEW_LENGTH", "25")

        config = ParserConfig.load_from_env()

        assert config.environment == Environment.STAGING
        assert config.log_level == LogLevel.WARNING
        assert config.log_format == "text"
        assert config.strict_validation is False
        assert config.enable_metrics is False
        assert config.enable_logging is True
        assert config.preview_length == 25

    def test_load_from_env_custom_prefix(self, monkeypatch):
        """Test a custom variable prefix."""
        monkeypatch.setenv("BANKPARSE_ENABLE_LOGGING", "no")
        assert ParserConfig.load_from_env(prefix="BANKPARSE_").enable_logging is False

    def test_load_from_env_bad_preview_length(self, monkeypatch):
        """Test a non-integer preview length."""
        monkeypatch.setenv("SWIFTPARSER_PREVIEW_LENGTH", "many")
        with pytest.raises(ConfigurationException, match="PREVIEW_LENGTH must be an integer"):
            ParserConfig.load_from_env()

    def test_load_from_env_bad_environment(self, monkeypatch):
        """Test an unknown environment name."""
        monkeypatch.setenv("SWIFTPARSER_ENVIRONMENT", "moon")
        with pytest.raises(ConfigurationException, match="Invalid environment configuration"):
            ParserConfig.load_from_env()


class TestGlobalConfig:
    """Test the process-wide accessors."""

    def test_set_and_get(self):
        """Test set_config replaces the global instance."""
        config = ParserConfig(environment=Environment.TESTING)
        set_config(config)
        assert get_config() is config

    def test_set_invalid(self):
        """Test set_config validates first."""
        with pytest.raises(ConfigurationException):
            set_config(ParserConfig(log_format="xml"))

    def test_get_defaults_from_env(self, monkeypatch):
        """Test the first get_config call reads the environment."""
        monkeypatch.setenv("SWIFTPARSER_ENVIRONMENT", "testing")
        config_module._config = None
        assert get_config().environment == Environment.TESTING

    def test_load_config(self, tmp_path):
        """Test load_config reads a file and installs it."""
        path = tmp_path / "swiftparser.yaml"
        path.write_text("log_format: text\n")

        config = load_config(path)

        assert config.log_format == "text"
        assert get_config() is config
