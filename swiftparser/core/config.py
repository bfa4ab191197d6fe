"""
swiftparser - Configuration Management

Dataclass-based configuration for the parsing façade, loadable from YAML
files or environment variables.
"""

import os
import yaml
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from pathlib import Path
from enum import Enum
import logging

from .exceptions import ConfigurationException

logger = logging.getLogger(__name__)

LOG_FORMATS = ("json", "text")


class Environment(str, Enum):
    """Environment types for configuration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ParserConfig:
    """Main configuration class."""

    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "json"

    # Façade behaviour
    enable_logging: bool = True
    strict_validation: bool = True
    enable_metrics: bool = True

    # Number of payload characters echoed into log records
    preview_length: int = 100

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationException(
                f"Configuration file must contain a mapping: {config_path}"
            )

        return cls.from_dict(config_data)

    @classmethod
    def load_from_env(cls, prefix: str = "SWIFTPARSER_") -> "ParserConfig":
        """Load configuration from environment variables."""
        config = cls()

        try:
            config.environment = Environment(
                os.getenv(f"{prefix}ENVIRONMENT", config.environment.value)
            )
            config.log_level = LogLevel(
                os.getenv(f"{prefix}LOG_LEVEL", config.log_level.value).upper()
            )
        except ValueError as e:
            raise ConfigurationException(f"Invalid environment configuration: {e}")

        config.log_format = os.getenv(f"{prefix}LOG_FORMAT", config.log_format).lower()

        for key in ("enable_logging", "strict_validation", "enable_metrics"):
            raw = os.getenv(f"{prefix}{key.upper()}")
            if raw is not None:
                setattr(config, key, _env_bool(raw))

        preview = os.getenv(f"{prefix}PREVIEW_LENGTH")
        if preview is not None:
            try:
                config.preview_length = int(preview)
            except ValueError:
                raise ConfigurationException(
                    f"PREVIEW_LENGTH must be an integer, got {preview!r}",
                    config_key="preview_length",
                )

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary."""
        config = cls()

        try:
            if "environment" in data:
                config.environment = Environment(data["environment"])
            if "log_level" in data:
                config.log_level = LogLevel(str(data["log_level"]).upper())
        except ValueError as e:
            raise ConfigurationException(f"Invalid configuration value: {e}")

        if "log_format" in data:
            config.log_format = str(data["log_format"]).lower()
        for key in ("enable_logging", "strict_validation", "enable_metrics"):
            if key in data:
                setattr(config, key, bool(data[key]))
        if "preview_length" in data:
            config.preview_length = int(data["preview_length"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "log_level": self.log_level.value,
            "log_format": self.log_format,
            "enable_logging": self.enable_logging,
            "strict_validation": self.strict_validation,
            "enable_metrics": self.enable_metrics,
            "preview_length": self.preview_length,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        if self.log_format not in LOG_FORMATS:
            errors.append(
                f"Log format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )
        if self.preview_length <= 0:
            errors.append("Preview length must be positive")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )


# Global configuration instance
_config: Optional[ParserConfig] = None


def get_config() -> ParserConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ParserConfig.load_from_env()
    return _config


def set_config(config: ParserConfig) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config


def load_config(config_path: Union[str, Path]) -> ParserConfig:
    """Load and set configuration from file."""
    config = ParserConfig.load_from_file(config_path)
    set_config(config)
    logger.info(f"Loaded swiftparser configuration from {config_path}")
    return config
