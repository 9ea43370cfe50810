"""Configuration adapters."""

from fine_dust.adapters.config.app_config import AppConfig, ConfigurationError

__all__ = ["AppConfig", "ConfigurationError"]
