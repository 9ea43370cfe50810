"""Adapters layer - external system integrations."""

from fine_dust.adapters.config import AppConfig, ConfigurationError

__all__ = ["AppConfig", "ConfigurationError"]
