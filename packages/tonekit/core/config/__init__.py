"""Configuration management for Tonekit."""

from tonekit.core.config.loader import (
    configure_logging,
    load_app_config,
    load_config,
    load_engine_config,
)
from tonekit.core.config.models import AppConfig, EngineConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "EngineConfig",
    "LoggingConfig",
    "configure_logging",
    "load_app_config",
    "load_config",
    "load_engine_config",
]
