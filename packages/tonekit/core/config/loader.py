"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from tonekit.core.config.models import AppConfig, EngineConfig
from tonekit.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("config.json")
        'json'
        >>> detect_format("config.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root in {path} must be a mapping, got {type(content).__name__}")

    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              When None or missing on disk, defaults are used.

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If config is invalid
    """
    if path is None or not Path(path).exists():
        logger.debug("No config file at %s, using defaults", path)
        return AppConfig()

    return AppConfig.model_validate(load_config(path))


def load_engine_config(path: str | Path) -> EngineConfig:
    """Load only the engine section of a config file.

    Accepts either a full app config (with an ``engine`` key) or a file that
    holds the engine settings at its root.

    Example:
        >>> config = load_engine_config("engine.yaml")
        >>> engine = CurveEngine(config)
    """
    raw = load_config(path)
    if "engine" in raw:
        raw = raw["engine"]
    return EngineConfig.model_validate(raw)


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (defaults if None)
    """
    if config is None:
        config = AppConfig()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
