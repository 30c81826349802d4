"""Tests for engine configuration and config file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError
import pytest
import yaml

import tonekit.core.config.loader as config_loader
from tonekit.core.config import AppConfig, EngineConfig, LoggingConfig
from tonekit.core.curves.engine import CurveEngine


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "engine": {"collision_epsilon": 0.01, "max_t_iterations": 30},
        "logging": {"level": "DEBUG", "format": "%(message)s"},
    }


class TestModels:
    """Tests for the config models."""

    def test_engine_defaults(self):
        """Defaults match the engine's built-in numerics."""
        config = EngineConfig()
        assert config.collision_epsilon == 0.001
        assert config.default_cv1 == (-10.0, 0.0)
        assert config.default_cv2 == (10.0, 0.0)
        assert config.max_t_iterations == 20
        assert config.t_tolerance == 1e-4
        assert config.close_tolerance == 1e-3

    @pytest.mark.parametrize(
        "overrides",
        [
            {"collision_epsilon": 0.0},
            {"max_t_iterations": 0},
            {"t_tolerance": -1.0},
            {"unknown": 1},
        ],
    )
    def test_engine_rejects_bad_values(self, overrides):
        """Out-of-range and unknown settings fail validation."""
        with pytest.raises(ValidationError):
            EngineConfig(**overrides)

    def test_engine_config_is_frozen(self):
        """Engine config cannot be mutated."""
        with pytest.raises(ValidationError):
            EngineConfig().collision_epsilon = 0.5  # type: ignore[misc]

    def test_logging_level_pattern(self):
        """Only standard level names are accepted."""
        assert LoggingConfig(level="WARNING").level == "WARNING"
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_custom_default_vectors(self):
        """New points use the configured control vectors."""
        engine = CurveEngine(EngineConfig(default_cv1=(-5.0, 0.0), default_cv2=(20.0, 0.1)))
        point = engine.points[1]
        assert (point.cv1.dx, point.cv1.dy) == (-5.0, 0.0)
        assert (point.cv2.dx, point.cv2.dy) == (20.0, 0.1)


def test_detect_format():
    """Format is chosen from the file suffix."""
    assert config_loader.detect_format("config.json") == "json"
    assert config_loader.detect_format(Path("config.YAML")) == "yaml"
    assert config_loader.detect_format("config.yml") == "yaml"


def test_detect_format_invalid():
    """Unknown suffixes are rejected."""
    with pytest.raises(ValueError) as exc_info:
        config_loader.detect_format("config.txt")

    assert "Unsupported config format" in str(exc_info.value)


def test_load_config_json(tmp_path, sample_config_data):
    """JSON files load into a dict."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config_data))

    assert config_loader.load_config(config_file) == sample_config_data


def test_load_config_yaml(tmp_path, sample_config_data):
    """YAML files load into a dict."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data))

    assert config_loader.load_config(config_file) == sample_config_data


def test_load_config_empty_yaml(tmp_path):
    """An empty YAML file is an empty mapping."""
    config_file = tmp_path / "empty.yml"
    config_file.write_text("")

    assert config_loader.load_config(config_file) == {}


def test_load_config_errors(tmp_path):
    """Missing files, bad content and non-mapping roots are reported."""
    with pytest.raises(FileNotFoundError):
        config_loader.load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        config_loader.load_config(broken)

    listed = tmp_path / "list.yaml"
    listed.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="must be a mapping"):
        config_loader.load_config(listed)


def test_load_app_config(tmp_path, sample_config_data):
    """App config validates both sections."""
    config_file = tmp_path / "tonekit.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data))

    config = config_loader.load_app_config(config_file)

    assert isinstance(config, AppConfig)
    assert config.engine.collision_epsilon == 0.01
    assert config.engine.max_t_iterations == 30
    assert config.logging.level == "DEBUG"


def test_load_app_config_defaults(tmp_path):
    """No path, or a missing file, gives defaults."""
    assert config_loader.load_app_config() == AppConfig()
    assert config_loader.load_app_config(tmp_path / "absent.json") == AppConfig()


def test_load_engine_config(tmp_path, sample_config_data):
    """Engine settings are read nested or at the root."""
    nested = tmp_path / "app.json"
    nested.write_text(json.dumps(sample_config_data))
    flat = tmp_path / "engine.yaml"
    flat.write_text(yaml.safe_dump({"t_tolerance": 1e-6}))

    assert config_loader.load_engine_config(nested).collision_epsilon == 0.01
    assert config_loader.load_engine_config(flat).t_tolerance == 1e-6


def test_configure_logging_from_config(capsys):
    """Logging settings from the app config are applied."""
    config = AppConfig(logging=LoggingConfig(level="WARNING", format="%(levelname)s:%(message)s"))
    try:
        config_loader.configure_logging(config)
        logging.getLogger("tonekit.test.config").warning("careful")
        logging.getLogger("tonekit.test.config").info("hidden")

        out = capsys.readouterr().out
        assert "WARNING:careful" in out
        assert "hidden" not in out
    finally:
        logging.basicConfig(level=logging.WARNING, handlers=[logging.NullHandler()], force=True)
