"""Shared pytest fixtures for curve tests."""

from __future__ import annotations

import math

import pytest

from tonekit.core.config import EngineConfig
from tonekit.core.curves.engine import CurveEngine


@pytest.fixture
def default_engine(engine_config: EngineConfig) -> CurveEngine:
    """Engine with the two default points at y=0.5."""
    return CurveEngine(engine_config)


@pytest.fixture
def empty_engine(engine_config: EngineConfig) -> CurveEngine:
    """Engine without any points."""
    return CurveEngine(engine_config, with_defaults=False)


@pytest.fixture
def ramp_engine() -> CurveEngine:
    """Ascending ramp from (0, 0) to (255, 1) with default handles."""
    engine = CurveEngine(with_defaults=False)
    engine.add_point(3, 0, 0.0)
    engine.add_point(4, 255, 1.0)
    return engine


@pytest.fixture
def four_point_engine() -> CurveEngine:
    """Zig-zag through four points with default handles."""
    engine = CurveEngine(with_defaults=False)
    engine.add_point(10, 0, 0.2)
    engine.add_point(11, 85, 0.8)
    engine.add_point(12, 170, 0.4)
    engine.add_point(13, 255, 0.6)
    return engine


@pytest.fixture
def s_curve_engine() -> CurveEngine:
    """Five-point S-curve with custom handles on every side."""
    engine = CurveEngine(with_defaults=False)
    engine.add_point(30, 0, 0.1)
    engine.add_point(31, 64, 0.2)
    engine.add_point(32, 128, 0.5)
    engine.add_point(33, 192, 0.8)
    engine.add_point(34, 255, 0.9)

    engine.move_control_vector2(30, 20, 0.0)
    engine.move_control_vector1(31, -20, 0.0)
    engine.move_control_vector2(31, 20, 0.1)
    engine.move_control_vector1(32, -20, -0.1)
    engine.move_control_vector2(32, 20, 0.1)
    engine.move_control_vector1(33, -20, -0.1)
    engine.move_control_vector2(33, 20, 0.0)
    engine.move_control_vector1(34, -20, 0.0)
    return engine


@pytest.fixture
def sine_engine() -> CurveEngine:
    """Eleven points along half a sine wave."""
    engine = CurveEngine(with_defaults=False)
    for i in range(11):
        x = i * 25.5
        y = math.sin(i * math.pi / 10) * 0.4 + 0.5
        engine.add_point(100 + i, x, y)
        if 0 < i < 10:
            engine.move_control_vector1(100 + i, -10, 0)
            engine.move_control_vector2(100 + i, 10, 0)
    return engine
