"""Shared pytest fixtures for tonekit tests."""

from __future__ import annotations

import pytest

from tonekit.core.config import EngineConfig


@pytest.fixture
def engine_config() -> EngineConfig:
    """Engine settings with the default numerics."""
    return EngineConfig()
