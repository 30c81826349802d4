"""Shared utilities for Tonekit."""

from tonekit.core.utils.math import clamp, is_finite, lerp

__all__ = [
    "clamp",
    "is_finite",
    "lerp",
]
