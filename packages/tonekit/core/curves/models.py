"""Curve schema models.

This module defines the control point of the tone curve:
- CurvePoint: A point with an id, a position and optional control vectors

Positions and control vectors are the shared geometry primitives
(Point2, Vector2). All models are immutable (frozen=True); the engine
replaces a CurvePoint instead of mutating it, so objects handed to callers
never change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tonekit.core.geometry import Point2, Vector2

# Curve domain
X_MIN = 0.0
X_MAX = 255.0
Y_MIN = 0.0
Y_MAX = 1.0

# Number of entries in the weight table (one per 8-bit input level)
TABLE_SIZE = 256


class CurvePoint(BaseModel):
    """A control point of the tone curve.

    Attributes:
        id: Caller-assigned identifier, unique within an engine.
        position: Position with x in the [0, 255] domain and y the weight.
        cv1: Incoming (left) control vector, relative to position.
        cv2: Outgoing (right) control vector, relative to position.

    A point with only cv2 starts a curve, a point with only cv1 ends one.

    Example:
        >>> point = CurvePoint(
        ...     id=1, position=Point2(x=0, y=0.5), cv2=Vector2(dx=10, dy=0)
        ... )
        >>> point.control_point2
        Point2(x=10.0, y=0.5)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int
    position: Point2
    cv1: Vector2 | None = Field(default=None, description="Incoming tangent offset")
    cv2: Vector2 | None = Field(default=None, description="Outgoing tangent offset")

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def control_point1(self) -> Point2 | None:
        """Absolute position of the incoming handle, or None."""
        return self.position + self.cv1 if self.cv1 is not None else None

    @property
    def control_point2(self) -> Point2 | None:
        """Absolute position of the outgoing handle, or None."""
        return self.position + self.cv2 if self.cv2 is not None else None


__all__ = [
    "TABLE_SIZE",
    "X_MAX",
    "X_MIN",
    "Y_MAX",
    "Y_MIN",
    "CurvePoint",
    "Point2",
    "Vector2",
]
