"""2D geometry primitives shared by the curve engine and the path format.

- Point2: An absolute position (x, y)
- Vector2: A relative offset (dx, dy)

Both are immutable pydantic models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tonekit.core.utils.math import lerp


class Vector2(BaseModel):
    """A 2D offset relative to a position.

    Example:
        >>> Vector2(dx=10.0, dy=0.0).dx
        10.0
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dx: float
    dy: float


class Point2(BaseModel):
    """An absolute 2D position.

    Example:
        >>> Point2(x=0.0, y=0.5) + Vector2(dx=10.0, dy=0.25)
        Point2(x=10.0, y=0.75)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    x: float
    y: float

    def __add__(self, other: Vector2) -> Point2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Point2(x=self.x + other.dx, y=self.y + other.dy)

    def __sub__(self, other: Point2) -> Vector2:
        if not isinstance(other, Point2):
            return NotImplemented
        return Vector2(dx=self.x - other.x, dy=self.y - other.y)

    def lerp(self, other: Point2, t: float) -> Point2:
        """Point at fraction t of the way from self to other."""
        return Point2(x=lerp(self.x, other.x, t), y=lerp(self.y, other.y, t))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)
