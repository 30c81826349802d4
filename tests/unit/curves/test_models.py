"""Tests for curve point models and geometry primitives."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from tonekit.core.curves.models import CurvePoint, Point2, Vector2


class TestGeometry:
    """Tests for Point2 and Vector2."""

    def test_point_plus_vector(self) -> None:
        """Adding a vector offsets the point."""
        assert Point2(x=100, y=0.5) + Vector2(dx=-10, dy=0.25) == Point2(x=90, y=0.75)

    def test_point_minus_point(self) -> None:
        """The difference of two points is a vector."""
        assert Point2(x=100, y=0.5) - Point2(x=40, y=0.25) == Vector2(dx=60, dy=0.25)

    def test_point_plus_point_unsupported(self) -> None:
        """Points cannot be added to points."""
        with pytest.raises(TypeError):
            Point2(x=0, y=0) + Point2(x=1, y=1)  # type: ignore[operator]

    def test_lerp(self) -> None:
        """lerp walks the straight line between two points."""
        start, end = Point2(x=0, y=0), Point2(x=255, y=1)
        assert start.lerp(end, 0.0) == start
        assert start.lerp(end, 1.0) == end
        assert start.lerp(end, 0.5) == Point2(x=127.5, y=0.5)

    def test_frozen(self) -> None:
        """Geometry values are immutable and hashable."""
        point = Point2(x=1, y=0.5)
        with pytest.raises(ValidationError):
            point.x = 2  # type: ignore[misc]
        assert {point, Point2(x=1, y=0.5)} == {point}


class TestCurvePoint:
    """Tests for CurvePoint."""

    def test_control_points(self) -> None:
        """Handles are the position plus the control vectors."""
        point = CurvePoint(
            id=5,
            position=Point2(x=128, y=0.5),
            cv1=Vector2(dx=-20, dy=-0.25),
            cv2=Vector2(dx=20, dy=0.25),
        )
        assert point.x == 128
        assert point.y == 0.5
        assert point.control_point1 == Point2(x=108, y=0.25)
        assert point.control_point2 == Point2(x=148, y=0.75)

    def test_missing_vectors(self) -> None:
        """Absent control vectors give no handles."""
        point = CurvePoint(id=1, position=Point2(x=0, y=0))
        assert point.control_point1 is None
        assert point.control_point2 is None

    def test_immutable(self) -> None:
        """Points are replaced, never mutated."""
        point = CurvePoint(id=1, position=Point2(x=0, y=0))
        with pytest.raises(ValidationError):
            point.id = 2  # type: ignore[misc]

        moved = point.model_copy(update={"position": Point2(x=10, y=0.2)})
        assert point.x == 0
        assert moved.x == 10

    def test_extra_fields_rejected(self) -> None:
        """Unknown fields fail validation."""
        with pytest.raises(ValidationError):
            CurvePoint(id=1, position=Point2(x=0, y=0), weight=1.0)  # type: ignore[call-arg]
