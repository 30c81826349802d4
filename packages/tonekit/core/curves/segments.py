"""Cubic Bezier segments between x-adjacent curve points.

A segment spans two neighbouring points of the tone curve. Its four nodes are
the left position, the left point's outgoing handle, the right point's
incoming handle, and the right position. Evaluation is delegated to the
``bezier`` library; inverting the horizontal component (finding t for a given
x) is a bisection that assumes x grows with t along the segment.
"""

from __future__ import annotations

import bezier
import numpy as np

from tonekit.core.curves.models import CurvePoint
from tonekit.core.geometry import Point2

DEFAULT_MAX_T_ITERATIONS = 20
DEFAULT_T_TOLERANCE = 1e-4


class BezierSegment:
    """One cubic Bezier curve of the piecewise tone curve.

    Example:
        >>> segment = BezierSegment(
        ...     Point2(x=0, y=0), Point2(x=85, y=0), Point2(x=170, y=1), Point2(x=255, y=1)
        ... )
        >>> segment.evaluate(0.5)
        Point2(x=127.5, y=0.5)
    """

    __slots__ = ("_curve", "p0", "p1", "p2", "p3")

    def __init__(self, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> None:
        self.p0 = p0
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        nodes = np.asfortranarray(
            [
                [p0.x, p1.x, p2.x, p3.x],
                [p0.y, p1.y, p2.y, p3.y],
            ],
            dtype=np.float64,
        )
        self._curve = bezier.Curve(nodes, degree=3)

    @classmethod
    def from_points(cls, left: CurvePoint, right: CurvePoint) -> BezierSegment:
        """Build the segment spanning two x-adjacent points.

        A missing outgoing handle on the left point falls back to 1/3 of the
        horizontal span at the left y; a missing incoming handle on the right
        point falls back to 2/3 of the span at the right y.

        Args:
            left: Point with the smaller x.
            right: Point with the larger x.

        Returns:
            Segment whose end nodes are the two point positions.
        """
        p0 = left.position
        p3 = right.position
        span = p3.x - p0.x

        p1 = left.control_point2
        if p1 is None:
            p1 = Point2(x=p0.x + span / 3.0, y=p0.y)

        p2 = right.control_point1
        if p2 is None:
            p2 = Point2(x=p0.x + span * 2.0 / 3.0, y=p3.y)

        return cls(p0, p1, p2, p3)

    @property
    def nodes(self) -> tuple[Point2, Point2, Point2, Point2]:
        return (self.p0, self.p1, self.p2, self.p3)

    def evaluate(self, t: float) -> Point2:
        """Evaluate the curve at parameter t."""
        x, y = self._curve.evaluate(float(t))[:, 0]
        return Point2(x=float(x), y=float(y))

    def evaluate_many(self, ts: np.ndarray) -> np.ndarray:
        """Evaluate the curve at many parameters.

        Returns:
            Array of shape (2, len(ts)): row 0 holds x, row 1 holds y.
        """
        return self._curve.evaluate_multi(np.asarray(ts, dtype=np.float64))

    def solve_t(
        self,
        x: float,
        max_iterations: int = DEFAULT_MAX_T_ITERATIONS,
        tolerance: float = DEFAULT_T_TOLERANCE,
    ) -> float:
        """Find t such that the curve's x at t is approximately x.

        Bisection on [0, 1]: returns the first midpoint whose x lies within
        tolerance of the target, or the midpoint of the final bracket after
        max_iterations steps.
        """
        t_min, t_max = 0.0, 1.0

        for _ in range(max_iterations):
            t = (t_min + t_max) / 2.0
            px = self.evaluate(t).x

            if abs(px - x) < tolerance:
                return t

            if px < x:
                t_min = t
            else:
                t_max = t

        return (t_min + t_max) / 2.0

    def solve_t_many(
        self,
        xs: np.ndarray,
        max_iterations: int = DEFAULT_MAX_T_ITERATIONS,
        tolerance: float = DEFAULT_T_TOLERANCE,
    ) -> np.ndarray:
        """Vectorized ``solve_t``.

        Every target runs the same bisection as ``solve_t`` and stops on its
        own as soon as it is within tolerance, so the result matches calling
        ``solve_t`` once per target.
        """
        targets = np.asarray(xs, dtype=np.float64)
        t_min = np.zeros_like(targets)
        t_max = np.ones_like(targets)
        result = np.empty_like(targets)
        active = np.ones(targets.shape, dtype=bool)

        for _ in range(max_iterations):
            idx = np.flatnonzero(active)
            if idx.size == 0:
                break

            t = (t_min[idx] + t_max[idx]) / 2.0
            px = self.evaluate_many(t)[0]

            done = np.abs(px - targets[idx]) < tolerance
            below = ~done & (px < targets[idx])
            above = ~done & ~below

            result[idx[done]] = t[done]
            active[idx[done]] = False
            t_min[idx[below]] = t[below]
            t_max[idx[above]] = t[above]

        rest = np.flatnonzero(active)
        result[rest] = (t_min[rest] + t_max[rest]) / 2.0
        return result

    def value_at(
        self,
        x: float,
        max_iterations: int = DEFAULT_MAX_T_ITERATIONS,
        tolerance: float = DEFAULT_T_TOLERANCE,
    ) -> float:
        """Curve y at domain position x, clamped to [0, 1]."""
        t = self.solve_t(x, max_iterations, tolerance)
        return min(1.0, max(0.0, self.evaluate(t).y))

    def values_at(
        self,
        xs: np.ndarray,
        max_iterations: int = DEFAULT_MAX_T_ITERATIONS,
        tolerance: float = DEFAULT_T_TOLERANCE,
    ) -> np.ndarray:
        """Vectorized ``value_at``."""
        ts = self.solve_t_many(xs, max_iterations, tolerance)
        if ts.size == 0:
            return ts
        return np.clip(self.evaluate_many(ts)[1], 0.0, 1.0)

    def __repr__(self) -> str:
        nodes = ", ".join(f"({p.x:g}, {p.y:g})" for p in self.nodes)
        return f"BezierSegment({nodes})"
