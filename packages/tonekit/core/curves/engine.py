"""Tone curve engine.

Owns the control points of one tone curve and derives the 256-entry weight
table from them. Points are indexed twice: by id, and by x in a sorted key
list. Adjacent points (by x) form cubic Bezier segments which are cached per
(left id, right id) pair; every mutation clears that cache and marks the
table stale, and the table is recomputed on the next read.

The engine does no locking. Callers that share an instance between threads
serialize access themselves.
"""

from __future__ import annotations

import bisect
import copy
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

import numpy as np

from tonekit.core.config.models import EngineConfig
from tonekit.core.curves.errors import InvalidValueError, NotFoundError, RangeError
from tonekit.core.curves.models import (
    TABLE_SIZE,
    X_MAX,
    X_MIN,
    Y_MAX,
    Y_MIN,
    CurvePoint,
)
from tonekit.core.curves.segments import BezierSegment
from tonekit.core.geometry import Point2, Vector2
from tonekit.core.utils.logging import get_logger
from tonekit.core.utils.math import clamp, is_finite

if TYPE_CHECKING:
    from tonekit.core.formats.path import Path

logger = get_logger(__name__)

NEUTRAL_WEIGHT = 0.5

SegmentKey = tuple[int, int]


def _validate_position(x: float, y: float) -> None:
    # Written as negated ranges so NaN fails too
    if not (X_MIN <= x <= X_MAX):
        raise RangeError("x", x, X_MIN, X_MAX)
    if not (Y_MIN <= y <= Y_MAX):
        raise RangeError("y", y, Y_MIN, Y_MAX)


def _validate_offset(dx: float, dy: float) -> None:
    if not is_finite(dx):
        raise InvalidValueError("dx", dx)
    if not is_finite(dy):
        raise InvalidValueError("dy", dy)


class CurveEngine:
    """Piecewise cubic Bezier tone curve over x in [0, 255].

    A new engine holds two points: id 1 at (0, 0.5) and id 2 at (255, 0.5).

    Example:
        >>> engine = CurveEngine()
        >>> engine.add_point(3, 128, 0.8)
        >>> engine.move_control_vector2(3, 20, 0.05)
        >>> weights = engine.weights
        >>> weights.shape
        (256,)
    """

    def __init__(self, config: EngineConfig | None = None, *, with_defaults: bool = True) -> None:
        """Initialize the engine.

        Args:
            config: Numeric settings (collision epsilon, default handles,
                t-search limits). Defaults to EngineConfig().
            with_defaults: Start with the two default points. When False the
                engine starts empty.
        """
        self.config = config or EngineConfig()
        self._points_by_id: dict[int, CurvePoint] = {}
        self._sorted_xs: list[float] = []
        self._ids_by_x: dict[float, int] = {}
        self._segment_cache: dict[SegmentKey, BezierSegment] = {}
        self._weights = np.full(TABLE_SIZE, NEUTRAL_WEIGHT, dtype=np.float64)
        self._stale = True

        if with_defaults:
            self.add_point(1, X_MIN, NEUTRAL_WEIGHT)
            self.add_point(2, X_MAX, NEUTRAL_WEIGHT)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def points(self) -> Mapping[int, CurvePoint]:
        """Read-only id -> point view."""
        return MappingProxyType(self._points_by_id)

    def get_points(self) -> Mapping[int, CurvePoint]:
        return self.points

    @property
    def weights(self) -> np.ndarray:
        """The 256-entry weight table, recomputed first if stale.

        Each read returns a new read-only snapshot with every entry in [0, 1];
        later edits do not change an array already handed out.
        """
        if self._stale:
            self._calculate_weights()
        table = self._weights.copy()
        table.flags.writeable = False
        return table

    def get_weights(self) -> np.ndarray:
        return self.weights

    @property
    def is_stale(self) -> bool:
        return self._stale

    def sorted_points(self) -> list[CurvePoint]:
        """Points ordered by x."""
        return [self._points_by_id[self._ids_by_x[x]] for x in self._sorted_xs]

    def segments(self) -> list[tuple[SegmentKey, BezierSegment]]:
        """Bezier segment for every x-adjacent pair of points, left to right."""
        points = self.sorted_points()
        return [
            ((left.id, right.id), BezierSegment.from_points(left, right))
            for left, right in zip(points, points[1:])
        ]

    def __len__(self) -> int:
        return len(self._points_by_id)

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._points_by_id

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self.sorted_points())

    def __str__(self) -> str:
        from tonekit.core.curves.codec import serialize

        return serialize(self)

    def __repr__(self) -> str:
        return f"CurveEngine(points={len(self)})"

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_point(self, point_id: int, x: float, y: float) -> None:
        """Add a point, replacing any point that already has this id.

        The new point gets the default control vectors. When x is already
        used by another point it is shifted right by the collision epsilon
        until unique.

        Raises:
            RangeError: If x is outside [0, 255] or y outside [0, 1].
        """
        _validate_position(x, y)

        existing = self._points_by_id.get(point_id)
        if existing is not None:
            self._remove_key(existing.x)

        x = self._unique_x(x)
        cv1 = Vector2(dx=self.config.default_cv1[0], dy=self.config.default_cv1[1])
        cv2 = Vector2(dx=self.config.default_cv2[0], dy=self.config.default_cv2[1])
        point = CurvePoint(id=point_id, position=Point2(x=x, y=y), cv1=cv1, cv2=cv2)

        self._points_by_id[point_id] = point
        self._insert_key(x, point_id)
        self._invalidate()
        logger.debug("Added point %d at (%s, %s)", point_id, x, y)

    def remove_point(self, point_id: int) -> None:
        """Remove a point.

        The engine does not enforce a minimum number of points.

        Raises:
            NotFoundError: If no point has this id.
        """
        point = self._get(point_id)

        del self._points_by_id[point_id]
        self._remove_key(point.x)
        self._invalidate()
        logger.debug("Removed point %d", point_id)

    def move_point(self, point_id: int, x: float, y: float) -> None:
        """Move a point, keeping its control vectors.

        Raises:
            RangeError: If x is outside [0, 255] or y outside [0, 1].
            NotFoundError: If no point has this id.
        """
        _validate_position(x, y)
        point = self._get(point_id)

        self._remove_key(point.x)
        x = self._unique_x(x)
        self._points_by_id[point_id] = point.model_copy(update={"position": Point2(x=x, y=y)})
        self._insert_key(x, point_id)
        self._invalidate()
        logger.debug("Moved point %d to (%s, %s)", point_id, x, y)

    def move_control_vector1(self, point_id: int, dx: float, dy: float) -> None:
        """Set the incoming control vector to (dx, dy), relative to the point.

        Raises:
            InvalidValueError: If dx or dy is NaN or infinite.
            NotFoundError: If no point has this id.
        """
        self._set_control_vector(point_id, "cv1", dx, dy)

    def move_control_vector2(self, point_id: int, dx: float, dy: float) -> None:
        """Set the outgoing control vector to (dx, dy), relative to the point.

        Raises:
            InvalidValueError: If dx or dy is NaN or infinite.
            NotFoundError: If no point has this id.
        """
        self._set_control_vector(point_id, "cv2", dx, dy)

    def clear(self) -> None:
        """Remove every point. An empty engine yields a flat 0.5 table."""
        self._points_by_id.clear()
        self._sorted_xs.clear()
        self._ids_by_x.clear()
        self._invalidate()

    def load_path(self, path: Path, base_id: int = 0) -> CurveEngine:
        """Replace the engine's points with the ones described by a path.

        Each distinct segment endpoint (by exact position) becomes a point;
        ids are assigned sequentially from base_id. For every segment the
        start point's outgoing vector is set from the first handle and the end
        point's incoming vector from the second handle. A point shared by
        several segments keeps the vectors written last for each side.

        The path is rebuilt on a scratch engine first, so a failure leaves
        this engine unchanged.

        Endpoints just above x=255 come from collision shifts at the upper
        bound. Each one is added back at 255 and shifted again, which gives
        the same x as before since points are added in x order. A path
        without segments but with a move target gives a single point.

        Raises:
            RangeError: If a segment endpoint lies outside the domain.

        Returns:
            self, to allow chaining.
        """
        scratch = CurveEngine(self.config, with_defaults=False)
        ids_by_position: dict[tuple[float, float], int] = {}
        seq = base_id
        # At most one shift per point already placed
        shift_limit = X_MAX + self.config.collision_epsilon * (len(path) + 1.5)

        if not path.segments and path.start is not None:
            scratch.add_point(seq, path.start.x, path.start.y)

        for segment in path.segments:
            ids = []
            for position in (segment.start, segment.end):
                key = position.as_tuple()
                if key not in ids_by_position:
                    x = X_MAX if X_MAX < position.x <= shift_limit else position.x
                    scratch.add_point(seq, x, position.y)
                    ids_by_position[key] = seq
                    seq += 1
                ids.append(ids_by_position[key])

            start_id, end_id = ids
            scratch._replace(start_id, cv2=segment.c1 - segment.start)
            scratch._replace(end_id, cv1=segment.c2 - segment.end)

        self._points_by_id = scratch._points_by_id
        self._sorted_xs = scratch._sorted_xs
        self._ids_by_x = scratch._ids_by_x
        self._invalidate()
        logger.debug("Loaded %d points from %d path segments", len(self), len(path))
        return self

    def copy(self) -> CurveEngine:
        """Independent copy of this engine."""
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get(self, point_id: int) -> CurvePoint:
        try:
            return self._points_by_id[point_id]
        except KeyError:
            raise NotFoundError(point_id) from None

    def _replace(self, point_id: int, **update: Vector2) -> None:
        self._points_by_id[point_id] = self._points_by_id[point_id].model_copy(update=update)
        self._invalidate()

    def _set_control_vector(self, point_id: int, name: str, dx: float, dy: float) -> None:
        _validate_offset(dx, dy)
        self._get(point_id)
        self._replace(point_id, **{name: Vector2(dx=dx, dy=dy)})
        logger.debug("Set %s of point %d to (%s, %s)", name, point_id, dx, dy)

    def _unique_x(self, x: float) -> float:
        original = x
        while x in self._ids_by_x:
            x += self.config.collision_epsilon
        if x != original:
            logger.debug("x=%s already taken, shifted to %s", original, x)
        return x

    def _insert_key(self, x: float, point_id: int) -> None:
        bisect.insort(self._sorted_xs, x)
        self._ids_by_x[x] = point_id

    def _remove_key(self, x: float) -> None:
        del self._ids_by_x[x]
        del self._sorted_xs[bisect.bisect_left(self._sorted_xs, x)]

    def _invalidate(self) -> None:
        self._segment_cache.clear()
        self._stale = True

    def _calculate_weights(self) -> None:
        points = self.sorted_points()

        if not points:
            self._weights.fill(NEUTRAL_WEIGHT)
        elif len(points) == 1:
            self._weights.fill(clamp(points[0].y, 0.0, 1.0))
        else:
            for key, segment in self.segments():
                self._segment_cache.setdefault(key, segment)
            self._fill_from_segments(points)

        self._stale = False
        logger.debug("Recalculated weight table from %d points", len(points))

    def _fill_from_segments(self, points: list[CurvePoint]) -> None:
        xs = np.arange(TABLE_SIZE, dtype=np.float64)
        first, last = points[0], points[-1]

        self._weights[xs <= first.x] = clamp(first.y, 0.0, 1.0)
        self._weights[xs >= last.x] = clamp(last.y, 0.0, 1.0)

        inner = (xs > first.x) & (xs < last.x)
        # Enclosing segment: the last point with point.x <= x on the left
        left_index = np.searchsorted(self._sorted_xs, xs, side="right") - 1

        for i in np.unique(left_index[inner]):
            left, right = points[i], points[i + 1]
            mask = inner & (left_index == i)
            if right.x == left.x:
                self._weights[mask] = clamp(left.y, 0.0, 1.0)
                continue
            segment = self._segment_cache[(left.id, right.id)]
            self._weights[mask] = segment.values_at(
                xs[mask],
                max_iterations=self.config.max_t_iterations,
                tolerance=self.config.t_tolerance,
            )

    def __deepcopy__(self, memo: dict) -> CurveEngine:
        clone = CurveEngine(self.config, with_defaults=False)
        clone._points_by_id = dict(self._points_by_id)
        clone._sorted_xs = list(self._sorted_xs)
        clone._ids_by_x = dict(self._ids_by_x)
        return clone
