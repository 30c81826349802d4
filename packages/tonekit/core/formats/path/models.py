"""Path models.

A path is a sequence of cubic Bezier segments in absolute coordinates.
Lines are stored as cubics with their handles on the straight segment.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from tonekit.core.geometry import Point2


class PathSegment(BaseModel):
    """One cubic Bezier segment.

    Attributes:
        start: Segment start (the previous segment's end, or the move target).
        c1: First control point (absolute).
        c2: Second control point (absolute).
        end: Segment end.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: Point2
    c1: Point2
    c2: Point2
    end: Point2

    @classmethod
    def line(cls, start: Point2, end: Point2) -> PathSegment:
        """Straight segment as a cubic with handles at 1/3 and 2/3.

        Example:
            >>> seg = PathSegment.line(Point2(x=0, y=0), Point2(x=3, y=3))
            >>> seg.c1, seg.c2
            (Point2(x=1.0, y=1.0), Point2(x=2.0, y=2.0))
        """
        return cls(
            start=start,
            c1=start.lerp(end, 1.0 / 3.0),
            c2=start.lerp(end, 2.0 / 3.0),
            end=end,
        )


class Path(BaseModel):
    """An ordered list of connected cubic segments.

    Attributes:
        segments: The cubic segments, in drawing order.
        origin: Target of the first move. Kept so that a path made of a
            single move still records its point.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    segments: tuple[PathSegment, ...] = Field(default_factory=tuple)
    origin: Point2 | None = None

    @classmethod
    def from_segments(cls, segments: Iterable[PathSegment], origin: Point2 | None = None) -> Path:
        return cls(segments=tuple(segments), origin=origin)

    @property
    def start(self) -> Point2 | None:
        if self.segments:
            return self.segments[0].start
        return self.origin

    @property
    def end(self) -> Point2 | None:
        return self.segments[-1].end if self.segments else None

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:  # type: ignore[override]
        return iter(self.segments)

    def __str__(self) -> str:
        from tonekit.core.formats.path.writer import format_path

        return format_path(self)
