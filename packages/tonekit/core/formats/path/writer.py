"""Path text output.

Numbers are written with a period as decimal separator regardless of
locale, using the shortest text that reads back to the same float.
"""

from __future__ import annotations

from tonekit.core.formats.path.models import Path
from tonekit.core.geometry import Point2


def format_number(value: float) -> str:
    """Format a coordinate for path text.

    Integral values are written without a fractional part and negative zero
    is written as 0.

    Example:
        >>> format_number(255.0)
        '255'
        >>> format_number(0.1)
        '0.1'
        >>> format_number(-0.0)
        '0'
    """
    value = float(value)
    if value == 0.0:
        return "0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _pair(point: Point2) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def format_path(path: Path) -> str:
    """Write a path as absolute commands.

    Emits one ``M`` to the first segment's start followed by one ``C`` per
    segment. Consecutive segments are assumed to be connected; when a segment
    does not start where the previous one ended a new ``M`` is emitted.
    No ``Z`` is written. A path with no segments is written as a bare move to
    its origin, or as an empty string when it has none.

    Example:
        >>> seg = PathSegment.line(Point2(x=0, y=0), Point2(x=3, y=0))
        >>> format_path(Path.from_segments([seg]))
        'M 0 0 C 1 0 2 0 3 0'
    """
    if not path.segments:
        return f"M {_pair(path.origin)}" if path.origin is not None else ""

    parts: list[str] = []
    current: Point2 | None = None

    for segment in path.segments:
        if current is None or segment.start != current:
            parts.append(f"M {_pair(segment.start)}")
        parts.append(f"C {_pair(segment.c1)} {_pair(segment.c2)} {_pair(segment.end)}")
        current = segment.end

    return " ".join(parts)
