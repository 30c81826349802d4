"""Path text codec for curve engines.

A curve is stored as path text: one ``M`` to the leftmost point followed by
one ``C`` per segment, all in absolute coordinates. Parsing rebuilds an
engine from any M/L/C/Z path. Point ids are not preserved across a round
trip, only the shape of the curve.

Example:
    >>> text = serialize(CurveEngine())
    >>> text
    'M 0 0.5 C 10 0.5 245 0.5 255 0.5'
    >>> engine, ok = try_parse(text)
    >>> ok
    True
"""

from __future__ import annotations

from tonekit.core.config.models import EngineConfig
from tonekit.core.curves.engine import CurveEngine
from tonekit.core.curves.errors import CurveError, FormatError
from tonekit.core.formats.path import Path, PathSegment, PathSyntaxError, format_path, parse_path
from tonekit.core.utils.logging import get_logger

logger = get_logger(__name__)


def to_path(engine: CurveEngine) -> Path:
    """The engine's segments as a path, starting at its leftmost point."""
    points = engine.sorted_points()
    return Path.from_segments(
        (
            PathSegment(start=segment.p0, c1=segment.p1, c2=segment.p2, end=segment.p3)
            for _, segment in engine.segments()
        ),
        origin=points[0].position if points else None,
    )


def serialize(engine: CurveEngine) -> str:
    """Serialize an engine to path text.

    A one-point engine serializes to a bare move to its point, and an empty
    engine to an empty string.
    """
    return format_path(to_path(engine))


def parse(text: str | None, base_id: int = 0, config: EngineConfig | None = None) -> CurveEngine:
    """Parse path text into a new engine.

    Args:
        text: Path text. Blank text (or None) gives the default two-point curve.
        base_id: First id assigned to reconstructed points.
        config: Engine settings for the new engine.

    Returns:
        New CurveEngine

    Raises:
        FormatError: If the text is not a valid path, or describes points
            outside the curve domain.
    """
    config = config or EngineConfig()

    if text is None or not text.strip():
        return CurveEngine(config)

    try:
        path = parse_path(text, close_tolerance=config.close_tolerance)
    except PathSyntaxError as e:
        raise FormatError(f"Unable to parse curve from {text!r}: {e.reason}", text, e.position) from e

    try:
        return CurveEngine(config, with_defaults=False).load_path(path, base_id)
    except CurveError as e:
        raise FormatError(f"Unable to parse curve from {text!r}: {e}", text) from e


def try_parse(
    text: str | None, base_id: int = 0, config: EngineConfig | None = None
) -> tuple[CurveEngine | None, bool]:
    """Parse path text, reporting failure instead of raising.

    Returns:
        (engine, True) on success, (None, False) otherwise.
    """
    try:
        return parse(text, base_id, config), True
    except FormatError as e:
        logger.debug("Rejected curve text: %s", e)
        return None, False
