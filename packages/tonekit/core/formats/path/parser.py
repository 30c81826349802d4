"""Path text parser.

Grammar (whitespace or commas separate arguments):

    M x y                    move to, starts a subpath
    L x y                    line to, stored as an equivalent cubic
    C c1x c1y c2x c2y x y    cubic Bezier to
    Z                        close: line back to the subpath start when the
                             gap exceeds the close tolerance

Command letters are case-insensitive; lowercase takes coordinates relative to
the current position. A command may be followed by several coordinate groups,
in which case it repeats (further groups after M are lines). Numbers always
use a period as decimal separator.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from tonekit.core.formats.path.models import Path, PathSegment
from tonekit.core.geometry import Point2
from tonekit.core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CLOSE_TOLERANCE = 1e-3

# Arguments per coordinate group
_ARITY = {"M": 2, "L": 2, "C": 6, "Z": 0}

_SEPARATOR = re.compile(r"[\s,]*")
_COMMAND = re.compile(r"[A-Za-z]")
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class PathSyntaxError(ValueError):
    """Path text does not follow the grammar.

    Attributes:
        reason: What was wrong, without the offset
        text: The text being parsed
        position: Character offset of the offending token
    """

    def __init__(self, message: str, text: str, position: int) -> None:
        self.reason = message
        self.text = text
        self.position = position
        super().__init__(f"{message} (at offset {position})")


@dataclass
class _Command:
    letter: str
    position: int
    args: list[float]


def _tokenize(text: str) -> list[_Command]:
    """Split path text into commands with their numeric arguments."""
    commands: list[_Command] = []
    pos = _SEPARATOR.match(text, 0).end()  # type: ignore[union-attr]

    while pos < len(text):
        number = _NUMBER.match(text, pos)
        if number:
            if not commands:
                raise PathSyntaxError("Coordinates before first command", text, pos)
            value = float(number.group())
            if not math.isfinite(value):
                raise PathSyntaxError(f"Number out of range: {number.group()}", text, pos)
            commands[-1].args.append(value)
            pos = number.end()
        else:
            command = _COMMAND.match(text, pos)
            if not command:
                raise PathSyntaxError(f"Unexpected character {text[pos]!r}", text, pos)
            commands.append(_Command(letter=command.group(), position=pos, args=[]))
            pos = command.end()

        pos = _SEPARATOR.match(text, pos).end()  # type: ignore[union-attr]

    return commands


def _groups(command: _Command, text: str) -> list[list[float]]:
    """Split a command's arguments into coordinate groups."""
    arity = _ARITY[command.letter.upper()]
    args = command.args
    if not args or len(args) % arity:
        raise PathSyntaxError(
            f"Command {command.letter!r} expects groups of {arity} numbers, got {len(args)}",
            text,
            command.position,
        )
    return [args[i : i + arity] for i in range(0, len(args), arity)]


def _points(group: list[float], base: Point2 | None) -> list[Point2]:
    """Coordinate pairs of a group as points, offset by base when relative."""
    ox, oy = (base.x, base.y) if base is not None else (0.0, 0.0)
    return [Point2(x=ox + group[i], y=oy + group[i + 1]) for i in range(0, len(group), 2)]


def parse_path(text: str, close_tolerance: float = DEFAULT_CLOSE_TOLERANCE) -> Path:
    """Parse path text into cubic segments.

    Args:
        text: Path text. Blank text gives an empty path.
        close_tolerance: Z only adds a closing segment when the current
            position differs from the subpath start by more than this in x or y.

    Returns:
        Parsed Path (lines and closes converted to cubics). Its origin is the
        target of the first move.

    Raises:
        PathSyntaxError: On an unknown command, a drawing command before the
            first M, or a malformed coordinate list.

    Example:
        >>> path = parse_path("M 0 0.5 C 10 0.5 245 0.5 255 0.5")
        >>> len(path), path.end
        (1, Point2(x=255.0, y=0.5))
    """
    segments: list[PathSegment] = []
    origin: Point2 | None = None
    current: Point2 | None = None
    subpath_start: Point2 | None = None

    for command in _tokenize(text):
        letter = command.letter.upper()
        relative = command.letter.islower()

        if letter not in _ARITY:
            raise PathSyntaxError(f"Unsupported command {command.letter!r}", text, command.position)

        if letter == "M":
            first, *rest = _groups(command, text)
            (target,) = _points(first, current if relative else None)
            current = subpath_start = target
            if origin is None:
                origin = target
            # Further pairs after a move are lines
            for group in rest:
                (end,) = _points(group, current if relative else None)
                segments.append(PathSegment.line(current, end))
                current = end
            continue

        if current is None or subpath_start is None:
            raise PathSyntaxError(
                f"Command {command.letter!r} before initial move", text, command.position
            )

        if letter == "Z":
            if command.args:
                raise PathSyntaxError("Z takes no coordinates", text, command.position)
            if (
                abs(current.x - subpath_start.x) > close_tolerance
                or abs(current.y - subpath_start.y) > close_tolerance
            ):
                segments.append(PathSegment.line(current, subpath_start))
            current = subpath_start
            continue

        for group in _groups(command, text):
            points = _points(group, current if relative else None)
            if letter == "C":
                c1, c2, end = points
                segments.append(PathSegment(start=current, c1=c1, c2=c2, end=end))
            else:
                (end,) = points
                segments.append(PathSegment.line(current, end))
            current = end

    logger.debug("Parsed path with %d segments", len(segments))
    return Path.from_segments(segments, origin=origin)
