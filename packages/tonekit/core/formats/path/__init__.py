"""Path text format: cubic Bezier paths as M/L/C/Z commands."""

from tonekit.core.formats.path.models import Path, PathSegment
from tonekit.core.formats.path.parser import PathSyntaxError, parse_path
from tonekit.core.formats.path.writer import format_number, format_path

__all__ = [
    "Path",
    "PathSegment",
    "PathSyntaxError",
    "format_number",
    "format_path",
    "parse_path",
]
