"""Tone curve engine, path codec and models."""

from tonekit.core.curves.channels import CHANNELS, ChannelCurves, ChannelNotFoundError
from tonekit.core.curves.codec import parse, serialize, to_path, try_parse
from tonekit.core.curves.engine import CurveEngine
from tonekit.core.curves.errors import (
    CurveError,
    FormatError,
    InvalidValueError,
    NotFoundError,
    RangeError,
)
from tonekit.core.curves.models import CurvePoint
from tonekit.core.curves.segments import BezierSegment

__all__ = [
    "CHANNELS",
    "BezierSegment",
    "ChannelCurves",
    "ChannelNotFoundError",
    "CurveEngine",
    "CurveError",
    "CurvePoint",
    "FormatError",
    "InvalidValueError",
    "NotFoundError",
    "RangeError",
    "parse",
    "serialize",
    "to_path",
    "try_parse",
]
