"""JSON documents for storing curves.

A curve is stored in JSON as its compact path text. Validation parses the
text, so a document that loads is guaranteed to rebuild an engine.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tonekit.core.curves.channels import ChannelCurves
from tonekit.core.curves.codec import parse, serialize, try_parse
from tonekit.core.curves.engine import CurveEngine

DEFAULT_PATH = serialize(CurveEngine())


def _check_path(value: str) -> str:
    _, ok = try_parse(value)
    if not ok:
        raise ValueError(f"Invalid curve path: {value!r}")
    return value


class CurveDocument(BaseModel):
    """A single tone curve.

    Example:
        >>> doc = CurveDocument.from_engine(CurveEngine())
        >>> doc.model_dump_json()
        '{"path":"M 0 0.5 C 10 0.5 245 0.5 255 0.5"}'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(default=DEFAULT_PATH, description="Curve as path text")

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        return _check_path(value)

    @classmethod
    def from_engine(cls, engine: CurveEngine) -> CurveDocument:
        return cls(path=serialize(engine))

    def to_engine(self, base_id: int = 0) -> CurveEngine:
        return parse(self.path, base_id)


class ChannelCurvesDocument(BaseModel):
    """Red, green and blue tone curves."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    r: str = Field(default=DEFAULT_PATH, description="Red channel path text")
    g: str = Field(default=DEFAULT_PATH, description="Green channel path text")
    b: str = Field(default=DEFAULT_PATH, description="Blue channel path text")

    @field_validator("r", "g", "b")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        return _check_path(value)

    @classmethod
    def from_channels(cls, curves: ChannelCurves) -> ChannelCurvesDocument:
        return cls(**curves.serialize())

    def to_channels(self, base_id: int = 0) -> ChannelCurves:
        return ChannelCurves.parse(self.model_dump(), base_id)
