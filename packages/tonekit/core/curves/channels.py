"""Per-channel tone curves.

Holds one independent CurveEngine for each of the red, green and blue
channels. Channels never influence each other; every operation simply
targets the named channel's engine.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from tonekit.core.config.models import EngineConfig
from tonekit.core.curves.codec import parse, serialize
from tonekit.core.curves.engine import CurveEngine
from tonekit.core.curves.models import CurvePoint
from tonekit.core.utils.logging import get_logger

logger = get_logger(__name__)

CHANNELS: tuple[str, ...] = ("r", "g", "b")


class ChannelNotFoundError(KeyError):
    """Raised when a channel name is not one of r, g, b."""


class ChannelCurves:
    """Three independent tone curves, one per color channel.

    Example:
        >>> curves = ChannelCurves()
        >>> curves.add_point(3, 128, 0.9, channel="r")
        >>> curves.weights("r")[128] > curves.weights("g")[128]
        True
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self._engines: dict[str, CurveEngine] = {name: CurveEngine(self.config) for name in CHANNELS}

    def engine(self, channel: str) -> CurveEngine:
        """The engine behind a channel.

        Raises:
            ChannelNotFoundError: If channel is not r, g or b.
        """
        try:
            return self._engines[channel]
        except KeyError:
            raise ChannelNotFoundError(
                f"Unknown channel {channel!r}, expected one of {', '.join(CHANNELS)}"
            ) from None

    def add_point(self, point_id: int, x: float, y: float, channel: str) -> None:
        self.engine(channel).add_point(point_id, x, y)

    def remove_point(self, point_id: int, channel: str) -> None:
        self.engine(channel).remove_point(point_id)

    def move_point(self, point_id: int, x: float, y: float, channel: str) -> None:
        self.engine(channel).move_point(point_id, x, y)

    def move_control_vector1(self, point_id: int, dx: float, dy: float, channel: str) -> None:
        self.engine(channel).move_control_vector1(point_id, dx, dy)

    def move_control_vector2(self, point_id: int, dx: float, dy: float, channel: str) -> None:
        self.engine(channel).move_control_vector2(point_id, dx, dy)

    def weights(self, channel: str) -> np.ndarray:
        return self.engine(channel).weights

    def all_weights(self) -> dict[str, np.ndarray]:
        """Weight tables keyed by channel."""
        return {name: engine.weights for name, engine in self._engines.items()}

    def points(self, channel: str) -> Mapping[int, CurvePoint]:
        return self.engine(channel).points

    def serialize(self) -> dict[str, str]:
        """Path text for every channel."""
        return {name: serialize(engine) for name, engine in self._engines.items()}

    @classmethod
    def parse(
        cls, paths: Mapping[str, str], base_id: int = 0, config: EngineConfig | None = None
    ) -> ChannelCurves:
        """Rebuild channel curves from path text.

        Channels missing from ``paths`` keep the default curve.

        Raises:
            ChannelNotFoundError: If paths names an unknown channel.
            FormatError: If any path text is invalid.
        """
        curves = cls(config)
        for channel, text in paths.items():
            curves.engine(channel)
            curves._engines[channel] = parse(text, base_id, curves.config)
        logger.debug("Parsed channel curves for %s", ", ".join(paths))
        return curves
