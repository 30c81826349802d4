"""Exceptions raised by the curve engine and the path codec.

Every failure is a permanent rejection of the call that raised it: the
engine validates before it mutates, so the prior state is left unchanged.
"""

from __future__ import annotations


class CurveError(Exception):
    """Base class for all curve errors."""


class RangeError(CurveError, ValueError):
    """A point coordinate lies outside its domain.

    x must be in [0, 255] and y in [0, 1].
    """

    def __init__(self, name: str, value: float, low: float, high: float) -> None:
        self.name = name
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{name} must be between {low:g} and {high:g}, got {value!r}")


class InvalidValueError(CurveError, ValueError):
    """A control vector offset is NaN or infinite."""

    def __init__(self, name: str, value: float) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name} value: {value!r}")


class NotFoundError(CurveError, KeyError):
    """An operation referenced an unknown point id."""

    def __init__(self, point_id: int) -> None:
        self.point_id = point_id
        super().__init__(point_id)

    def __str__(self) -> str:
        return f"Point with ID {self.point_id} does not exist"


class FormatError(CurveError, ValueError):
    """Serialized curve text could not be parsed.

    Attributes:
        text: The text that was being parsed
        position: Character offset of the offending token, if known
    """

    def __init__(self, message: str, text: str | None = None, position: int | None = None) -> None:
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
