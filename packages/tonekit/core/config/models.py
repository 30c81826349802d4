"""Configuration models for Tonekit."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EngineConfig(BaseModel):
    """Numeric behaviour of the curve engine and path codec."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    collision_epsilon: float = Field(
        default=0.001,
        gt=0.0,
        description="x offset applied repeatedly until a point's x key is unique",
    )

    default_cv1: tuple[float, float] = Field(
        default=(-10.0, 0.0),
        description="Incoming control vector given to every new point",
    )

    default_cv2: tuple[float, float] = Field(
        default=(10.0, 0.0),
        description="Outgoing control vector given to every new point",
    )

    max_t_iterations: int = Field(
        default=20, gt=0, description="Bisection steps when solving a segment for t"
    )

    t_tolerance: float = Field(
        default=1e-4, gt=0.0, description="Accepted |B(t).x - x| for the t search"
    )

    close_tolerance: float = Field(
        default=1e-3,
        ge=0.0,
        description="Z only draws a closing segment when the gap exceeds this in x or y",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level",
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (ignored when structured)",
    )

    structured: bool = Field(default=False, description="Emit JSON lines instead of text")

    filename: str | None = Field(default=None, description="Log file (stdout when None)")


class AppConfig(BaseModel):
    """Application configuration (engine numerics + logging)."""

    model_config = ConfigDict(extra="forbid")

    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
