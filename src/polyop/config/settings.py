"""Configuration settings for polyop."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_TOLERANCE = 1e-9


class GeometryConfig(BaseModel):
    """Configuration for polygon operations.

    The tolerance is an absolute distance in coordinate units. Points closer
    than the tolerance are treated as the same point, and intersection
    results closer than it to a vertex are snapped onto the vertex.

    The invert options replace an operand or the result by its complement.
    A complement is unbounded; it is represented by the same rings reversed,
    so its outer boundaries run clockwise.
    """

    tolerance: float = Field(
        default=DEFAULT_TOLERANCE,
        gt=0.0,
        le=1.0,
        description="Distance below which two points are considered equal",
    )
    validate_output: bool = Field(
        default=True,
        description="Reject output rings that cross themselves",
    )
    normalize_orientation: bool = Field(
        default=False,
        description="Re-orient input rings from their nesting depth before operating",
    )
    invert_a: bool = Field(
        default=False,
        description="Operate on the complement of the first polygon",
    )
    invert_b: bool = Field(
        default=False,
        description="Operate on the complement of the second polygon",
    )
    invert_result: bool = Field(
        default=False,
        description="Return the complement of the result",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PolyopSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolyopSettings:
    """Get default application settings."""
    return PolyopSettings()
