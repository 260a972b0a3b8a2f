"""Converter configuration."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .schemas import TargetFormat

MAX_FILE_SIZE = 50 * 1024 * 1024


class ConverterConfig(BaseModel):
    """Tunables shared by the validator, the pipeline and the orchestrator.

    Attributes:
        max_file_size: Largest accepted input, in bytes (default 50 MiB)
        default_target: Target format restored on reset
        default_quality: Quality restored on reset (10-100)
        svg_fallback_size: Canvas used for SVGs without intrinsic dimensions
        background_color: Fill used when flattening alpha for jpeg/bmp
        completion_delay: Pause before reporting 100% (seconds, 0 disables)
        report_delay: Pause between 100% and committing the result
    """

    max_file_size: int = Field(MAX_FILE_SIZE, gt=0)
    default_target: TargetFormat = TargetFormat.PNG
    default_quality: int = Field(90, ge=10, le=100)
    svg_fallback_size: tuple[int, int] = (800, 600)
    background_color: tuple[int, int, int] = (255, 255, 255)
    completion_delay: float = Field(0.3, ge=0)
    report_delay: float = Field(0.5, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("svg_fallback_size")
    @classmethod
    def validate_fallback_size(cls, v: tuple[int, int]) -> tuple[int, int]:
        if v[0] <= 0 or v[1] <= 0:
            raise ValueError("SVG fallback size must be positive")
        return v

    @field_validator("background_color")
    @classmethod
    def validate_background_color(cls, v: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(c < 0 or c > 255 for c in v):
            raise ValueError("Background color channels must be in 0-255")
        return v
