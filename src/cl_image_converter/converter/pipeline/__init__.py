"""Raster conversion pipeline."""

from .strategies import (
    STRATEGIES,
    GifFirstFrameStrategy,
    PipelineStrategy,
    PreserveStrategy,
    RasterStrategy,
    SvgRasterStrategy,
)
from .task import ProgressCallback, RasterPipeline

__all__ = [
    "STRATEGIES",
    "GifFirstFrameStrategy",
    "PipelineStrategy",
    "PreserveStrategy",
    "ProgressCallback",
    "RasterPipeline",
    "RasterStrategy",
    "SvgRasterStrategy",
]
