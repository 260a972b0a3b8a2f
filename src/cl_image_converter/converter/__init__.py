"""Conversion components: validation, loading, pipeline and orchestration."""

from .loader import FileLoader
from .orchestrator import ConversionOrchestrator
from .pipeline import RasterPipeline
from .session import Completed, Converting, Failed, Idle, Loaded, SessionState
from .validator import FormatValidator, ValidationResult

__all__ = [
    "Completed",
    "ConversionOrchestrator",
    "Converting",
    "Failed",
    "FileLoader",
    "FormatValidator",
    "Idle",
    "Loaded",
    "RasterPipeline",
    "SessionState",
    "ValidationResult",
]
