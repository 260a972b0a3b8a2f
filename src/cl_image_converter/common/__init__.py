"""Common module - protocols, schemas, errors and configuration."""

from .config import ConverterConfig
from .file_saver import FileSaver, SavedFile
from .file_saver_impl import LocalFileSaver
from .schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionResult,
    ProgressState,
    SourceAsset,
    SourceKind,
    TargetFormat,
)

__all__ = [
    "ConverterConfig",
    "FileSaver",
    "SavedFile",
    "LocalFileSaver",
    "ConversionOutcome",
    "ConversionRequest",
    "ConversionResult",
    "ProgressState",
    "SourceAsset",
    "SourceKind",
    "TargetFormat",
]
