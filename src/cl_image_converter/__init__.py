"""cl_image_converter - single-file image format conversion."""

from .common.config import ConverterConfig
from .common.errors import (
    ConversionFailedError,
    ConverterError,
    DecodeError,
    EncodeError,
    FileReadError,
    FileTooLargeError,
    FileValidationError,
    InvalidTransitionError,
    UnsupportedFormatError,
)
from .common.file_saver import FileSaver, SavedFile
from .common.file_saver_impl import LocalFileSaver
from .common.schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionResult,
    ProgressState,
    SourceAsset,
    SourceKind,
    TargetFormat,
)
from .converter import (
    ConversionOrchestrator,
    FileLoader,
    FormatValidator,
    RasterPipeline,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionFailedError",
    "ConversionOrchestrator",
    "ConversionOutcome",
    "ConversionRequest",
    "ConversionResult",
    "ConverterConfig",
    "ConverterError",
    "DecodeError",
    "EncodeError",
    "FileLoader",
    "FileReadError",
    "FileSaver",
    "FileTooLargeError",
    "FileValidationError",
    "FormatValidator",
    "InvalidTransitionError",
    "LocalFileSaver",
    "ProgressState",
    "RasterPipeline",
    "SavedFile",
    "SourceAsset",
    "SourceKind",
    "TargetFormat",
    "UnsupportedFormatError",
    "ValidationResult",
    "__version__",
]
