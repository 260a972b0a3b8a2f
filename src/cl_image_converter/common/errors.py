"""Error taxonomy for file selection and conversion."""

from typing_extensions import override

SUPPORTED_FORMATS_HINT = "JPG, PNG, GIF, BMP, WebP, TIFF, or SVG"

CONVERSION_FAILED_MESSAGE = (
    "Conversion failed. The image format may not be supported or the file may be corrupted."
)

CONVERSION_CANCELLED_MESSAGE = "Conversion cancelled. Please try again."


class ConverterError(Exception):
    """Base class for all converter errors."""

    def __init__(self, message: str = "An unknown converter error occurred."):
        self.message: str = message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# File stage
# ---------------------------------------------------------------------------


class FileValidationError(ConverterError):
    """Raised when a selected file is refused before it is read."""


class UnsupportedFormatError(FileValidationError):
    def __init__(self, media_type: str):
        self.media_type: str = media_type
        super().__init__(
            f"Unsupported format: {media_type}. Please use {SUPPORTED_FORMATS_HINT}."
        )


class FileTooLargeError(FileValidationError):
    def __init__(self, byte_length: int, limit: int):
        self.byte_length: int = byte_length
        self.limit: int = limit
        limit_mb = limit // (1024 * 1024)
        super().__init__(
            f"File size too large. Please use files smaller than {limit_mb}MB."
        )


class FileReadError(ConverterError):
    def __init__(self, name: str = ""):
        self.name: str = name
        super().__init__("Failed to read file. Please try again.")


# ---------------------------------------------------------------------------
# Conversion stage
# ---------------------------------------------------------------------------


class DecodeError(ConverterError):
    """Source bytes could not be turned into a bitmap."""


class EncodeError(ConverterError):
    """The encoder produced no output for the target format."""


class ConversionFailedError(ConverterError):
    """Orchestrator-facing wrapper around DecodeError / EncodeError."""

    def __init__(self, cause: BaseException | None = None):
        self.cause: BaseException | None = cause
        super().__init__(CONVERSION_FAILED_MESSAGE)

    @override
    def __str__(self):
        if self.cause is None:
            return self.message
        return f"{self.message} ({type(self.cause).__name__}: {self.cause})"


class InvalidTransitionError(ConverterError):
    def __init__(self, state: str, action: str):
        self.state: str = state
        self.action: str = action
        super().__init__(f"Cannot {action} while session is {state}")
