"""Media type and size checks run before a file is accepted."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..common.config import ConverterConfig
from ..common.errors import ConverterError, FileTooLargeError, UnsupportedFormatError
from ..utils.media_types import is_supported


class ValidationResult(BaseModel):
    """Ok when `error` is None, Rejected otherwise."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: ConverterError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str:
        return "" if self.error is None else self.error.message

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


OK = ValidationResult()


class FormatValidator:
    def __init__(self, config: ConverterConfig | None = None):
        self.config: ConverterConfig = config or ConverterConfig()

    def validate(self, media_type: str, byte_length: int) -> ValidationResult:
        """
        Check a declared media type and size against the allowlist and ceiling.

        Args:
            media_type: Declared media type, e.g. "image/png"
            byte_length: File size in bytes

        Returns:
            OK, or a rejected result carrying UnsupportedFormatError /
            FileTooLargeError
        """
        if not is_supported(media_type):
            return ValidationResult(error=UnsupportedFormatError(media_type))

        if byte_length > self.config.max_file_size:
            return ValidationResult(
                error=FileTooLargeError(byte_length, self.config.max_file_size)
            )

        return OK
