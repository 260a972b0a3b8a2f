"""Reads a selected file into a SourceAsset."""

import base64
from io import BytesIO
from os import PathLike
from pathlib import Path

import aiofiles
from loguru import logger

from ..common.errors import FileReadError
from ..common.schemas import SourceAsset
from ..utils.media_types import SNIFF_BYTES, determine_mime
from .validator import FormatValidator


class FileLoader:
    """Turns a path (or raw bytes) into a SourceAsset.

    Size and type are validated from metadata before the body is read, so an
    oversized file is refused without loading it into memory.
    """

    def __init__(self, validator: FormatValidator | None = None):
        self.validator: FormatValidator = validator or FormatValidator()

    async def load(
        self,
        path: str | PathLike[str],
        media_type: str | None = None,
    ) -> SourceAsset:
        """
        Load a file from disk.

        Args:
            path: File to read
            media_type: Declared media type; sniffed from content when None

        Returns:
            SourceAsset with the file's bytes

        Raises:
            FileReadError: If the file cannot be read
            UnsupportedFormatError: If the media type is not accepted
            FileTooLargeError: If the file exceeds the size ceiling
        """
        path = Path(path)

        try:
            byte_length = path.stat().st_size
            if not media_type:
                async with aiofiles.open(path, "rb") as f:
                    head = await f.read(SNIFF_BYTES)
                media_type = determine_mime(BytesIO(head))
        except OSError as exc:
            logger.warning(f"Failed to inspect {path}: {exc}")
            raise FileReadError(path.name) from exc

        self.validator.validate(media_type, byte_length).raise_for_error()

        try:
            async with aiofiles.open(path, "rb") as f:
                data = await f.read()
        except OSError as exc:
            logger.warning(f"Failed to read {path}: {exc}")
            raise FileReadError(path.name) from exc

        return SourceAsset(
            data=data,
            media_type=media_type,
            byte_length=len(data),
            name=path.name,
        )

    @staticmethod
    def from_bytes(data: bytes, name: str, media_type: str) -> SourceAsset:
        return SourceAsset(
            data=data,
            media_type=media_type,
            byte_length=len(data),
            name=name,
        )

    @staticmethod
    def preview_data_url(asset: SourceAsset) -> str:
        """Data URL suitable for showing the original image."""
        encoded = base64.b64encode(asset.data).decode("ascii")
        return f"data:{asset.media_type};base64,{encoded}"
