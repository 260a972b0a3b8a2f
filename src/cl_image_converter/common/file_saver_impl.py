from __future__ import annotations

import hashlib
from os import PathLike
from pathlib import Path
from typing_extensions import override

import aiofiles
from loguru import logger

from .file_saver import FileSaver, SavedFile


class LocalFileSaver(FileSaver):
    """
    Local filesystem implementation of FileSaver.

    Layout:
        base_dir/
            <name>
    """

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _safe_path(self, name: str) -> Path:
        """
        Resolve a file name inside base_dir.
        Prevents path traversal.
        """
        resolved = (self._base_dir / name).resolve()

        if resolved.parent != self._base_dir:
            raise ValueError("Invalid file name (path traversal detected)")

        return resolved

    @override
    async def save(self, name: str, data: bytes) -> SavedFile:
        dst = self._safe_path(name)

        async with aiofiles.open(dst, "wb") as f:
            _ = await f.write(data)

        logger.info(f"Saved {len(data)} bytes to {dst}")

        return SavedFile(
            path=str(dst),
            size=len(data),
            hash=hashlib.sha256(data).hexdigest(),
        )
