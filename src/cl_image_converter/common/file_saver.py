"""
FileSaver Protocol - the environment's "download" collaborator.

Design goals:
- The orchestrator never decides where bytes end up
- Implementations own the destination and its layout
"""

from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class SavedFile(BaseModel):
    """Metadata of a saved conversion result."""

    path: str = Field(
        ...,
        description="Location the file was written to",
    )
    size: int = Field(
        ...,
        ge=0,
        description="File size in bytes",
    )
    hash: str | None = Field(
        None,
        description="Optional content hash (SHA256)",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


@runtime_checkable
class FileSaver(Protocol):
    """
    Protocol for handing an encoded result to the user.

    Callers pass only the suggested file name and the bytes.
    """

    async def save(self, name: str, data: bytes) -> SavedFile:
        """
        Persist `data` under the suggested `name`.

        Returns:
            Metadata of the saved file.
        """
        ...
