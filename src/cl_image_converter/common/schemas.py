"""Pydantic schemas for conversion sessions and their data records."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ─────────────────────────────────────────────────────────────
# Format enums
# ─────────────────────────────────────────────────────────────


class SourceKind(StrEnum):
    """Decode family of an input file."""

    RASTER = "raster"
    GIF = "gif"
    SVG = "svg"

    @classmethod
    def from_media_type(cls, media_type: str) -> "SourceKind":
        if media_type == "image/gif":
            return SourceKind.GIF
        elif media_type == "image/svg+xml":
            return SourceKind.SVG
        else:
            return SourceKind.RASTER


class TargetFormat(StrEnum):
    """Encodable output formats. TIFF and SVG are input-only."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    GIF = "gif"
    BMP = "bmp"

    @property
    def supports_alpha(self) -> bool:
        return self not in (TargetFormat.JPEG, TargetFormat.BMP)

    @property
    def supports_quality(self) -> bool:
        return self in (TargetFormat.JPEG, TargetFormat.WEBP)

    @property
    def pil_format(self) -> str:
        return get_pil_format(self.value)

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value.upper()


def get_pil_format(format_str: str) -> str:
    """Convert format string to PIL format name."""
    format_map = {
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "png": "PNG",
        "webp": "WEBP",
        "gif": "GIF",
        "bmp": "BMP",
        "tiff": "TIFF",
    }
    return format_map.get(format_str.lower(), format_str.upper())


# ─────────────────────────────────────────────────────────────
# Session records
# ─────────────────────────────────────────────────────────────


class SourceAsset(BaseModel):
    """The selected file: raw bytes plus what the environment declared about it."""

    data: bytes = Field(..., repr=False)
    media_type: str = Field(..., description="Declared media type, e.g. image/png")
    byte_length: int = Field(..., ge=0)
    name: str = Field(..., description="Display name of the file")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def kind(self) -> SourceKind:
        return SourceKind.from_media_type(self.media_type)

    @property
    def stem(self) -> str:
        # Everything before the first dot: "photo.final.png" -> "photo"
        return self.name.split(".")[0]


class ConversionRequest(BaseModel):
    target: TargetFormat
    quality: int = Field(90, ge=10, le=100, description="Only used by jpeg and webp")
    source_media_type: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ConversionResult(BaseModel):
    data: bytes = Field(..., repr=False)
    byte_length: int = Field(..., ge=0)
    target: TargetFormat

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_bytes(cls, data: bytes, target: TargetFormat) -> "ConversionResult":
        return cls(data=data, byte_length=len(data), target=target)


def format_label(media_type: str) -> str:
    """image/svg+xml -> SVG+XML, image/jpeg -> JPEG."""
    return media_type.split("/")[-1].upper()


class ConversionOutcome(BaseModel):
    """Before/after report of a finished conversion."""

    original_format: str
    target_format: str
    original_size: int = Field(..., ge=0)
    new_size: int = Field(..., ge=0)
    percentage_delta: float = Field(
        ...,
        description="Positive when the output is smaller than the input",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_conversion(
        cls, asset: SourceAsset, result: ConversionResult
    ) -> "ConversionOutcome":
        original_size = asset.byte_length
        new_size = result.byte_length
        if original_size == 0:
            delta = 0.0
        else:
            delta = round((original_size - new_size) / original_size * 100, 1)

        return cls(
            original_format=format_label(asset.media_type),
            target_format=result.target.label,
            original_size=original_size,
            new_size=new_size,
            percentage_delta=delta,
        )

    @computed_field
    @property
    def compressed(self) -> bool:
        return self.percentage_delta > 0

    def summary(self) -> str:
        original_mb = self.original_size / 1024 / 1024
        new_mb = self.new_size / 1024 / 1024
        if self.compressed:
            change = f"Compressed by {self.percentage_delta:.1f}%"
        else:
            change = f"Expanded by {abs(self.percentage_delta):.1f}%"
        return (
            f"{self.original_format} → {self.target_format} | "
            f"Original: {original_mb:.2f} MB | New: {new_mb:.2f} MB | {change}"
        )


class ProgressState(BaseModel):
    progress: int = Field(0, ge=0, le=100)
    status: str = ""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")
