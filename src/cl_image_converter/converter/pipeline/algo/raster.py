"""Pure raster decode / compose / encode logic (single image)."""

from collections.abc import Iterator
from contextlib import contextmanager
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ....common.errors import DecodeError, EncodeError
from ....common.schemas import TargetFormat

WHITE = (255, 255, 255)


@contextmanager
def open_bitmap(data: bytes) -> Iterator[Image.Image]:
    """
    Decode image bytes into an RGBA bitmap.

    Multi-frame sources (GIF, animated WebP, multi-page TIFF) yield their
    first frame. Both the decoder and the bitmap are closed when the block
    exits, whether or not it raised.

    Raises:
        DecodeError: If Pillow cannot identify or decode the bytes
    """
    try:
        source = Image.open(BytesIO(data))
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise DecodeError(f"Failed to load image: {exc}") from exc

    bitmap: Image.Image | None = None
    try:
        with source:
            try:
                source.seek(0)
                source.load()
                bitmap = source.convert("RGBA")
            except (
                Image.DecompressionBombError,
                OSError,
                SyntaxError,
                ValueError,
                EOFError,
            ) as exc:
                raise DecodeError(f"Failed to decode image: {exc}") from exc

        yield bitmap
    finally:
        if bitmap is not None:
            bitmap.close()


def compose_surface(
    bitmap: Image.Image,
    target: TargetFormat,
    background: tuple[int, int, int] = WHITE,
) -> Image.Image:
    """
    Draw the bitmap at the origin of a surface of the same size.

    Targets without an alpha channel get an opaque background first, so
    transparent pixels come out as `background` rather than black.
    """
    if target.supports_alpha:
        return bitmap.copy()

    surface = Image.new("RGB", bitmap.size, background)
    surface.paste(bitmap, (0, 0), mask=bitmap.getchannel("A"))
    return surface


def encode_surface(
    surface: Image.Image,
    target: TargetFormat,
    quality: int | None = None,
) -> bytes:
    """
    Encode a surface into the target format.

    Args:
        surface: Image to encode
        target: Output format
        quality: 10-100, only applied to jpeg and webp

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If Pillow fails or produces no output
    """
    save_kwargs: dict[str, object] = {}

    if target.supports_quality and quality is not None:
        save_kwargs["quality"] = quality

    buffer = BytesIO()
    try:
        surface.save(buffer, format=target.pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Failed to convert image: {exc}") from exc

    data = buffer.getvalue()
    if not data:
        raise EncodeError("Failed to convert image: encoder returned no output")
    return data


def convert_bitmap(
    data: bytes,
    target: TargetFormat,
    quality: int | None = None,
    background: tuple[int, int, int] = WHITE,
) -> bytes:
    """Decode, flatten if needed, and encode in one step."""
    with open_bitmap(data) as bitmap:
        surface = compose_surface(bitmap, target, background)
        with surface:
            return encode_surface(surface, target, quality)
