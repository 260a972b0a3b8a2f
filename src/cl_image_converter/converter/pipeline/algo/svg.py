"""SVG rasterization."""

import re
import xml.etree.ElementTree as ET

from ....common.errors import DecodeError

# CSS absolute units in pixels at 96 dpi
_UNIT_TO_PX: dict[str, float] = {
    "": 1.0,
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
}

_LENGTH_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?)\s*([a-zA-Z]*)\s*$")


def _parse_length(value: str | None) -> int | None:
    if value is None:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        # percentages, "auto", em/ex and garbage have no intrinsic size
        return None
    number, unit = match.groups()
    factor = _UNIT_TO_PX.get(unit.lower())
    if factor is None:
        return None
    pixels = round(float(number) * factor)
    return pixels if pixels > 0 else None


def _view_box_ratio(value: str | None) -> float | None:
    """Height over width of a `viewBox="min-x min-y width height"`."""
    if value is None:
        return None
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        width, height = float(parts[2]), float(parts[3])
    except ValueError:
        return None
    if width <= 0 or height <= 0:
        return None
    return height / width


def svg_intrinsic_size(svg_text: str) -> tuple[int, int] | None:
    """
    Read the root element's absolute width/height.

    When only one of them is absolute, the other follows the viewBox aspect
    ratio.

    Returns:
        (width, height) in pixels, or None when no size can be derived
    """
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as exc:
        raise DecodeError(f"Failed to load SVG: {exc}") from exc

    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width is not None and height is not None:
        return width, height

    ratio = _view_box_ratio(root.get("viewBox"))
    if ratio is None:
        return None
    if width is not None:
        return width, max(1, round(width * ratio))
    if height is not None:
        return max(1, round(height / ratio)), height
    return None


def rasterize_svg(data: bytes, fallback_size: tuple[int, int] = (800, 600)) -> bytes:
    """
    Render SVG bytes to PNG bytes.

    The output uses the SVG's intrinsic size, or `fallback_size` when the
    document does not declare one.

    Raises:
        DecodeError: If the bytes are not UTF-8 or not renderable SVG
    """
    import cairosvg

    try:
        svg_text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Failed to load SVG: {exc}") from exc

    width, height = svg_intrinsic_size(svg_text) or fallback_size

    try:
        png = cairosvg.svg2png(
            bytestring=svg_text.encode("utf-8"),
            output_width=width,
            output_height=height,
        )
    except Exception as exc:  # cairosvg errors depend on the SVG content
        raise DecodeError(f"Failed to load SVG: {exc}") from exc

    if not png:
        raise DecodeError("Failed to load SVG: renderer returned no output")
    return png
