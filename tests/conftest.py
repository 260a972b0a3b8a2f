"""Test configuration and fixtures for cl_image_converter.

This module provides:
- Pytest configuration (markers, native library checks)
- Synthetic image fixtures generated with Pillow and numpy
- Function-scoped fixtures (temp dirs, config, orchestrator, file saver)
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from cl_image_converter import (
    ConversionOrchestrator,
    ConverterConfig,
    LocalFileSaver,
)
from tests.helpers import MockProgressCallback, encode_image

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_cairo: requires the cairo library for SVG rendering",
    )
    config.addinivalue_line(
        "markers",
        "requires_libmagic: requires libmagic for content sniffing",
    )


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def _libmagic_available() -> bool:
    try:
        import magic

        _ = magic.Magic(mime=True)
    except (ImportError, OSError):
        return False
    return True


def pytest_runtest_setup(item):
    """Skip tests whose native library is not installed."""
    if item.get_closest_marker("requires_cairo") and not _cairo_available():
        pytest.skip(
            "cairo not installed. "
            "Install: brew install cairo (macOS) or apt-get install libcairo2 (Linux)"
        )

    if item.get_closest_marker("requires_libmagic") and not _libmagic_available():
        pytest.skip(
            "libmagic not installed. "
            "Install: brew install libmagic (macOS) or apt-get install libmagic1 (Linux)"
        )


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def red_png() -> bytes:
    """2x2 opaque red PNG."""
    return encode_image(Image.new("RGBA", (2, 2), (255, 0, 0, 255)), "PNG")


@pytest.fixture
def transparent_png() -> bytes:
    """16x16 PNG: left half fully transparent, right half opaque red."""
    img = Image.new("RGBA", (16, 16), (0, 0, 0, 0))
    img.paste((255, 0, 0, 255), (8, 0, 16, 16))
    return encode_image(img, "PNG")


@pytest.fixture
def noisy_png() -> bytes:
    """128x96 random-noise PNG, complex enough for quality comparisons."""
    rng = np.random.default_rng(seed=42)
    pixels = rng.integers(0, 256, size=(96, 128, 3), dtype=np.uint8)
    return encode_image(Image.fromarray(pixels), "PNG")


@pytest.fixture
def animated_gif() -> bytes:
    """Three-frame 10x8 GIF: red, green, blue."""
    frames = [
        Image.new("RGB", (10, 8), color)
        for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    ]
    return encode_image(
        frames[0],
        "GIF",
        save_all=True,
        append_images=frames[1:],
        duration=100,
        loop=0,
    )


@pytest.fixture
def sized_svg() -> bytes:
    return (
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<svg xmlns="http://www.w3.org/2000/svg" width="40" height="30">'
        b'<rect width="40" height="30" fill="#00ff00"/></svg>'
    )


@pytest.fixture
def unsized_svg() -> bytes:
    return (
        b'<svg xmlns="http://www.w3.org/2000/svg">'
        b'<circle cx="50" cy="50" r="40" fill="blue"/></svg>'
    )


@pytest.fixture
def synthetic_image(tmp_path: Path) -> Path:
    """Generate a synthetic PNG on disk."""
    from PIL import ImageDraw

    output_path = tmp_path / "synthetic.png"

    img = Image.new("RGB", (80, 60), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)
    for i in range(0, 80, 10):
        draw.line([(i, 0), (i, 60)], fill=(255, 255, 255), width=1)
    draw.ellipse([30, 20, 50, 40], fill=(200, 100, 100))

    img.save(output_path, "PNG")
    return output_path


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def converter_config() -> ConverterConfig:
    """Config without the cosmetic completion pauses."""
    return ConverterConfig(completion_delay=0, report_delay=0)


@pytest.fixture
def file_saver(temp_output_dir: Path) -> LocalFileSaver:
    return LocalFileSaver(base_dir=temp_output_dir)


@pytest.fixture
def orchestrator(converter_config: ConverterConfig, file_saver: LocalFileSaver):
    return ConversionOrchestrator(config=converter_config, saver=file_saver)


@pytest.fixture
def mock_progress_callback() -> MockProgressCallback:
    return MockProgressCallback()
