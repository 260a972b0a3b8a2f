"""Test suite for media type helpers."""

from io import BytesIO

import pytest

from cl_image_converter.utils.media_types import (
    SUPPORTED_MEDIA_TYPES,
    determine_mime,
    is_supported,
    normalize_media_type,
)
from tests.helpers import encode_image

# ============================================================================
# Test Class 1: Normalisation
# ============================================================================


class TestNormalizeMediaType:
    def test_lowercases_and_strips_parameters(self) -> None:
        assert normalize_media_type("Image/PNG") == "image/png"
        assert normalize_media_type("image/svg+xml; charset=utf-8") == "image/svg+xml"

    def test_maps_libmagic_aliases(self) -> None:
        assert normalize_media_type("image/x-ms-bmp") == "image/bmp"
        assert normalize_media_type("image/x-bmp") == "image/bmp"
        assert normalize_media_type("image/pjpeg") == "image/jpeg"

    def test_leaves_unknown_types(self) -> None:
        assert normalize_media_type("application/pdf") == "application/pdf"


def test_supported_set() -> None:
    assert SUPPORTED_MEDIA_TYPES == {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/webp",
        "image/tiff",
        "image/svg+xml",
    }
    assert is_supported("image/jpg")
    assert not is_supported("image/heic")


# ============================================================================
# Test Class 2: determine_mime
# ============================================================================


class TestDetermineMime:
    def test_declared_type_wins(self) -> None:
        assert determine_mime(BytesIO(b"anything"), "image/x-ms-bmp") == "image/bmp"

    @pytest.mark.requires_libmagic
    def test_sniffs_png(self) -> None:
        from PIL import Image

        data = encode_image(Image.new("RGB", (4, 4)), "PNG")
        assert determine_mime(BytesIO(data)) == "image/png"

    @pytest.mark.requires_libmagic
    def test_sniffs_gif(self) -> None:
        from PIL import Image

        data = encode_image(Image.new("RGB", (4, 4)), "GIF")
        assert determine_mime(BytesIO(data)) == "image/gif"

    @pytest.mark.requires_libmagic
    def test_sniffs_bare_svg(self, unsized_svg: bytes) -> None:
        assert determine_mime(BytesIO(unsized_svg)) == "image/svg+xml"

    @pytest.mark.requires_libmagic
    def test_sniffs_text(self) -> None:
        assert determine_mime(BytesIO(b"just some words\n")) == "text/plain"
