"""Shared test helpers."""

from io import BytesIO

from PIL import Image

from cl_image_converter import ProgressState, SourceAsset


class MockProgressCallback:
    """Records every progress event."""

    def __init__(self) -> None:
        self.calls: list[ProgressState] = []

    def __call__(self, progress: ProgressState) -> None:
        self.calls.append(progress)

    @property
    def values(self) -> list[int]:
        return [p.progress for p in self.calls]

    @property
    def statuses(self) -> list[str]:
        return [p.status for p in self.calls]


def encode_image(img: Image.Image, fmt: str, **kwargs: object) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def make_asset(data: bytes, media_type: str, name: str = "image.png") -> SourceAsset:
    return SourceAsset(data=data, media_type=media_type, byte_length=len(data), name=name)


def decode(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img
