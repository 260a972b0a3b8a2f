"""Decode strategies and the (SourceKind, TargetFormat) dispatch table."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable

from typing_extensions import override

from PIL import Image

from ...common.config import ConverterConfig
from ...common.schemas import ConversionRequest, SourceAsset, SourceKind, TargetFormat
from .algo.raster import compose_surface, encode_surface, open_bitmap
from .algo.svg import rasterize_svg

Reporter = Callable[[int, str], None]


def _decode_to_surface(
    data: bytes, target: TargetFormat, background: tuple[int, int, int]
) -> Image.Image:
    with open_bitmap(data) as bitmap:
        return compose_surface(bitmap, target, background)


def _encode_and_close(surface: Image.Image, target: TargetFormat, quality: int) -> bytes:
    with surface:
        return encode_surface(surface, target, quality)


class PipelineStrategy(ABC):
    """One decode path. Subclasses report coarse progress milestones."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        config: ConverterConfig,
        report: Reporter,
    ) -> bytes: ...

    async def _draw(
        self,
        data: bytes,
        request: ConversionRequest,
        config: ConverterConfig,
    ) -> Image.Image:
        return await asyncio.to_thread(
            _decode_to_surface, data, request.target, config.background_color
        )

    async def _encode(
        self,
        surface: Image.Image,
        request: ConversionRequest,
        report: Reporter,
        milestones: list[tuple[int, str]],
    ) -> bytes:
        try:
            for progress, status in milestones:
                report(progress, status)
        except BaseException:
            surface.close()
            raise
        return await asyncio.to_thread(
            _encode_and_close, surface, request.target, request.quality
        )


class PreserveStrategy(PipelineStrategy):
    """GIF to GIF: hand back the original bytes so every frame survives."""

    @property
    @override
    def name(self) -> str:
        return "preserve"

    @override
    async def run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        config: ConverterConfig,
        report: Reporter,
    ) -> bytes:
        report(100, "GIF preserved with all frames!")
        return asset.data


class RasterStrategy(PipelineStrategy):
    @property
    @override
    def name(self) -> str:
        return "raster"

    @override
    async def run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        config: ConverterConfig,
        report: Reporter,
    ) -> bytes:
        surface = await self._draw(asset.data, request, config)
        return await self._encode(
            surface,
            request,
            report,
            [
                (30, "Analyzing image properties..."),
                (60, f"Converting to {request.target.label}..."),
            ],
        )


class GifFirstFrameStrategy(PipelineStrategy):
    """GIF to a still format. Only the first frame is kept."""

    @property
    @override
    def name(self) -> str:
        return "gif_first_frame"

    @override
    async def run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        config: ConverterConfig,
        report: Reporter,
    ) -> bytes:
        report(40, "Converting GIF to static image (first frame)...")
        surface = await self._draw(asset.data, request, config)
        return await self._encode(
            surface, request, report, [(80, "Finalizing static image...")]
        )


class SvgRasterStrategy(PipelineStrategy):
    @property
    @override
    def name(self) -> str:
        return "svg_raster"

    @override
    async def run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        config: ConverterConfig,
        report: Reporter,
    ) -> bytes:
        report(40, "Converting SVG to raster image...")
        png = await asyncio.to_thread(rasterize_svg, asset.data, config.svg_fallback_size)
        surface = await self._draw(png, request, config)
        return await self._encode(
            surface, request, report, [(80, "Finalizing raster image...")]
        )


def build_dispatch_table() -> dict[tuple[SourceKind, TargetFormat], PipelineStrategy]:
    preserve = PreserveStrategy()
    raster = RasterStrategy()
    gif_first_frame = GifFirstFrameStrategy()
    svg_raster = SvgRasterStrategy()

    table: dict[tuple[SourceKind, TargetFormat], PipelineStrategy] = {}
    for target in TargetFormat:
        table[(SourceKind.RASTER, target)] = raster
        table[(SourceKind.SVG, target)] = svg_raster
        table[(SourceKind.GIF, target)] = (
            preserve if target == TargetFormat.GIF else gif_first_frame
        )
    return table


STRATEGIES: dict[tuple[SourceKind, TargetFormat], PipelineStrategy] = build_dispatch_table()
