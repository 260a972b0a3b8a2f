"""RasterPipeline - turns a SourceAsset into encoded bytes of the target format."""

from typing import Callable

from loguru import logger

from ...common.config import ConverterConfig
from ...common.errors import ConversionFailedError
from ...common.schemas import (
    ConversionRequest,
    ConversionResult,
    ProgressState,
    SourceAsset,
)
from .strategies import STRATEGIES, PipelineStrategy

ProgressCallback = Callable[[ProgressState], None]


class RasterPipeline:
    """
    Stateless conversion engine.

    - Picks a strategy from the (SourceKind, TargetFormat) table
    - Reports coarse milestones through progress_callback
    - Any decode/encode failure surfaces as ConversionFailedError
    """

    def __init__(self, config: ConverterConfig | None = None):
        self.config: ConverterConfig = config or ConverterConfig()

    def strategy_for(self, asset: SourceAsset, request: ConversionRequest) -> PipelineStrategy:
        return STRATEGIES[(asset.kind, request.target)]

    async def encode(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> ConversionResult:
        strategy = self.strategy_for(asset, request)
        logger.debug(
            f"Converting {asset.name} ({asset.media_type}) to {request.target} "
            + f"via {strategy.name}"
        )

        def report(progress: int, status: str) -> None:
            if progress_callback:
                progress_callback(ProgressState(progress=progress, status=status))

        try:
            data = await strategy.run(asset, request, self.config, report)
        except Exception as exc:
            raise ConversionFailedError(exc) from exc

        return ConversionResult.from_bytes(data, request.target)
