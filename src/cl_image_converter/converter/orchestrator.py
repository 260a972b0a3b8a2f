"""ConversionOrchestrator - sequences validation, loading and conversion."""

import asyncio
from os import PathLike
from typing import Callable

from loguru import logger

from ..common.config import ConverterConfig
from ..common.errors import (
    CONVERSION_CANCELLED_MESSAGE,
    ConversionFailedError,
    FileReadError,
    FileValidationError,
    InvalidTransitionError,
)
from ..common.file_saver import FileSaver, SavedFile
from ..common.schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionResult,
    ProgressState,
    SourceAsset,
    TargetFormat,
)
from . import session
from .loader import FileLoader
from .pipeline import RasterPipeline
from .session import Completed, Converting, Idle, SessionState
from .validator import FormatValidator, ValidationResult

StateListener = Callable[[SessionState], None]


class ConversionOrchestrator:
    """Single-session conversion controller.

    Holds at most one SourceAsset and runs at most one conversion at a time.
    Every file selection and every reset bumps a generation counter; a
    conversion whose generation is no longer current when it finishes is
    discarded instead of being committed.

    Example:
        orchestrator = ConversionOrchestrator(saver=LocalFileSaver("./out"))
        await orchestrator.open_file("photo.png")
        outcome = await orchestrator.convert(TargetFormat.JPEG, quality=80)
        await orchestrator.download()
    """

    def __init__(
        self,
        config: ConverterConfig | None = None,
        pipeline: RasterPipeline | None = None,
        loader: FileLoader | None = None,
        saver: FileSaver | None = None,
        on_change: StateListener | None = None,
    ):
        self.config: ConverterConfig = config or ConverterConfig()
        self.validator: FormatValidator = FormatValidator(self.config)
        self.pipeline: RasterPipeline = pipeline or RasterPipeline(self.config)
        self.loader: FileLoader = loader or FileLoader(self.validator)
        self.saver: FileSaver | None = saver
        self.on_change: StateListener | None = on_change

        self._state: SessionState = Idle()
        self._generation: int = 0
        self._target: TargetFormat = self.config.default_target
        self._quality: int = self.config.default_quality
        self._file_error: str = ""
        self._conversion_error: str = ""

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def target(self) -> TargetFormat:
        return self._target

    @property
    def quality(self) -> int:
        return self._quality

    @property
    def asset(self) -> SourceAsset | None:
        if isinstance(self._state, Idle):
            return None
        return self._state.asset

    @property
    def progress(self) -> ProgressState | None:
        if isinstance(self._state, Converting):
            return self._state.progress
        return None

    @property
    def result(self) -> ConversionResult | None:
        if isinstance(self._state, Completed):
            return self._state.result
        return None

    @property
    def outcome(self) -> ConversionOutcome | None:
        if isinstance(self._state, Completed):
            return self._state.outcome
        return None

    @property
    def file_error(self) -> str:
        return self._file_error

    @property
    def conversion_error(self) -> str:
        return self._conversion_error

    @property
    def error_message(self) -> str:
        """The one error shown to the user; file errors win."""
        return self._file_error or self._conversion_error

    @property
    def preview_url(self) -> str | None:
        asset = self.asset
        if asset is None:
            return None
        return self.loader.preview_data_url(asset)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _transition(self, state: SessionState) -> None:
        self._state = state
        if self.on_change:
            self.on_change(state)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    def select_file(self, asset: SourceAsset) -> ValidationResult:
        """Accept a new file, replacing whatever the session held."""
        validation = self.validator.validate(asset.media_type, asset.byte_length)
        if not validation.ok:
            logger.warning(f"Rejected {asset.name}: {validation.reason}")
            self._file_error = validation.reason
            return validation

        self._generation += 1
        self._file_error = ""
        self._transition(session.select(self._state, asset))
        logger.info(f"Selected {asset.name} ({asset.media_type}, {asset.byte_length} bytes)")
        return validation

    async def open_file(
        self,
        path: str | PathLike[str],
        media_type: str | None = None,
    ) -> ValidationResult:
        """Load a file from disk and select it."""
        try:
            asset = await self.loader.load(path, media_type)
        except (FileValidationError, FileReadError) as exc:
            logger.warning(f"Rejected {path}: {exc.message}")
            self._file_error = exc.message
            return ValidationResult(error=exc)

        return self.select_file(asset)

    def set_target(self, target: TargetFormat | str) -> None:
        self._target = TargetFormat(target)

    def set_quality(self, quality: int) -> None:
        self._quality = self._checked_quality(quality)

    @staticmethod
    def _checked_quality(quality: int) -> int:
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise ValueError(f"Quality must be an integer, got {quality!r}")
        if not 10 <= quality <= 100:
            raise ValueError(f"Quality must be between 10 and 100, got {quality}")
        return quality

    async def convert(
        self,
        target: TargetFormat | str | None = None,
        quality: int | None = None,
    ) -> ConversionOutcome | None:
        """
        Convert the loaded file.

        Args:
            target: Output format; keeps the current choice when None
            quality: 10-100; keeps the current choice when None

        Returns:
            The outcome report, or None if the conversion failed or was
            superseded by a reset / new file before it finished

        Raises:
            InvalidTransitionError: If no file is loaded or a conversion is
                already running
            ValueError: If target or quality is invalid; settings are unchanged

        A cancelled conversion leaves the session Failed, so it can be retried.
        """
        state = self._state
        if isinstance(state, (Idle, Converting)):
            raise InvalidTransitionError(state.kind, "convert")

        new_target = self._target if target is None else TargetFormat(target)
        new_quality = self._quality if quality is None else self._checked_quality(quality)
        self._target = new_target
        self._quality = new_quality

        request = ConversionRequest(
            target=self._target,
            quality=self._quality,
            source_media_type=state.asset.media_type,
        )
        self._transition(session.begin(state, request))
        self._conversion_error = ""
        generation = self._generation
        logger.info(f"Converting {state.asset.name} to {request.target.label}")

        try:
            return await self._run(state.asset, request, generation)
        except asyncio.CancelledError:
            if self._is_current(generation):
                logger.warning(f"Conversion of {state.asset.name} cancelled")
                self._conversion_error = CONVERSION_CANCELLED_MESSAGE
                self._transition(session.fail(self._state, CONVERSION_CANCELLED_MESSAGE))
            raise

    async def _run(
        self,
        asset: SourceAsset,
        request: ConversionRequest,
        generation: int,
    ) -> ConversionOutcome | None:
        def on_progress(progress: ProgressState) -> None:
            if self._is_current(generation):
                self._transition(session.advance(self._state, progress))

        try:
            result = await self.pipeline.encode(asset, request, on_progress)
        except ConversionFailedError as exc:
            if not self._is_current(generation):
                logger.debug(f"Discarding stale failure: {exc}")
                return None
            logger.error(f"Conversion failed: {exc}")
            self._conversion_error = exc.message
            self._transition(session.fail(self._state, exc.message))
            return None

        if self.config.completion_delay:
            await asyncio.sleep(self.config.completion_delay)
        if not self._is_current(generation):
            logger.debug(f"Discarding stale result for {asset.name}")
            return None

        self._transition(
            session.advance(
                self._state, ProgressState(progress=100, status="Conversion completed!")
            )
        )

        if self.config.report_delay:
            await asyncio.sleep(self.config.report_delay)
        if not self._is_current(generation):
            logger.debug(f"Discarding stale result for {asset.name}")
            return None

        completed = session.complete(self._state, result)
        self._transition(completed)
        logger.info(completed.outcome.summary())
        return completed.outcome

    @staticmethod
    def _filename_for(state: Completed) -> str:
        return f"{state.asset.stem}_converted.{state.result.target.extension}"

    def suggested_filename(self) -> str | None:
        if not isinstance(self._state, Completed):
            return None
        return self._filename_for(self._state)

    async def download(self, saver: FileSaver | None = None) -> SavedFile:
        """Hand the converted bytes to the file saver. State is unchanged."""
        state = self._state
        if not isinstance(state, Completed):
            raise InvalidTransitionError(state.kind, "download")

        saver = saver or self.saver
        if saver is None:
            raise ValueError("No file saver configured")

        return await saver.save(self._filename_for(state), state.result.data)

    def reset(self) -> None:
        """Drop the file, result, progress and errors and restore defaults."""
        self._generation += 1
        self._file_error = ""
        self._conversion_error = ""
        self._target = self.config.default_target
        self._quality = self.config.default_quality
        self._transition(session.reset())
        logger.info("Session reset")
