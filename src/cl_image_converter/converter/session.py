"""Session state as a tagged union, moved along by pure transition functions.

    Idle -> Loaded -> Converting -> Completed | Failed
    any  -> Idle   (reset)
    any  -> Loaded (a new file replaces the session)

Completed and Failed keep the asset, so a conversion can be re-run from them.
"""

from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..common.errors import InvalidTransitionError
from ..common.schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionResult,
    ProgressState,
    SourceAsset,
)


class _State(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class Idle(_State):
    kind: Literal["idle"] = "idle"


class Loaded(_State):
    kind: Literal["loaded"] = "loaded"
    asset: SourceAsset


class Converting(_State):
    kind: Literal["converting"] = "converting"
    asset: SourceAsset
    request: ConversionRequest
    progress: ProgressState = ProgressState(progress=0, status="Processing image...")


class Completed(_State):
    kind: Literal["completed"] = "completed"
    asset: SourceAsset
    request: ConversionRequest
    result: ConversionResult
    outcome: ConversionOutcome


class Failed(_State):
    kind: Literal["failed"] = "failed"
    asset: SourceAsset
    request: ConversionRequest
    message: str


SessionState = Annotated[
    Idle | Loaded | Converting | Completed | Failed,
    Field(discriminator="kind"),
]


def select(state: SessionState, asset: SourceAsset) -> Loaded:
    return Loaded(asset=asset)


def begin(state: SessionState, request: ConversionRequest) -> Converting:
    if isinstance(state, (Loaded, Completed, Failed)):
        return Converting(asset=state.asset, request=request)
    raise InvalidTransitionError(state.kind, "convert")


def advance(state: SessionState, progress: ProgressState) -> Converting:
    if not isinstance(state, Converting):
        raise InvalidTransitionError(state.kind, "report progress")
    return state.model_copy(update={"progress": progress})


def complete(state: SessionState, result: ConversionResult) -> Completed:
    if not isinstance(state, Converting):
        raise InvalidTransitionError(state.kind, "complete")
    return Completed(
        asset=state.asset,
        request=state.request,
        result=result,
        outcome=ConversionOutcome.from_conversion(state.asset, result),
    )


def fail(state: SessionState, message: str) -> Failed:
    if not isinstance(state, Converting):
        raise InvalidTransitionError(state.kind, "fail")
    return Failed(asset=state.asset, request=state.request, message=message)


def reset() -> Idle:
    return Idle()
