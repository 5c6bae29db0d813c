from fowloader.models.card import CardRecord, Face
from fowloader.models.deck import DeckSource, SpawnRequest, Vector, ZoneOutcome, ZonePlan
from fowloader.models.failure import (
    ApiResponse,
    DeckNotFoundError,
    EmptyResponseError,
    FailureDetail,
    FailureKind,
    FetchError,
    ImportInProgressError,
    InputError,
    KnownError,
    MalformedResponseError,
    OutcomeType,
    TopLevelTimeoutError,
    TransportError,
    ZoneTimeoutError,
)
from fowloader.models.session import (
    ERROR_COLOR,
    ImportOptions,
    ImportReport,
    ImportSession,
    ImportState,
    ImportStatus,
    Notice,
)

__all__ = [
    "ApiResponse",
    "CardRecord",
    "DeckNotFoundError",
    "DeckSource",
    "ERROR_COLOR",
    "EmptyResponseError",
    "Face",
    "FailureDetail",
    "FailureKind",
    "FetchError",
    "ImportInProgressError",
    "ImportOptions",
    "ImportReport",
    "ImportSession",
    "ImportState",
    "ImportStatus",
    "InputError",
    "KnownError",
    "MalformedResponseError",
    "Notice",
    "OutcomeType",
    "SpawnRequest",
    "TopLevelTimeoutError",
    "TransportError",
    "Vector",
    "ZoneOutcome",
    "ZonePlan",
    "ZoneTimeoutError",
]
