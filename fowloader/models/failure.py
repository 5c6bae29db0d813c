"""
Failure classification for deck imports.

Every failure that can happen during an import is a KnownError subclass with a
FailureKind and a player-facing message. The importer turns these into notices;
the HTTP surface wraps import reports in the ApiResponse envelope.

Error families:
- InputError: the deck URL was rejected before any network call
- FetchError: the remote deck lookup failed (not found, transport, empty, malformed)
- ZoneTimeoutError: one zone did not finish spawning in time (non-fatal)
- TopLevelTimeoutError: the whole import did not finish in time (fatal)
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Remote deck lookup failures
    NOT_FOUND = "not_found"
    EMPTY_RESULT = "empty_result"
    MALFORMED_RESPONSE = "malformed_response"
    EXTERNAL_API_ERROR = "external_api_error"

    # Spawn coordination failures
    ZONE_TIMEOUT = "zone_timeout"
    IMPORT_TIMEOUT = "import_timeout"
    IMPORT_IN_PROGRESS = "import_in_progress"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope for the HTTP surface.

    A refusal means the import never started (busy importer, rejected URL).
    A known failure means the import started and was aborted.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success, optional otherwise)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        data: Any = None,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a refusal response."""
        return cls(
            outcome=OutcomeType.REFUSAL,
            data=data,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        data: Any = None,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            data=data,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    The message is what the importing player sees.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)


# =============================================================================
# INPUT
# =============================================================================


class InputError(KnownError):
    """The deck URL is empty or not recognised. Raised before any network call."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            suggestion="Paste a decklist URL like https://forceofwind.online/view_decklist/1234/",
        )


# =============================================================================
# REMOTE DECK LOOKUP
# =============================================================================


class FetchError(KnownError):
    """Base class for remote deck lookup failures."""

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(kind=kind, message=message, detail=detail, suggestion=suggestion)


class DeckNotFoundError(FetchError):
    """The deck endpoint answered 404."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(
            message="Deck not found. Is it public?",
            kind=FailureKind.NOT_FOUND,
            detail=f"slug: {slug}",
            suggestion="Make sure the decklist is public on Force of Wind.",
        )


class TransportError(FetchError):
    """The request failed below the HTTP layer or with a non-404 error status."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(message=f"Web request error: {reason}", detail=reason)


class EmptyResponseError(FetchError):
    """The deck endpoint answered successfully with an empty body."""

    def __init__(self) -> None:
        super().__init__(
            message="Web request error: empty response",
            kind=FailureKind.EMPTY_RESULT,
        )


class MalformedResponseError(FetchError):
    """The body could not be parsed, or lacks the deck name."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message=message, kind=FailureKind.MALFORMED_RESPONSE, detail=detail)


# =============================================================================
# SPAWN COORDINATION
# =============================================================================


class ZoneTimeoutError(KnownError):
    """One zone's spawns did not all complete before the zone deadline."""

    def __init__(self, zone: str, spawned: int, expected: int):
        self.zone = zone
        self.spawned = spawned
        self.expected = expected
        super().__init__(
            kind=FailureKind.ZONE_TIMEOUT,
            message="Error collating deck... timed out.",
            detail=f"zone {zone!r}: {spawned}/{expected} objects spawned",
        )


class TopLevelTimeoutError(KnownError):
    """The zones of an import did not all finish before the import deadline."""

    def __init__(self, pending_zones: list[str]):
        self.pending_zones = pending_zones
        super().__init__(
            kind=FailureKind.IMPORT_TIMEOUT,
            message="Error spawning deck objects... timed out.",
            detail=f"pending zones: {', '.join(pending_zones)}",
        )


class ImportInProgressError(KnownError):
    """Another import holds the importer."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.IMPORT_IN_PROGRESS,
            message="Another deck is currently being imported. Please wait for that to finish.",
        )
