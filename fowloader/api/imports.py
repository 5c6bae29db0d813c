"""
Deck import endpoint.

The HTTP counterpart of the loader's URL field and "Load Deck" button: one
request imports one deck into the table and returns the player-visible
notices. Only one import runs at a time; concurrent requests are refused.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fowloader.config import settings
from fowloader.host.memory import InMemoryTable
from fowloader.models.failure import ApiResponse, FailureKind
from fowloader.models.session import ImportOptions, ImportReport, ImportStatus
from fowloader.services.importer import DeckImporter

router = APIRouter(prefix="/imports", tags=["imports"])


class ImportRequest(BaseModel):
    """Request body for a deck import."""

    url: str = Field(..., description="Force of Wind decklist URL")
    player: str | None = Field(default=None, description="Player colour to address notices to")
    card_back: str | None = Field(default=None, description="Card back image override")
    face_down: bool | None = Field(
        default=None,
        description="Spawn every zone face down (defaults to the configured value)",
    )


class NoticeResponse(BaseModel):
    """One player-visible message."""

    text: str
    player: str | None = None
    error: bool = False


class ZoneResponse(BaseModel):
    """Outcome of one zone."""

    zone: str
    expected: int
    spawned: int
    ok: bool
    error: str | None = None


class ImportResponse(BaseModel):
    """Response model for an import."""

    status: ImportStatus
    deck_name: str | None = None
    zones: list[ZoneResponse] = Field(default_factory=list)
    notices: list[NoticeResponse] = Field(default_factory=list)


@lru_cache(maxsize=1)
def get_table() -> InMemoryTable:
    """Table shared by every request of this process."""
    return InMemoryTable()


@lru_cache(maxsize=1)
def get_importer() -> DeckImporter:
    """Process-wide importer; its state is the single-flight guard."""
    return DeckImporter(get_table(), settings=settings)


def report_to_response(report: ImportReport) -> ImportResponse:
    return ImportResponse(
        status=report.status,
        deck_name=report.deck_name,
        zones=[
            ZoneResponse(
                zone=zone.zone,
                expected=zone.expected,
                spawned=zone.spawned,
                ok=zone.ok,
                error=zone.error,
            )
            for zone in report.zones
        ],
        notices=[
            NoticeResponse(text=notice.text, player=notice.player, error=notice.is_error)
            for notice in report.notices
        ],
    )


@router.post("", response_model=ApiResponse[ImportResponse])
async def create_import(
    request: ImportRequest,
    importer: Annotated[DeckImporter, Depends(get_importer)],
) -> ApiResponse[ImportResponse]:
    """
    Import a deck.

    Returns success once every zone has been collated (failed zones are listed
    in the data), a refusal if the importer is busy or the URL is not a
    decklist, and a known failure if the import was aborted.
    """
    face_down = request.face_down
    if face_down is None:
        face_down = importer.settings.spawn_face_down
    options = ImportOptions(card_back=request.card_back, face_down=face_down)

    report = await importer.import_deck(request.url, player=request.player, options=options)
    data = report_to_response(report)
    envelope = ApiResponse[ImportResponse]

    if report.status is ImportStatus.COMPLETED:
        return envelope.success(data)

    kind = report.failure_kind or FailureKind.INVALID_INPUT
    message = report.failure_message or "Deck import failed."
    suggestion = report.failure_suggestion
    if report.status is ImportStatus.REJECTED:
        return envelope.refusal(kind=kind, message=message, data=data, suggestion=suggestion)
    return envelope.known_failure(kind=kind, message=message, data=data, suggestion=suggestion)
