"""
Import session state.

An ImportSession is the reporting context of one import run. It is created by
the importer and passed explicitly through the pipeline; nothing about a run
lives in module globals.
"""

from dataclasses import dataclass, field
from enum import Enum

from fowloader.models.deck import DeckSource, ZoneOutcome
from fowloader.models.failure import FailureKind

# Player message colours, RGB in 0..1
ERROR_COLOR = (1.0, 0.0, 0.0)


class ImportState(str, Enum):
    """Importer state machine."""

    IDLE = "idle"
    FETCHING = "fetching"
    NORMALIZING = "normalizing"
    LAYING_OUT = "laying_out"
    SPAWNING = "spawning"
    REPORTING = "reporting"


class ImportStatus(str, Enum):
    """How an import request ended."""

    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class ImportOptions:
    """
    Per-import toggles.

    Attributes:
        card_back: Card back image override; None uses the configured default
        face_down: Spawn every zone face down regardless of its tag
    """

    card_back: str | None = None
    face_down: bool = False


@dataclass(frozen=True, slots=True)
class Notice:
    """
    A player-visible message.

    Attributes:
        text: Message text
        player: Player colour the message is addressed to; None for everyone
        color: RGB colour, None for the host default
    """

    text: str
    player: str | None = None
    color: tuple[float, float, float] | None = None

    @property
    def is_error(self) -> bool:
        return self.color == ERROR_COLOR


@dataclass
class ImportSession:
    """Reporting context for one import run."""

    player: str | None
    options: ImportOptions
    source: DeckSource | None = None
    deck_name: str | None = None
    notices: list[Notice] = field(default_factory=list)

    def info(self, text: str) -> Notice:
        """Record an info notice for the importing player."""
        return self._add(Notice(text=text, player=self.player))

    def error(self, text: str) -> Notice:
        """Record an error notice for the importing player."""
        return self._add(Notice(text=text, player=self.player, color=ERROR_COLOR))

    def broadcast(self, text: str) -> Notice:
        """Record a notice for every player."""
        return self._add(Notice(text=text))

    def _add(self, notice: Notice) -> Notice:
        self.notices.append(notice)
        return notice


@dataclass
class ImportReport:
    """Final outcome of an import request."""

    status: ImportStatus
    deck_name: str | None = None
    zones: list[ZoneOutcome] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)
    failure_kind: FailureKind | None = None
    failure_message: str | None = None
    failure_suggestion: str | None = None

    @property
    def failed_zones(self) -> list[ZoneOutcome]:
        """Zones that ended with an error."""
        return [zone for zone in self.zones if not zone.ok]
