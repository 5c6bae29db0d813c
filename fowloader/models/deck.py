from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from fowloader.models.card import CardRecord, Face

if TYPE_CHECKING:
    from fowloader.host.base import ObjectHandle


class Vector(NamedTuple):
    """A position or rotation in host space."""

    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class DeckSource:
    """
    Where a deck comes from.

    Attributes:
        url: Deck URL as entered by the player (trimmed)
        slug: Numeric deck id used to address the remote deck resource
    """

    url: str
    slug: str


@dataclass(frozen=True, slots=True)
class ZonePlan:
    """
    Placement of one deck zone.

    Attributes:
        zone: Zone tag
        index: Zero-based order in which the zone was first seen
        position: Anchor, local to the loader object
        face_down: Whether the zone's cards spawn face down
    """

    zone: str
    index: int
    position: Vector
    face_down: bool


@dataclass(frozen=True, slots=True)
class SpawnRequest:
    """One physical card instance to create."""

    card: CardRecord
    faces: tuple[Face, ...]
    position: Vector
    flipped: bool


@dataclass
class ZoneOutcome:
    """
    Result of collating one zone.

    Exactly one of `obj` and `error` is set.
    """

    zone: str
    expected: int
    spawned: int = 0
    obj: "ObjectHandle | None" = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the zone produced an object."""
        return self.error is None and self.obj is not None
