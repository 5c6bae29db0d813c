from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Face:
    """
    One visual/textual state of a physical card.

    Attributes:
        name: Face name shown as the object nickname
        image_url: Front image, or None when the provider has no art
        oracle_text: Rules text shown as the object description
    """

    name: str
    image_url: str | None = None
    oracle_text: str = ""


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A deck entry with quantity.

    Attributes:
        name: Card name as listed by the provider
        quantity: Number of physical copies (>= 1)
        zone: Deck region tag (e.g., "main", "Ruler")
        faces: Ordered faces, primary first
        oracle_text: Rules text of the primary face
        card_id: Provider card id, when given
    """

    name: str
    quantity: int
    zone: str
    faces: tuple[Face, ...] = field(default_factory=tuple)
    oracle_text: str = ""
    card_id: int | str | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity} for {self.name!r}")
