"""
Force of Wind deck API response schema and card-list normalizer.

Response shape (GET /api/deck/<slug>/):
    {
        "name": "My Deck",
        "cards": {
            "<card name>": {
                "name": ..., "img": ..., "oracleText": ..., "quantity": 2,
                "id": 123, "zone": "main",
                "otherFaces": [{"name": ..., "img": ..., "oracleText": ...}]
            }
        }
    }
"""

import logging

from pydantic import BaseModel, ConfigDict, Field

from fowloader.models.card import CardRecord, Face

logger = logging.getLogger(__name__)

DEFAULT_ZONE = "main"


class FacePayload(BaseModel):
    """An alternate face as sent by the provider."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    img: str | None = None
    oracle_text: str | None = Field(default=None, alias="oracleText")


class CardPayload(FacePayload):
    """One card entry of the deck mapping."""

    quantity: int | None = None
    id: int | str | None = None
    zone: str | None = None
    other_faces: list[FacePayload] | None = Field(default=None, alias="otherFaces")


class DeckPayload(BaseModel):
    """Top-level deck response."""

    name: str
    cards: dict[str, CardPayload | None] | None = None


def _image_url(img: str | None, image_base_url: str) -> str | None:
    if not img:
        return None
    return f"{image_base_url}{img}"


def _face(payload: FacePayload, fallback_name: str, image_base_url: str) -> Face:
    return Face(
        name=payload.name or fallback_name,
        image_url=_image_url(payload.img, image_base_url),
        oracle_text=payload.oracle_text or "",
    )


def normalize_cards(payload: DeckPayload, *, image_base_url: str = "") -> list[CardRecord]:
    """
    Convert the deck response's card mapping into an ordered card list.

    The primary face is built from the card's own name/img/oracleText; any
    otherFaces follow in the order the provider listed them. Cards without
    art are kept (image_url=None); the spawner substitutes a placeholder.

    Args:
        payload: Validated deck response
        image_base_url: Prefix for image paths

    Returns:
        CardRecords in the mapping's order. Null entries and entries with a
        quantity below 1 are skipped.
    """
    records: list[CardRecord] = []

    for key, card in (payload.cards or {}).items():
        if card is None:
            continue

        name = card.name or key
        quantity = 1 if card.quantity is None else card.quantity
        if quantity < 1:
            logger.warning("Skipping %r: quantity %d", name, quantity)
            continue

        faces = [_face(card, name, image_base_url)]
        for other in card.other_faces or []:
            faces.append(_face(other, name, image_base_url))

        records.append(
            CardRecord(
                name=name,
                quantity=quantity,
                zone=card.zone or DEFAULT_ZONE,
                faces=tuple(faces),
                oracle_text=card.oracle_text or "",
                card_id=card.id,
            )
        )

    return records
