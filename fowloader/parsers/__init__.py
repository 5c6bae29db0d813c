from fowloader.parsers.deck_url import parse_deck_url, site_host
from fowloader.parsers.forceofwind import (
    CardPayload,
    DeckPayload,
    FacePayload,
    normalize_cards,
)

__all__ = [
    "CardPayload",
    "DeckPayload",
    "FacePayload",
    "normalize_cards",
    "parse_deck_url",
    "site_host",
]
