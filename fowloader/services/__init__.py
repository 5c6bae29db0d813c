from fowloader.services.collator import collate_zone, expand_spawn_requests, stack_objects
from fowloader.services.deck_fetcher import deck_api_url, fetch_deck, parse_deck_body
from fowloader.services.importer import DeckImporter
from fowloader.services.layout import group_by_zone, plan_zones, zone_is_face_down
from fowloader.services.spawner import build_card_payload, resolve_faces, spawn_card

__all__ = [
    "DeckImporter",
    "build_card_payload",
    "collate_zone",
    "deck_api_url",
    "expand_spawn_requests",
    "fetch_deck",
    "group_by_zone",
    "parse_deck_body",
    "plan_zones",
    "resolve_faces",
    "spawn_card",
    "stack_objects",
    "zone_is_face_down",
]
