"""
Zone layout planning.

Each zone tag gets one anchor, assigned in first-seen order along the x axis
from a fixed origin. Ruler zones spawn face up; everything else face down.
"""

from fowloader.config import ZONE_ORIGIN, ZONE_STEP_X
from fowloader.models.card import CardRecord
from fowloader.models.deck import Vector, ZonePlan

FACE_UP_ZONE_MARKER = "ruler"


def zone_is_face_down(zone: str, *, force_face_down: bool = False) -> bool:
    """Face down unless the tag mentions a ruler, or when forced."""
    if force_face_down:
        return True
    return FACE_UP_ZONE_MARKER not in zone.lower()


def plan_zones(
    cards: list[CardRecord],
    *,
    force_face_down: bool = False,
) -> dict[str, ZonePlan]:
    """
    Assign a position and orientation to every zone in the card list.

    Args:
        cards: Normalized card list
        force_face_down: Spawn every zone face down

    Returns:
        Dict of zone tag -> ZonePlan, in first-seen order.
        Identical input always yields identical plans.
    """
    origin_x, origin_y, origin_z = ZONE_ORIGIN
    plans: dict[str, ZonePlan] = {}

    for card in cards:
        if card.zone in plans:
            continue

        index = len(plans)
        plans[card.zone] = ZonePlan(
            zone=card.zone,
            index=index,
            position=Vector(origin_x + index * ZONE_STEP_X, origin_y, origin_z),
            face_down=zone_is_face_down(card.zone, force_face_down=force_face_down),
        )

    return plans


def group_by_zone(cards: list[CardRecord]) -> dict[str, list[CardRecord]]:
    """Cards per zone tag, zones and cards in first-seen order."""
    zones: dict[str, list[CardRecord]] = {}
    for card in cards:
        zones.setdefault(card.zone, []).append(card)
    return zones
