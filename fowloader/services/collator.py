"""
Zone collation: fan out one spawn per physical card, join with a deadline,
then stack the results into a single object named after the zone.

Zones are independent. A zone that times out reports an error and leaves its
already-spawned cards on the table; late confirmations are discarded.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from fowloader.host.base import ObjectHandle, ObjectHost
from fowloader.models.card import CardRecord
from fowloader.models.deck import SpawnRequest, ZoneOutcome, ZonePlan
from fowloader.models.failure import ZoneTimeoutError
from fowloader.services.spawner import spawn_card

logger = logging.getLogger(__name__)


def expand_spawn_requests(plan: ZonePlan, cards: Sequence[CardRecord]) -> list[SpawnRequest]:
    """One SpawnRequest per physical copy, in card order. Positions are local."""
    return [
        SpawnRequest(card=card, faces=card.faces, position=plan.position, flipped=plan.face_down)
        for card in cards
        for _ in range(card.quantity)
    ]


def stack_objects(host: ObjectHost, objects: Sequence[ObjectHandle]) -> ObjectHandle:
    """Fold every object into one stack, in order. A single object is returned as-is."""
    stack, *rest = objects
    for obj in rest:
        stack = host.merge(stack, obj)
    return stack


async def collate_zone(
    host: ObjectHost,
    plan: ZonePlan,
    cards: Sequence[CardRecord],
    *,
    card_back: str,
    timeout: float,
    on_complete: Callable[[ZoneOutcome], None] | None = None,
) -> ZoneOutcome:
    """
    Spawn and stack one zone.

    Args:
        host: Object host
        plan: Zone anchor and orientation
        cards: The zone's cards
        card_back: Back image for every card
        timeout: Seconds to wait for every spawn of this zone
        on_complete: Called exactly once with the outcome

    Returns:
        ZoneOutcome with the stacked object, or with a timeout error and no merge
    """
    requests = expand_spawn_requests(plan, cards)
    world_position = host.position_to_world(plan.position)
    outcome = ZoneOutcome(zone=plan.zone, expected=len(requests))

    if not requests:
        outcome.error = f"Zone {plan.zone} has no cards."
        _finish(outcome, on_complete)
        return outcome

    outstanding = 0
    # Set once the join returns; the outcome is final from then on
    closed = False

    def on_spawned(_handle: ObjectHandle) -> None:
        nonlocal outstanding
        if closed:
            logger.debug("Zone %s: discarding late spawn", plan.zone)
            return
        outstanding -= 1
        outcome.spawned += 1

    futures: list[asyncio.Future[ObjectHandle]] = []
    for request in requests:
        outstanding += 1
        futures.append(
            spawn_card(
                host,
                request.faces,
                world_position,
                request.flipped,
                card_back=card_back,
                on_spawned=on_spawned,
                fallback_name=request.card.name,
            )
        )

    logger.info("Zone %s: %d spawn(s) issued", plan.zone, len(futures))

    _done, pending = await asyncio.wait(futures, timeout=timeout)
    closed = True

    if pending:
        error = ZoneTimeoutError(plan.zone, spawned=outcome.spawned, expected=outcome.expected)
        logger.warning(
            "Zone %s timed out: %s (%d outstanding)", plan.zone, error.detail, outstanding
        )
        outcome.error = error.message
        _finish(outcome, on_complete)
        return outcome

    obj = stack_objects(host, [future.result() for future in futures])
    if len(futures) > 1:
        obj.set_name(plan.zone)
        obj.set_description(plan.zone)
        obj.set_position(world_position)

    outcome.obj = obj
    logger.info("Zone %s: %d object(s) collated", plan.zone, outcome.spawned)
    _finish(outcome, on_complete)
    return outcome


def _finish(outcome: ZoneOutcome, on_complete: Callable[[ZoneOutcome], None] | None) -> None:
    if on_complete is not None:
        on_complete(outcome)
