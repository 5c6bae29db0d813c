"""
In-memory tabletop host.

Implements ObjectHost without a real table: spawned objects are kept in a dict,
creation completes on a later event-loop iteration, and chat messages are
recorded. Used by the CLI job, the HTTP app and the tests.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fowloader.codec import decode_payload
from fowloader.host.base import Color, ObjectHandle
from fowloader.models.deck import Vector

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TableObject:
    """A card or stack of cards lying on the table."""

    guid: str
    name: str
    description: str
    position: Vector
    payload: dict[str, Any] = field(default_factory=dict)
    contents: list["TableObject"] = field(default_factory=list)

    @property
    def is_stack(self) -> bool:
        return bool(self.contents)

    @property
    def card_count(self) -> int:
        """Number of cards this object represents."""
        return len(self.contents) if self.contents else 1

    def set_name(self, name: str) -> None:
        self.name = name

    def set_description(self, description: str) -> None:
        self.description = description

    def set_position(self, position: Vector) -> None:
        self.position = position


@dataclass
class ChatMessage:
    """A message printed by the host. `player` is None for broadcasts."""

    text: str
    player: str | None = None
    color: Color | None = None


class InMemoryTable:
    """
    ObjectHost backed by plain Python objects.

    Args:
        spawn_delay: Seconds between a spawn request and its completion
        hold_spawns: Keep spawns pending until release_held() is called
        loader_position: World position of the loader object
        loader_rotation: Rotation of the loader object in degrees
    """

    def __init__(
        self,
        *,
        spawn_delay: float = 0.0,
        hold_spawns: bool = False,
        loader_position: Vector = Vector(0.0, 1.0, 0.0),
        loader_rotation: Vector = Vector(0.0, 180.0, 0.0),
    ) -> None:
        self.spawn_delay = spawn_delay
        self.hold_spawns = hold_spawns
        self.loader_position = loader_position
        self.loader_rotation = loader_rotation

        self.objects: dict[str, TableObject] = {}
        self.messages: list[ChatMessage] = []
        self.spawn_requests: list[dict[str, Any]] = []

        self._held: list[tuple[TableObject, Callable[[ObjectHandle], None]]] = []
        self._guids = itertools.count(1)

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    def spawn_object(self, payload: str, on_spawned: Callable[[ObjectHandle], None]) -> None:
        data = decode_payload(payload)
        self.spawn_requests.append(data)

        transform = data.get("Transform", {})
        obj = TableObject(
            guid=self._next_guid(),
            name=data.get("Nickname", ""),
            description=data.get("Description", ""),
            position=Vector(
                transform.get("posX", 0.0),
                transform.get("posY", 0.0),
                transform.get("posZ", 0.0),
            ),
            payload=data,
        )

        if self.hold_spawns:
            self._held.append((obj, on_spawned))
            return

        loop = asyncio.get_running_loop()
        loop.call_later(self.spawn_delay, self._complete, obj, on_spawned)

    def release_held(self) -> int:
        """Complete every held spawn now. Returns how many were released."""
        held, self._held = self._held, []
        for obj, on_spawned in held:
            self._complete(obj, on_spawned)
        return len(held)

    def merge(self, base: ObjectHandle, other: ObjectHandle) -> ObjectHandle:
        if not isinstance(base, TableObject) or not isinstance(other, TableObject):
            raise TypeError("InMemoryTable can only merge its own objects")

        self.objects.pop(other.guid, None)
        incoming = other.contents if other.is_stack else [other]

        if base.is_stack:
            base.contents.extend(incoming)
            return base

        self.objects.pop(base.guid, None)
        stack = TableObject(
            guid=self._next_guid(),
            name="Deck",
            description="",
            position=base.position,
            contents=[base, *incoming],
        )
        self.objects[stack.guid] = stack
        return stack

    def position_to_world(self, local: Vector) -> Vector:
        return Vector(
            self.loader_position.x + local.x,
            self.loader_position.y + local.y,
            self.loader_position.z + local.z,
        )

    def rotation(self) -> Vector:
        return self.loader_rotation

    # -------------------------------------------------------------------------
    # Chat
    # -------------------------------------------------------------------------

    def print_to_player(self, player: str, text: str, color: Color | None = None) -> None:
        self.messages.append(ChatMessage(text=text, player=player, color=color))

    def print_to_all(self, text: str) -> None:
        self.messages.append(ChatMessage(text=text))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def pending_count(self) -> int:
        """Spawns requested but held back."""
        return len(self._held)

    def _next_guid(self) -> str:
        return f"{next(self._guids):06x}"

    def _complete(self, obj: TableObject, on_spawned: Callable[[ObjectHandle], None]) -> None:
        self.objects[obj.guid] = obj
        logger.debug("Spawned %s (%s)", obj.guid, obj.name)
        on_spawned(obj)
