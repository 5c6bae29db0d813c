"""
Host interfaces.

The tabletop host owns object creation, stacking, the loader's transform and
player chat. The importer only talks to it through these protocols.
"""

from collections.abc import Callable
from typing import Protocol

from fowloader.models.deck import Vector

Color = tuple[float, float, float]


class ObjectHandle(Protocol):
    """A created game object."""

    def set_name(self, name: str) -> None: ...

    def set_description(self, description: str) -> None: ...

    def set_position(self, position: Vector) -> None: ...


class ObjectHost(Protocol):
    """The host's object, transform and messaging primitives."""

    def spawn_object(self, payload: str, on_spawned: Callable[[ObjectHandle], None]) -> None:
        """
        Request creation of an object from an encoded payload.

        Returns immediately. `on_spawned` is called by the host, at some later
        point, once the object exists.
        """
        ...

    def merge(self, base: ObjectHandle, other: ObjectHandle) -> ObjectHandle:
        """Put `other` onto `base`, returning the resulting stack."""
        ...

    def position_to_world(self, local: Vector) -> Vector:
        """Convert a position local to the loader object to world space."""
        ...

    def rotation(self) -> Vector:
        """Rotation of the loader object in degrees."""
        ...

    def print_to_player(self, player: str, text: str, color: Color | None = None) -> None: ...

    def print_to_all(self, text: str) -> None: ...
