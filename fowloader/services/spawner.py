"""
Card object spawning.

Builds the host payload for one physical card and issues exactly one creation
call. The first face is the object's primary state; further faces become
alternate states of the same object.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from fowloader.codec import encode_payload
from fowloader.host.base import ObjectHandle, ObjectHost
from fowloader.models.card import Face
from fowloader.models.deck import Vector

logger = logging.getLogger(__name__)

# Substituted when a card has no faces or no art
PLACEHOLDER_NAME = "Unknown Card"
PLACEHOLDER_TEXT = "Card not found"
PLACEHOLDER_IMAGE_URL = (
    "https://vignette.wikia.nocookie.net/yugioh/images/9/94/Back-Anime-2.png"
    "/revision/latest?cb=20110624090942"
)

# Single-card custom deck: every card is its own 1x1 sheet
CUSTOM_DECK_ID = "24400"
CARD_ID = 2440000


def placeholder_face(name: str | None = None) -> Face:
    """Face used when the provider gave nothing to show."""
    return Face(
        name=name or PLACEHOLDER_NAME,
        image_url=PLACEHOLDER_IMAGE_URL,
        oracle_text=PLACEHOLDER_TEXT,
    )


def resolve_faces(faces: Sequence[Face] | None, fallback_name: str | None = None) -> list[Face]:
    """
    Make a face list spawnable.

    No faces -> a single placeholder face. Faces without art keep their name
    and text but show the placeholder image.
    """
    if not faces:
        return [placeholder_face(fallback_name)]

    resolved: list[Face] = []
    for face in faces:
        if face.image_url:
            resolved.append(face)
        else:
            resolved.append(
                Face(
                    name=face.name,
                    image_url=PLACEHOLDER_IMAGE_URL,
                    oracle_text=face.oracle_text,
                )
            )
    return resolved


def face_state(
    face: Face,
    position: Vector,
    flipped: bool,
    *,
    rotation: Vector,
    card_back: str,
) -> dict[str, Any]:
    """Host object description for one face."""
    rot_z = rotation.z
    if flipped:
        rot_z = (rot_z + 180) % 360

    return {
        "Name": "Card",
        "Transform": {
            "posX": position.x,
            "posY": position.y,
            "posZ": position.z,
            "rotX": rotation.x,
            "rotY": rotation.y,
            "rotZ": rot_z,
            "scaleX": 1,
            "scaleY": 1,
            "scaleZ": 1,
        },
        "Nickname": face.name,
        "Description": face.oracle_text,
        "Locked": False,
        "Grid": True,
        "Snap": True,
        "IgnoreFoW": False,
        "MeasureMovement": False,
        "DragSelectable": True,
        "Autoraise": True,
        "Sticky": True,
        "Tooltip": True,
        "GridProjection": False,
        "HideWhenFaceDown": True,
        "Hands": True,
        "CardID": CARD_ID,
        "SidewaysCard": False,
        "CustomDeck": {
            CUSTOM_DECK_ID: {
                "FaceURL": face.image_url,
                "BackURL": card_back,
                "NumWidth": 1,
                "NumHeight": 1,
                "BackIsHidden": True,
                "UniqueBack": False,
                "Type": 0,
            }
        },
        "LuaScript": "",
        "LuaScriptState": "",
    }


def build_card_payload(
    faces: Sequence[Face],
    position: Vector,
    flipped: bool,
    *,
    rotation: Vector,
    card_back: str,
) -> dict[str, Any]:
    """
    Host object description for a card with all its faces.

    Args:
        faces: Spawnable faces (see resolve_faces), primary first
        position: World position
        flipped: Spawn face down
        rotation: Base rotation, taken from the loader object
        card_back: Back image shared by every face

    Returns:
        The primary face's state, with alternate faces under "States" keyed "2".."n"
    """
    primary, *alternates = faces
    payload = face_state(primary, position, flipped, rotation=rotation, card_back=card_back)

    if alternates:
        payload["States"] = {
            str(i): face_state(face, position, flipped, rotation=rotation, card_back=card_back)
            for i, face in enumerate(alternates, start=2)
        }

    return payload


def spawn_card(
    host: ObjectHost,
    faces: Sequence[Face] | None,
    position: Vector,
    flipped: bool,
    *,
    card_back: str,
    on_spawned: Callable[[ObjectHandle], None] | None = None,
    fallback_name: str | None = None,
) -> "asyncio.Future[ObjectHandle]":
    """
    Request one card object from the host.

    Must be called from a running event loop. The returned future resolves with
    the object handle once the host confirms creation, always on a later loop
    iteration, even if the host reports completion synchronously. `on_spawned`
    is called with the handle at the same time.

    The future stays pending if the host never confirms; callers bound their
    wait with a timeout.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[ObjectHandle] = loop.create_future()

    payload = build_card_payload(
        resolve_faces(faces, fallback_name),
        position,
        flipped,
        rotation=host.rotation(),
        card_back=card_back,
    )

    def resolve(handle: ObjectHandle) -> None:
        if future.done():
            logger.debug("Ignoring repeated spawn confirmation for %s", payload["Nickname"])
            return
        future.set_result(handle)
        if on_spawned is not None:
            on_spawned(handle)

    def on_host_spawned(handle: ObjectHandle) -> None:
        loop.call_soon_threadsafe(resolve, handle)

    host.spawn_object(encode_payload(payload), on_host_spawned)
    return future
