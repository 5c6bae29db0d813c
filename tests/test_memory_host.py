"""Tests for the in-memory table host."""

import asyncio

import pytest

from fowloader.codec import encode_payload
from fowloader.host.base import ObjectHandle, ObjectHost
from fowloader.host.memory import InMemoryTable, TableObject
from fowloader.models.deck import Vector


def _payload(name: str, x: float = 0.0) -> str:
    return encode_payload(
        {"Nickname": name, "Description": "", "Transform": {"posX": x, "posY": 1.0, "posZ": 0.0}}
    )


def _card(guid: str) -> TableObject:
    return TableObject(guid=guid, name=guid, description="", position=Vector(0, 0, 0))


def test_satisfies_host_protocol() -> None:
    host: ObjectHost = InMemoryTable()

    assert host.rotation() == Vector(0.0, 180.0, 0.0)


class TestSpawnObject:
    @pytest.mark.asyncio
    async def test_completes_on_later_iteration(self) -> None:
        """Creation is never confirmed inside the spawn call."""
        table = InMemoryTable()
        spawned: list[ObjectHandle] = []

        table.spawn_object(_payload("Fire Ball", x=2.0), spawned.append)
        assert spawned == []

        await asyncio.sleep(0.01)

        assert len(spawned) == 1
        obj = spawned[0]
        assert isinstance(obj, TableObject)
        assert obj.name == "Fire Ball"
        assert obj.position == Vector(2.0, 1.0, 0.0)
        assert table.objects == {obj.guid: obj}

    @pytest.mark.asyncio
    async def test_held_spawns_wait_for_release(self) -> None:
        table = InMemoryTable(hold_spawns=True)
        spawned: list[ObjectHandle] = []

        table.spawn_object(_payload("A"), spawned.append)
        table.spawn_object(_payload("B"), spawned.append)
        await asyncio.sleep(0.01)

        assert spawned == []
        assert table.pending_count == 2
        assert len(table.spawn_requests) == 2

        assert table.release_held() == 2
        assert [obj.name for obj in spawned] == ["A", "B"]
        assert table.pending_count == 0

    @pytest.mark.asyncio
    async def test_guids_are_unique(self) -> None:
        table = InMemoryTable()
        spawned: list[ObjectHandle] = []

        for _ in range(3):
            table.spawn_object(_payload("A"), spawned.append)
        await asyncio.sleep(0.01)

        assert len(table.objects) == 3


class TestMerge:
    def test_two_cards_make_a_stack(self) -> None:
        table = InMemoryTable()
        a, b = _card("a"), _card("b")
        table.objects.update({"a": a, "b": b})

        stack = table.merge(a, b)

        assert isinstance(stack, TableObject)
        assert stack.contents == [a, b]
        assert list(table.objects.values()) == [stack]

    def test_card_joins_existing_stack(self) -> None:
        table = InMemoryTable()
        a, b, c = _card("a"), _card("b"), _card("c")
        table.objects.update({"a": a, "b": b, "c": c})

        stack = table.merge(table.merge(a, b), c)

        assert isinstance(stack, TableObject)
        assert stack.card_count == 3
        assert len(table.objects) == 1

    def test_rejects_foreign_objects(self) -> None:
        table = InMemoryTable()

        with pytest.raises(TypeError):
            table.merge(_card("a"), object())  # type: ignore[arg-type]


class TestChat:
    def test_records_messages(self) -> None:
        table = InMemoryTable()

        table.print_to_all("hello")
        table.print_to_player("Red", "oops", (1.0, 0.0, 0.0))

        assert [(m.text, m.player, m.color) for m in table.messages] == [
            ("hello", None, None),
            ("oops", "Red", (1.0, 0.0, 0.0)),
        ]


def test_position_to_world_offsets_by_loader() -> None:
    table = InMemoryTable(loader_position=Vector(10.0, 1.0, -2.0))

    assert table.position_to_world(Vector(1.5, 0.5, 0.0)) == Vector(11.5, 1.5, -2.0)
