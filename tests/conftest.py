from typing import Any

import pytest

from fowloader.config import Settings
from fowloader.host.memory import InMemoryTable

BASE_URL = "https://forceofwind.online"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with short timeouts, independent of the environment."""
    return Settings(
        _env_file=None,
        fow_base_url=BASE_URL,
        image_base_url="",
        card_back_url="https://example.com/back.png",
        spawn_face_down=False,
        zone_timeout=1.0,
        import_timeout=2.0,
    )


@pytest.fixture
def table() -> InMemoryTable:
    return InMemoryTable()


@pytest.fixture
def sample_deck() -> dict[str, Any]:
    """A deck response with a ruler, a main deck and a stone deck."""
    return {
        "name": "Fire Aggro",
        "cards": {
            "Arla, the Winged Lady": {
                "name": "Arla, the Winged Lady",
                "img": "https://img.example/arla.png",
                "oracleText": "Pay 1: Put Arla into your field.",
                "quantity": 1,
                "id": 101,
                "zone": "Ruler",
                "otherFaces": [
                    {
                        "name": "Arla, the Winged Lady (J)",
                        "img": "https://img.example/arla-j.png",
                        "oracleText": "Flying",
                    }
                ],
            },
            "Fire Ball": {
                "name": "Fire Ball",
                "img": "https://img.example/fire-ball.png",
                "oracleText": "Deal 500 damage to target J/resonator.",
                "quantity": 4,
                "id": 102,
                "zone": "Main Deck",
            },
            "Magic Stone of Flame": {
                "name": "Magic Stone of Flame",
                "img": "https://img.example/stone.png",
                "oracleText": "",
                "quantity": 3,
                "id": 103,
                "zone": "Stone Deck",
            },
            "Little Red Riding Hood": {
                "name": "Little Red Riding Hood",
                "img": "",
                "oracleText": "Swiftness",
                "quantity": 2,
                "id": 104,
                "zone": "Main Deck",
            },
        },
    }
