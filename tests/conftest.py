import json
from pathlib import Path

import pytest

from openingodds.models.card import Card, CardCategory
from openingodds.models.combo import CardPredicate, Combo
from openingodds.services.card_database import CardCatalog, card_from_record


@pytest.fixture
def card_records() -> list[dict]:
    """Sample YGOPRODeck card records."""
    return [
        {
            "id": 14558127,
            "name": "Ash Blossom & Joyous Spring",
            "type": "Tuner Effect Monster",
            "desc": "When a card or effect is activated that includes any of these effects "
            "(Quick Effect): You can discard this card; negate that activation.",
            "atk": 0,
            "def": 1800,
            "level": 3,
            "attribute": "FIRE",
        },
        {
            "id": 97268402,
            "name": "Effect Veiler",
            "type": "Tuner Effect Monster",
            "desc": "During your opponent's Main Phase (Quick Effect): You can send this card "
            "from your hand to the GY, then target 1 Effect Monster your opponent controls.",
            "atk": 0,
            "def": 0,
            "level": 1,
            "attribute": "LIGHT",
        },
        {
            "id": 10045474,
            "name": "Infinite Impermanence",
            "type": "Trap Card",
            "desc": "Target 1 face-up monster your opponent controls; negate its effects. "
            "If you control no cards, you can activate this card from your hand.",
        },
        {
            "id": 9674034,
            "name": "Snake-Eye Ash",
            "type": "Effect Monster",
            "desc": "If this card is Normal or Special Summoned: You can add 1 Level 1 FIRE "
            "monster from your Deck to your hand.",
            "atk": 800,
            "def": 1000,
            "level": 1,
            "attribute": "FIRE",
        },
        {
            "id": 35261759,
            "name": "Pot of Desires",
            "type": "Spell Card",
            "desc": "Banish 10 cards from the top of your Deck, face-down; draw 2 cards.",
        },
        {
            "id": 86066372,
            "name": "Accesscode Talker",
            "type": "Link Monster",
            "desc": "2+ Effect Monsters",
            "atk": 2300,
            "attribute": "DARK",
        },
    ]


@pytest.fixture
def catalog(card_records: list[dict]) -> CardCatalog:
    """Catalog over the sample records."""
    return CardCatalog([card_from_record(record) for record in card_records])


@pytest.fixture
def card_db_file(card_records: list[dict], tmp_path: Path) -> Path:
    """Create a temporary card database file."""
    db_path = tmp_path / "cards.json"
    with open(db_path, "w", encoding="utf-8") as f:
        json.dump({"data": card_records}, f)
    return db_path


@pytest.fixture
def filler_card() -> Card:
    """A vanilla Main Deck monster that is not a hand-trap."""
    return Card(
        id=89631139,
        name="Blue-Eyes White Dragon",
        category=CardCategory.MONSTER,
        type_line="Normal Monster",
        text="This legendary dragon is a powerful engine of destruction.",
        attribute="LIGHT",
        level=8,
        atk=3000,
        defense=2500,
    )


@pytest.fixture
def single_card_combo() -> Combo:
    """One 3-of that must be opened at least once."""
    return Combo(
        id=1,
        name="Combo 1",
        cards=[CardPredicate(name="Snake-Eye Ash", copies_in_deck=3, min_in_hand=1, max_in_hand=3)],
    )
