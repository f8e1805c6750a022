"""
Card database service.

Loads a YGOPRODeck card export and serves read-only lookups by passcode
and by name. Accepted layouts:

- API response: ``{"data": [{"id": ..., "name": ..., "type": ..., "desc": ...}]}``
- Plain list of the same records
- Compact index: ``{"<id>": {"name": ..., "type": ..., "isExtraDeck": ...}}``
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from openingodds.config import settings
from openingodds.models.card import EXTRA_DECK_TYPES, Card, CardCategory
from openingodds.models.combo import CardPredicate
from openingodds.models.failure import CardNotFoundError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_DATABASE_PATH = DATA_DIR / "cardDatabase.json"


def is_extra_deck_type(type_line: str) -> bool:
    """
    True for Fusion, Synchro, Xyz and Link monsters.

    Pendulum monsters only count when they are also one of those
    (e.g., "XYZ Pendulum Effect Monster").
    """
    lowered = type_line.lower()
    return any(kind in lowered for kind in EXTRA_DECK_TYPES)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def card_from_record(record: dict[str, Any], card_id: int | str | None = None) -> Card:
    """
    Build a Card from one catalog record.

    Args:
        record: Catalog record
        card_id: Passcode when the record is keyed by id instead of holding it

    Raises:
        KeyError: If the record has no name or no id
    """
    type_line = record.get("type") or ""
    is_extra = record.get("isExtraDeck")
    return Card(
        id=int(record["id"] if "id" in record else card_id),  # type: ignore[arg-type]
        name=record["name"],
        category=CardCategory.from_type_line(type_line),
        type_line=type_line,
        is_extra_deck=bool(is_extra) if is_extra is not None else is_extra_deck_type(type_line),
        text=record.get("desc") or "",
        attribute=record.get("attribute") or None,
        level=_optional_int(record.get("level")),
        atk=_optional_int(record.get("atk")),
        defense=_optional_int(record.get("def")),
    )


class CardCatalog:
    """
    Read-only card lookup.

    Lookups return None for unknown cards; ``require_by_id`` raises.
    """

    def __init__(self, cards: list[Card]) -> None:
        self._by_id: dict[int, Card] = {}
        self._by_name: dict[str, Card] = {}
        for card in cards:
            self._by_id.setdefault(card.id, card)
            self._by_name.setdefault(card.name.lower(), card)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._by_id

    def lookup_by_id(self, card_id: int | str) -> Card | None:
        try:
            return self._by_id.get(int(card_id))
        except ValueError:
            return None

    def lookup_by_name(self, name: str) -> Card | None:
        """Case-insensitive exact name lookup."""
        return self._by_name.get(name.strip().lower())

    def require_by_id(self, card_id: int) -> Card:
        """
        Look up a card that must exist.

        Raises:
            CardNotFoundError: If the passcode is unknown
        """
        card = self.lookup_by_id(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def is_extra_deck(self, card: Card) -> bool:
        """Whether a card belongs in the Extra Deck."""
        return card.is_extra_deck or is_extra_deck_type(card.type_line)

    def resolve_predicate(self, predicate: CardPredicate) -> CardPredicate:
        """
        Attach catalog identity to a combo card slot.

        A known name or id yields the canonical name and passcode. A miss
        yields a custom card keeping the user's name and no passcode, which
        the engine still simulates.
        """
        card = None
        if predicate.catalog_id is not None:
            card = self.lookup_by_id(predicate.catalog_id)
        if card is None and predicate.name:
            card = self.lookup_by_name(predicate.name)

        if card is None:
            return CardPredicate(
                name=predicate.name,
                copies_in_deck=predicate.copies_in_deck,
                min_in_hand=predicate.min_in_hand,
                max_in_hand=predicate.max_in_hand,
                catalog_id=None,
                is_custom=True,
                logic=predicate.logic,
            )

        return CardPredicate(
            name=card.name,
            copies_in_deck=predicate.copies_in_deck,
            min_in_hand=predicate.min_in_hand,
            max_in_hand=predicate.max_in_hand,
            catalog_id=card.id,
            is_custom=False,
            logic=predicate.logic,
        )


def load_card_database(path: Path | None = None) -> CardCatalog:
    """
    Load a card catalog from a JSON file.

    Args:
        path: Path to JSON file. Defaults to settings.card_database_path,
            then data/cardDatabase.json

    Returns:
        CardCatalog over every record with a name and an id.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or has an unknown layout
    """
    if path is None:
        path = settings.card_database_path or DEFAULT_DATABASE_PATH

    if not path.exists():
        raise FileNotFoundError(
            f"Card database not found at {path}. "
            "Set CARD_DATABASE_PATH to a YGOPRODeck cardinfo export."
        )

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Card database at {path} is corrupted: {e}") from e

    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        raw = raw["data"]

    cards: list[Card] = []
    if isinstance(raw, list):
        records = [(record, None) for record in raw]
    elif isinstance(raw, dict):
        records = [(record, card_id) for card_id, record in raw.items()]
    else:
        raise ValueError(f"Card database at {path} has an unrecognized layout")

    skipped = 0
    for record, card_id in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        try:
            cards.append(card_from_record(record, card_id))
        except (KeyError, TypeError, ValueError):
            skipped += 1

    if skipped:
        logger.warning("Skipped %d malformed card record(s) in %s", skipped, path)
    logger.info("Loaded %d cards from %s", len(cards), path)
    return CardCatalog(cards)


@lru_cache(maxsize=1)
def get_card_catalog() -> CardCatalog:
    """
    Get the cached card catalog.

    Cached after first load.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    return load_card_database()
