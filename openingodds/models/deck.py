"""
Deck model with Main, Extra and Side zones.

INVARIANTS:
- |Main| <= 60, |Extra| <= 15, |Side| <= 15
- copies(name) across all zones <= banlist limit for the deck's format
- Extra Deck monsters never enter Main; other cards never enter Extra

Mutations return an Outcome. A refused mutation leaves the deck unchanged.
The engine never sees a Deck directly: it consumes a DeckSnapshot.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Any

from openingodds.config import (
    LEGAL_MAIN_DECK_MIN,
    MAX_EXTRA_DECK,
    MAX_MAIN_DECK,
    MAX_SIDE_DECK,
)
from openingodds.models.banlist import DEFAULT_FORMAT, Banlist, BanlistStatus, get_banlist
from openingodds.models.card import Card, CardCategory
from openingodds.models.failure import FailureKind, Outcome


class DeckZone(str, Enum):
    """Deck zones."""

    MAIN = "main"
    EXTRA = "extra"
    SIDE = "side"

    @property
    def capacity(self) -> int:
        """Maximum number of cards in this zone."""
        return _ZONE_CAPACITY[self]


_ZONE_CAPACITY: dict[DeckZone, int] = {
    DeckZone.MAIN: MAX_MAIN_DECK,
    DeckZone.EXTRA: MAX_EXTRA_DECK,
    DeckZone.SIDE: MAX_SIDE_DECK,
}


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """One physical copy of a card placed in a zone."""

    entry_id: str
    card: Card
    zone: DeckZone


@dataclass(frozen=True)
class DeckStatistics:
    """
    Main Deck composition summary.

    Attributes:
        total_cards: Number of cards in the Main Deck
        monsters: Monster count
        spells: Spell count
        traps: Trap count
        monster_levels: Level -> number of monsters at that level
        attributes: Attribute -> number of cards with it
        is_legal: True if every zone size is tournament legal
    """

    total_cards: int
    monsters: int
    spells: int
    traps: int
    monster_levels: dict[int, int]
    attributes: dict[str, int]
    is_legal: bool

    @property
    def status(self) -> str:
        """Either "legal" or "invalid"."""
        return "legal" if self.is_legal else "invalid"


@dataclass(frozen=True)
class DeckSnapshot:
    """
    Immutable view of a deck at one point in time.

    Attributes:
        main: Main Deck cards, one element per copy
        extra: Extra Deck cards, one element per copy
        side: Side Deck cards, one element per copy
    """

    main: tuple[Card, ...] = ()
    extra: tuple[Card, ...] = ()
    side: tuple[Card, ...] = ()

    def zone(self, zone: DeckZone) -> tuple[Card, ...]:
        """Cards in a zone."""
        if zone == DeckZone.MAIN:
            return self.main
        if zone == DeckZone.EXTRA:
            return self.extra
        return self.side

    @property
    def main_size(self) -> int:
        """Number of cards in the Main Deck."""
        return len(self.main)

    def main_counts(self) -> dict[str, int]:
        """Main Deck as {card_name: copies}, in first-appearance order."""
        return dict(Counter(card.name for card in self.main))

    def main_unique_cards(self) -> list[Card]:
        """One record per distinct Main Deck card name, in first-appearance order."""
        seen: dict[str, Card] = {}
        for card in self.main:
            seen.setdefault(card.name, card)
        return list(seen.values())

    def statistics(self) -> DeckStatistics:
        """Compute Main Deck statistics."""
        categories = Counter(card.category for card in self.main)
        levels: Counter[int] = Counter(
            card.level
            for card in self.main
            if card.category == CardCategory.MONSTER and card.level
        )
        attributes: Counter[str] = Counter(card.attribute for card in self.main if card.attribute)

        is_legal = (
            LEGAL_MAIN_DECK_MIN <= len(self.main) <= MAX_MAIN_DECK
            and len(self.extra) <= MAX_EXTRA_DECK
            and len(self.side) <= MAX_SIDE_DECK
        )

        return DeckStatistics(
            total_cards=len(self.main),
            monsters=categories[CardCategory.MONSTER],
            spells=categories[CardCategory.SPELL],
            traps=categories[CardCategory.TRAP],
            monster_levels=dict(levels),
            attributes=dict(attributes),
            is_legal=is_legal,
        )


@dataclass
class Deck:
    """
    A mutable deck under a banlist.

    Attributes:
        banlist: Copy limits applied on insertion
        entries: Cards per zone, in insertion order
    """

    banlist: Banlist = field(default_factory=lambda: get_banlist(DEFAULT_FORMAT))
    entries: dict[DeckZone, list[DeckEntry]] = field(
        default_factory=lambda: {zone: [] for zone in DeckZone}
    )
    _ids: Any = field(default_factory=count, repr=False, compare=False)

    def add(self, card: Card, zone: DeckZone = DeckZone.MAIN) -> Outcome[DeckEntry]:
        """
        Add one copy of a card to a zone.

        Returns:
            Success with the new entry, or a refusal (deck unchanged) when
            the card is in the wrong zone, over its banlist limit, or the
            zone is full.
        """
        if card.is_extra_deck and zone == DeckZone.MAIN:
            return Outcome.refusal(
                kind=FailureKind.ZONE_MISMATCH,
                message=f"{card.name} belongs in the Extra Deck",
                suggestion="Add it to the Extra Deck instead.",
            )
        if not card.is_extra_deck and zone == DeckZone.EXTRA:
            return Outcome.refusal(
                kind=FailureKind.ZONE_MISMATCH,
                message=f"{card.name} cannot be placed in the Extra Deck",
                suggestion="Add it to the Main or Side Deck instead.",
            )

        status = self.banlist.status_of(card.name)
        if status == BanlistStatus.FORBIDDEN:
            return Outcome.refusal(
                kind=FailureKind.FORMAT_ILLEGAL,
                message=f"{card.name} is forbidden in {self.banlist.format_name}",
            )

        limit = status.max_copies
        if self.copies_of(card.name) >= limit:
            return Outcome.refusal(
                kind=FailureKind.FORMAT_ILLEGAL,
                message=f"{card.name} is {status.value}: only {limit} copies allowed",
                detail=f"copies({card.name}) = {self.copies_of(card.name)}, limit = {limit}",
            )

        if len(self.entries[zone]) >= zone.capacity:
            return Outcome.refusal(
                kind=FailureKind.ZONE_FULL,
                message=f"{zone.value.title()} Deck cannot exceed {zone.capacity} cards",
            )

        entry = DeckEntry(
            entry_id=f"{zone.value}_{card.id}_{next(self._ids)}",
            card=card,
            zone=zone,
        )
        self.entries[zone].append(entry)
        return Outcome.success(entry)

    def remove(self, entry_id: str, zone: DeckZone) -> Outcome[DeckEntry]:
        """Remove an entry from a zone."""
        for index, entry in enumerate(self.entries[zone]):
            if entry.entry_id == entry_id:
                del self.entries[zone][index]
                return Outcome.success(entry)

        return Outcome.known_failure(
            kind=FailureKind.NOT_FOUND,
            message=f"No entry {entry_id} in the {zone.value.title()} Deck",
        )

    def clear_zone(self, zone: DeckZone) -> None:
        """Remove every card from a zone."""
        self.entries[zone] = []

    def copies_of(self, card_name: str) -> int:
        """Copies of a card across all zones."""
        return sum(
            1
            for entries in self.entries.values()
            for entry in entries
            if entry.card.name == card_name
        )

    def zone_size(self, zone: DeckZone) -> int:
        """Number of cards in a zone."""
        return len(self.entries[zone])

    def snapshot(self) -> DeckSnapshot:
        """Freeze the current state for the engine."""
        return DeckSnapshot(
            main=tuple(entry.card for entry in self.entries[DeckZone.MAIN]),
            extra=tuple(entry.card for entry in self.entries[DeckZone.EXTRA]),
            side=tuple(entry.card for entry in self.entries[DeckZone.SIDE]),
        )

    def main_as_multiset(self) -> dict[str, int]:
        """Main Deck as {card_name: copies}."""
        return self.snapshot().main_counts()
