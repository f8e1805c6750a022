from dataclasses import dataclass
from enum import Enum


class CardCategory(str, Enum):
    """Top-level card category."""

    MONSTER = "monster"
    SPELL = "spell"
    TRAP = "trap"

    @classmethod
    def from_type_line(cls, type_line: str) -> "CardCategory":
        """Classify a catalog type line such as "Effect Monster" or "Trap Card"."""
        lowered = type_line.lower()
        if "spell" in lowered:
            return cls.SPELL
        if "trap" in lowered:
            return cls.TRAP
        return cls.MONSTER


# Type line fragments that send a monster to the Extra Deck
EXTRA_DECK_TYPES: tuple[str, ...] = ("fusion", "synchro", "xyz", "link")


@dataclass(frozen=True, slots=True)
class Card:
    """
    A card record from the catalog.

    Read-only. Card records may be freely shared between decks, combos
    and simulations.

    Attributes:
        id: Catalog passcode (stable integer id)
        name: Canonical card name
        category: Monster, spell or trap
        type_line: Full catalog type (e.g., "Effect Monster", "XYZ Monster")
        is_extra_deck: True for Fusion/Synchro/Xyz/Link monsters
        text: Card text (effect or flavour)
        attribute: Monster attribute (e.g., "DARK"), None for spells/traps
        level: Level or rank, None when the card has none
        atk: Attack points, None for spells/traps
        defense: Defense points, None for spells/traps and Link monsters
    """

    id: int
    name: str
    category: CardCategory
    type_line: str = ""
    is_extra_deck: bool = False
    text: str = ""
    attribute: str | None = None
    level: int | None = None
    atk: int | None = None
    defense: int | None = None

    @property
    def label(self) -> tuple[str, int | None]:
        """Label identity used when counting copies in simulations."""
        return (self.name, self.id)
