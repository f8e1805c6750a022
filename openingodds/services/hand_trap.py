"""
Hand-trap classification.

A hand-trap is a card that can be used from the hand during the
opponent's turn. Classification is a first-match decision list:

1. Known hand-trap names -> True
2. Spells -> False
3. Exclusion patterns (your-turn or reveal effects) -> False
4. 0 ATK / 0 DEF monsters with a "from your hand" effect -> True
5. Monster text patterns -> True
6. Trap text patterns -> True
7. Otherwise -> False

Patterns are data; add new ones to the tuples below.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from openingodds.models.card import Card, CardCategory
from openingodds.models.deck import DeckSnapshot
from openingodds.models.results import HandTrapEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandTrapPattern:
    """A card-text pattern and what it recognizes."""

    regex: re.Pattern[str]
    description: str

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


def _pattern(expression: str, description: str) -> HandTrapPattern:
    return HandTrapPattern(re.compile(expression, re.IGNORECASE), description)


KNOWN_HAND_TRAPS: frozenset[str] = frozenset(
    {
        # Monsters
        "Ash Blossom & Joyous Spring",
        "Effect Veiler",
        "Nibiru, the Primal Being",
        "Ghost Ogre & Snow Rabbit",
        "D.D. Crow",
        "Droll & Lock Bird",
        # Traps
        "Infinite Impermanence",
        "Dominus Impulse",
        "Dominus Purge",
    }
)

MONSTER_PATTERNS: tuple[HandTrapPattern, ...] = (
    _pattern(r"\(quick effect\):\s*you can discard this card", "Quick Effect discard"),
    _pattern(
        r"during your opponent's turn.*from your hand|from your hand.*during your opponent's turn",
        "Opponent turn from hand",
    ),
    _pattern(r"when your opponent.*you can.*from your hand", "When opponent triggers from hand"),
    _pattern(
        r"if your opponent.*discard this card from your hand",
        "If opponent discard from hand",
    ),
)

TRAP_PATTERNS: tuple[HandTrapPattern, ...] = (
    _pattern(r"you can activate this card from your hand", "Activate from hand"),
    _pattern(
        r"if you control no cards,\s*you can activate this card from your hand",
        "No cards control activate from hand",
    ),
    _pattern(
        r"if your opponent controls a card,\s*you can activate this card from your hand",
        "Opponent controls activate from hand",
    ),
)

EXCLUSION_PATTERNS: tuple[HandTrapPattern, ...] = (
    _pattern(
        r"during your turn.*from your hand|from your hand.*during your turn",
        "Your turn from hand",
    ),
    _pattern(r"reveal.*from your hand", "Reveal from hand"),
    _pattern(r"during your main phase.*from your hand", "Your Main Phase from hand"),
)

_FROM_HAND = re.compile(r"from your hand", re.IGNORECASE)


def is_hand_trap(card: Card) -> bool:
    """Whether a card is a hand-trap."""
    if card.name in KNOWN_HAND_TRAPS:
        logger.debug("Hand-trap identified (known): %s", card.name)
        return True

    if card.category == CardCategory.SPELL:
        return False

    for pattern in EXCLUSION_PATTERNS:
        if pattern.matches(card.text):
            logger.debug("Excluded from hand-traps (%s): %s", pattern.description, card.name)
            return False

    if card.category == CardCategory.MONSTER:
        if card.atk == 0 and card.defense == 0 and _FROM_HAND.search(card.text):
            logger.debug("Hand-trap identified (0/0 monster with hand effect): %s", card.name)
            return True
        for pattern in MONSTER_PATTERNS:
            if pattern.matches(card.text):
                logger.debug("Hand-trap identified (%s): %s", pattern.description, card.name)
                return True

    if card.category == CardCategory.TRAP:
        for pattern in TRAP_PATTERNS:
            if pattern.matches(card.text):
                logger.debug("Hand-trap identified (%s): %s", pattern.description, card.name)
                return True

    return False


def count_hand_traps(cards: Iterable[tuple[Card, int]]) -> int:
    """Total hand-trap copies in (card, quantity) pairs."""
    return sum(quantity for card, quantity in cards if is_hand_trap(card))


def unique_hand_traps(deck: DeckSnapshot) -> list[HandTrapEntry]:
    """
    Distinct hand-traps in the Main Deck, in first-appearance order.

    Cards are distinguished by name; copies are counted in the Main Deck.
    """
    counts = deck.main_counts()
    return [
        HandTrapEntry(name=card.name, catalog_id=card.id, copies_in_deck=counts[card.name])
        for card in deck.main_unique_cards()
        if is_hand_trap(card)
    ]
