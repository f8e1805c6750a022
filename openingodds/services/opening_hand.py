"""
Preview opening hands.

Draws one illustrative hand, either from the cards named in combos
(padded with blanks up to the deck size) or from a deck's Main Deck.
Uses the same sampler as the probability engine.
"""

import logging
import random
from dataclasses import dataclass

from openingodds.analysis.expression import LabelTable
from openingodds.analysis.sampler import OTHER, DeckBuffer, make_rng
from openingodds.models.combo import Combo
from openingodds.models.deck import DeckSnapshot

logger = logging.getLogger(__name__)

# Hands drawn by generate_probabilistic_hand before picking one
PREVIEW_ATTEMPTS = 10


@dataclass(frozen=True, slots=True)
class CardSlot:
    """A real card in a preview hand."""

    name: str
    catalog_id: int | None = None
    is_custom: bool = False


@dataclass(frozen=True, slots=True)
class BlankSlot:
    """A card the preview does not track."""


HandSlot = CardSlot | BlankSlot


def _blank_hand(hand_size: int) -> list[HandSlot]:
    return [BlankSlot() for _ in range(max(hand_size, 0))]


def _draw(
    slots: list[CardSlot],
    copies: list[int],
    deck_size: int,
    hand_size: int,
    rng: random.Random,
) -> list[HandSlot]:
    drawn = DeckBuffer(copies, deck_size).draw(hand_size, rng)
    hand: list[HandSlot] = [BlankSlot() if column == OTHER else slots[column] for column in drawn]
    hand.extend(BlankSlot() for _ in range(hand_size - len(hand)))
    return hand


def generate_hand(
    combos: list[Combo],
    deck_size: int,
    hand_size: int,
    rng: random.Random | None = None,
) -> list[HandSlot]:
    """
    Draw a hand from the cards named in combos.

    Each named card appears with the largest copy count any combo gives
    it; the rest of the deck is blanks. Unnamed card slots are skipped.
    """
    if not combos or hand_size <= 0 or deck_size <= 0:
        return _blank_hand(hand_size)

    table = LabelTable()
    slots: list[CardSlot] = []
    for combo in combos:
        for card in combo.cards:
            if not card.name.strip():
                continue
            column = table.add(card.label, card.copies_in_deck)
            if column == len(slots):
                slots.append(CardSlot(card.name, card.catalog_id, card.is_custom))

    return _draw(slots, table.copies, deck_size, hand_size, rng or make_rng())


def generate_probabilistic_hand(
    combos: list[Combo],
    deck_size: int,
    hand_size: int,
    rng: random.Random | None = None,
    attempts: int = PREVIEW_ATTEMPTS,
) -> list[HandSlot]:
    """
    Draw several hands and pick one at random.

    Hands holding at least one real card are preferred; if none does,
    any of them is returned.
    """
    rng = rng or make_rng()
    hands = [generate_hand(combos, deck_size, hand_size, rng) for _ in range(attempts)]
    with_cards = [hand for hand in hands if any(isinstance(slot, CardSlot) for slot in hand)]
    return rng.choice(with_cards or hands)


def generate_hand_from_deck(
    deck: DeckSnapshot,
    hand_size: int,
    rng: random.Random | None = None,
) -> list[HandSlot]:
    """
    Draw a hand from a deck's Main Deck.

    Missing cards (empty deck, or fewer cards than the hand size) are blanks.
    """
    if not deck.main or hand_size <= 0:
        return _blank_hand(hand_size)

    counts = deck.main_counts()
    cards = deck.main_unique_cards()
    slots = [CardSlot(card.name, card.id) for card in cards]
    copies = [counts[card.name] for card in cards]
    logger.debug("Drawing preview hand from %d Main Deck cards", deck.main_size)
    return _draw(slots, copies, deck.main_size, hand_size, rng or make_rng())
