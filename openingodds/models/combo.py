"""
Combo models.

A combo is a predicate over the opening hand: every card slot in the combo
must be satisfied (drawn between its min and max copies) for the combo to
succeed. Disjunction is only expressed across combos.
"""

from dataclasses import dataclass, field
from enum import Enum


class LogicOperator(str, Enum):
    """
    Connective stored on card slots after the first.

    Kept for share-link compatibility. Evaluation always uses AND.
    """

    AND = "AND"
    OR = "OR"


# A label identifies a card across combos: (name, catalog id or None for custom)
Label = tuple[str, int | None]


@dataclass(frozen=True, slots=True)
class CardPredicate:
    """
    One card slot within a combo.

    Attributes:
        name: Canonical card name (or a user-chosen placeholder)
        copies_in_deck: Copies of this card in the deck
        min_in_hand: Minimum copies required in the opening hand
        max_in_hand: Maximum copies allowed in the opening hand
        catalog_id: Catalog passcode, None for custom cards
        is_custom: True for user-named placeholders with no catalog entry
        logic: Legacy connective, preserved for serialization only
    """

    name: str
    copies_in_deck: int
    min_in_hand: int
    max_in_hand: int
    catalog_id: int | None = None
    is_custom: bool = False
    logic: LogicOperator = LogicOperator.AND

    @property
    def label(self) -> Label:
        """Canonical identity; predicates with equal labels share one column."""
        return (self.name, self.catalog_id)

    @property
    def shape(self) -> tuple[int, int, int]:
        """Multiplicities only, used for result caching."""
        return (self.copies_in_deck, self.min_in_hand, self.max_in_hand)


@dataclass
class Combo:
    """
    A named set of card slots, all of which must be satisfied.

    Attributes:
        id: Opaque, stable identifier
        name: Human-readable name
        cards: Ordered card slots; the first one is the combo's starter
    """

    id: str | int
    name: str
    cards: list[CardPredicate] = field(default_factory=list)

    @property
    def starter(self) -> CardPredicate | None:
        """First card of the combo, None for an empty combo."""
        return self.cards[0] if self.cards else None

    def total_copies(self) -> int:
        """Sum of copies_in_deck across all card slots."""
        return sum(card.copies_in_deck for card in self.cards)

    def total_minimum(self) -> int:
        """Sum of min_in_hand across all card slots."""
        return sum(card.min_in_hand for card in self.cards)


def create_combo(combo_id: str | int, index: int) -> Combo:
    """
    Create a new combo with one empty card slot.

    The slot defaults to a 3-of that must be drawn at least once.
    """
    return Combo(
        id=combo_id,
        name=f"Combo {index + 1}",
        cards=[
            CardPredicate(
                name="",
                copies_in_deck=3,
                min_in_hand=1,
                max_in_hand=3,
            )
        ],
    )


class ComboErrorKind(str, Enum):
    """Reasons a combo cannot be satisfied."""

    TOTAL_COPIES_EXCEED_DECK = "total_copies_exceed_deck"
    MIN_EXCEEDS_COPIES = "min_exceeds_copies"
    MIN_EXCEEDS_HAND = "min_exceeds_hand"
    MAX_LESS_THAN_MIN = "max_less_than_min"
    ZERO_COPIES_REQUIRE_ZERO_MIN = "zero_copies_require_zero_min"
    SUM_OF_MINS_EXCEEDS_HAND = "sum_of_mins_exceeds_hand"
    EMPTY_COMBO = "empty_combo"


@dataclass(frozen=True, slots=True)
class ComboValidation:
    """
    Verdict of combo validation.

    Attributes:
        error: Why the combo is impossible, None when it is valid
        message: Human-readable explanation (empty when valid)
    """

    error: ComboErrorKind | None = None
    message: str = ""

    @property
    def valid(self) -> bool:
        """True if the combo can be simulated."""
        return self.error is None
