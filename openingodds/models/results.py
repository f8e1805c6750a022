"""
Calculation result models.

Probabilities are percentages in [0, 100].
"""

from dataclasses import dataclass, field

from openingodds.models.combo import CardPredicate, ComboErrorKind


@dataclass
class ComboResult:
    """
    Probability of one combo.

    Attributes:
        combo_id: Id of the combo this result belongs to
        probability: Percentage of opening hands satisfying the combo
        cards: The combo's card slots, for formula display
        error: Validation failure that forced the probability to 0, if any
    """

    combo_id: str | int
    probability: float
    cards: list[CardPredicate] = field(default_factory=list)
    error: ComboErrorKind | None = None


@dataclass
class MultiStarterResult:
    """Probability of opening several distinct combo starters."""

    independent_starters: int
    two_plus: float
    three_plus: float | None = None


@dataclass
class MultiHandTrapResult:
    """Probability of opening several distinct hand-traps."""

    unique_hand_traps: int
    two_plus: float
    three_plus: float | None = None
    four_plus: float | None = None


@dataclass
class CalculationResult:
    """
    Everything computed for one set of combos.

    Attributes:
        individual: One result per combo, in input order
        combined: Probability that any combo succeeds (present iff >= 2 combos)
        multi_starter: Present iff >= 2 distinct starters
        multi_hand_trap: Present iff a deck was supplied with >= 2 unique hand-traps
    """

    individual: list[ComboResult] = field(default_factory=list)
    combined: float | None = None
    multi_starter: MultiStarterResult | None = None
    multi_hand_trap: MultiHandTrapResult | None = None


@dataclass(frozen=True, slots=True)
class StarterCard:
    """A distinct combo starter and the copies it occupies in the deck."""

    name: str
    catalog_id: int | None
    copies_in_deck: int


@dataclass(frozen=True, slots=True)
class HandTrapEntry:
    """A distinct hand-trap and its copies in the Main Deck."""

    name: str
    catalog_id: int
    copies_in_deck: int
