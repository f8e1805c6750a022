"""
Formula display models.

Structured hypergeometric breakdown of a result, ready for rendering.
"""

from dataclasses import dataclass, field
from enum import Enum

from openingodds.models.combo import LogicOperator


class FormulaType(str, Enum):
    """Shape of a formula display."""

    ERROR = "error"
    EXACT = "exact"
    RANGE = "range"
    MULTI_CARD = "multi-card"
    COMBINED = "combined"


@dataclass(frozen=True)
class FormulaLine:
    """
    One term P(X = k) = C(K, k) * C(N - K, n - k) / C(N, n).

    Attributes:
        probability: Percentage for this term
        copies: K, copies in deck
        k: Copies drawn
        remaining: N - K, other cards in deck
        drawn: n - k, other cards drawn
        percentage: Display string rounded to 2 decimals
        card_name: Card this line belongs to (multi-card formulas)
        description: Free text for combined formulas
    """

    probability: float
    copies: int
    k: int
    remaining: int
    drawn: int
    percentage: str
    card_name: str | None = None
    description: str = ""


@dataclass(frozen=True)
class FormulaCardHeader:
    """Header introducing a card's lines in a multi-card formula."""

    card_name: str
    is_first: bool = True
    logic: LogicOperator = LogicOperator.AND


@dataclass(frozen=True)
class FormulaMetadata:
    """Inputs the formula was computed for."""

    total_cards: int
    hand_size: int
    card_count: int = 1
    logic: LogicOperator = LogicOperator.AND


@dataclass
class FormulaDisplay:
    """A complete formula breakdown."""

    type: FormulaType
    scenarios: list[FormulaLine | FormulaCardHeader] = field(default_factory=list)
    total_percentage: str = "0.00%"
    metadata: FormulaMetadata = field(default_factory=lambda: FormulaMetadata(0, 0))
