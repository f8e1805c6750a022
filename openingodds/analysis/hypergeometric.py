"""
Exact hypergeometric probabilities for formula display.

P(X = k) = C(K, k) * C(N - K, n - k) / C(N, n)

Binomials use the multiplicative form, so intermediate values stay small
for decks of up to 100 cards.
"""

from openingodds.models.combo import LogicOperator
from openingodds.models.formula import (
    FormulaCardHeader,
    FormulaDisplay,
    FormulaLine,
    FormulaMetadata,
    FormulaType,
)
from openingodds.models.results import CalculationResult, ComboResult


def choose(n: int, k: int) -> float:
    """
    Binomial coefficient C(n, k) as a float.

    Returns 0 for k < 0 or k > n, and 1 for k in {0, n}.
    """
    if k < 0 or k > n:
        return 0.0
    if k == 0 or k == n:
        return 1.0

    result = 1.0
    for i in range(min(k, n - k)):
        result = result * (n - i) / (i + 1)
    return result


def hypergeometric(population: int, successes: int, sample: int, drawn: int) -> float:
    """
    Probability (percent) of exactly ``drawn`` successes in the sample.

    Args:
        population: Deck size (N)
        successes: Copies of the card in the deck (K)
        sample: Hand size (n)
        drawn: Copies in hand (k)

    Returns:
        Percentage in [0, 100]; 0 when the sample cannot be drawn.
    """
    denominator = choose(population, sample)
    if denominator == 0:
        return 0.0
    numerator = choose(successes, drawn) * choose(population - successes, sample - drawn)
    return numerator / denominator * 100


def format_percentage(probability: float) -> str:
    """Display a percentage rounded to 2 decimals."""
    return f"{probability:.2f}%"


def generate_formula(result: ComboResult, deck_size: int, hand_size: int) -> FormulaDisplay:
    """
    Build the formula breakdown for one combo result.

    - Single card, min == max: one exact line
    - Single card range: one line per k in [min, max], total is their sum
    - Several cards: a header per card followed by its lines; the total is
      the Monte Carlo probability, since the joint formula is not expanded
    """
    if not result.cards:
        return FormulaDisplay(
            type=FormulaType.ERROR,
            metadata=FormulaMetadata(total_cards=deck_size, hand_size=hand_size),
        )

    if len(result.cards) == 1:
        card = result.cards[0]
        lines = [
            _line(deck_size, card.copies_in_deck, hand_size, k)
            for k in range(card.min_in_hand, card.max_in_hand + 1)
        ]
        total = sum(line.probability for line in lines)
        return FormulaDisplay(
            type=FormulaType.EXACT if card.min_in_hand == card.max_in_hand else FormulaType.RANGE,
            scenarios=list(lines),
            total_percentage=format_percentage(total),
            metadata=FormulaMetadata(total_cards=deck_size, hand_size=hand_size),
        )

    scenarios: list[FormulaLine | FormulaCardHeader] = []
    for index, card in enumerate(result.cards):
        scenarios.append(
            FormulaCardHeader(card_name=card.name, is_first=index == 0, logic=card.logic)
        )
        for k in range(card.min_in_hand, card.max_in_hand + 1):
            scenarios.append(
                _line(deck_size, card.copies_in_deck, hand_size, k, card_name=card.name)
            )

    return FormulaDisplay(
        type=FormulaType.MULTI_CARD,
        scenarios=scenarios,
        total_percentage=f"{format_percentage(result.probability)} (Monte Carlo)",
        metadata=FormulaMetadata(
            total_cards=deck_size,
            hand_size=hand_size,
            card_count=len(result.cards),
            logic=LogicOperator.AND,
        ),
    )


def generate_combined_formula(result: CalculationResult) -> FormulaDisplay:
    """
    Build the "any combo" summary.

    With one combo the combined probability is that combo's probability.
    With several, it is the simulated probability that at least one combo
    is satisfied by the same hand.
    """
    if not result.individual:
        return FormulaDisplay(
            type=FormulaType.COMBINED,
            metadata=FormulaMetadata(total_cards=0, hand_size=0),
        )

    if len(result.individual) == 1 or result.combined is None:
        probability = result.individual[0].probability
        description = "P(Any Combo) = P(Combo 1)"
    else:
        probability = result.combined
        description = f"P(at least one of {len(result.individual)} combos), Monte Carlo"

    return FormulaDisplay(
        type=FormulaType.COMBINED,
        scenarios=[
            FormulaLine(
                probability=probability,
                copies=0,
                k=0,
                remaining=0,
                drawn=0,
                percentage=format_percentage(probability),
                description=description,
            )
        ],
        total_percentage=format_percentage(probability),
        metadata=FormulaMetadata(
            total_cards=0, hand_size=0, card_count=len(result.individual)
        ),
    )


def _line(
    deck_size: int,
    copies: int,
    hand_size: int,
    k: int,
    card_name: str | None = None,
) -> FormulaLine:
    probability = hypergeometric(deck_size, copies, hand_size, k)
    return FormulaLine(
        probability=probability,
        copies=copies,
        k=k,
        remaining=deck_size - copies,
        drawn=hand_size - k,
        percentage=format_percentage(probability),
        card_name=card_name,
    )
