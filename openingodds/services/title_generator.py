"""Fun titles for calculation results."""

import random

from openingodds.analysis.sampler import make_rng
from openingodds.models.combo import Combo
from openingodds.models.results import ComboResult

SUFFIXES: dict[str, tuple[str, ...]] = {
    "single": ("Hunt", "Check", "Math", "Dreams"),
    "pair": ("Combo", "Engine", "Pair", "Duo"),
    "multi": ("Analysis", "Package", "Study", "Report"),
}

FLAVOR_TEXTS: dict[str, tuple[str, ...]] = {
    "high": ("Going Off!", "Maximum Consistency", "Trust the Math", "Opening Hand Magic"),
    "medium": ("Solid Chances", "Decent Odds", "Making It Work", "The Sweet Spot"),
    "low": ("Brick City?", "Pray for Luck", "Risk Taker", "Bold Strategy"),
}


def probability_emoji(average: float) -> str:
    if average > 80:
        return "\U0001f525"  # fire
    if average > 60:
        return "\u26a1"  # lightning
    if average > 40:
        return "\U0001f3b2"  # die
    return "\U0001f480"  # skull


def deck_flavor(deck_size: int) -> str:
    if deck_size == 40:
        return "Standard"
    if deck_size == 60:
        return "Big Deck"
    if deck_size < 40:
        return "Compact"
    return "Massive"


def generate_title(
    combos: list[Combo],
    deck_size: int,
    results: list[ComboResult],
    rng: random.Random | None = None,
) -> str:
    """
    Title such as "⚡ Standard Combo | Solid Chances".

    The emoji and flavour text follow the average combo probability; the
    suffix follows how many named cards the combos use.
    """
    rng = rng or make_rng()
    named_cards = [card.name for combo in combos for card in combo.cards if card.name.strip()]
    average = sum(r.probability for r in results) / len(results) if results else 0.0

    if average > 70:
        flavor_band = "high"
    elif average > 40:
        flavor_band = "medium"
    else:
        flavor_band = "low"
    flavor = rng.choice(FLAVOR_TEXTS[flavor_band])

    if len(named_cards) == 1:
        suffix_band = "single"
    elif len(named_cards) == 2:
        suffix_band = "pair"
    else:
        suffix_band = "multi"
    suffix = rng.choice(SUFFIXES[suffix_band])

    return f"{probability_emoji(average)} {deck_flavor(deck_size)} {suffix} | {flavor}"
