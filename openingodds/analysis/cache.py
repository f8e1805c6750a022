"""
Result cache for Monte Carlo probabilities.

Keys are semantic: they hold only multiplicities (copies, min, max) plus
deck and hand size. Two combos that differ only in card names share an
entry. The simulation count is not part of the key.
"""

import logging

from openingodds.models.combo import Combo

logger = logging.getLogger(__name__)


def _combo_shape(combo: Combo) -> str:
    return "|".join(f"{c}-{lo}-{hi}" for c, lo, hi in (card.shape for card in combo.cards))


def combo_cache_key(combo: Combo, deck_size: int, hand_size: int) -> str:
    """
    Key for a single-combo probability.

    Example: two 3-of slots needing one copy each, 40 cards, 5 drawn
    -> "3-1-3|3-1-3-40-5"
    """
    return f"{_combo_shape(combo)}-{deck_size}-{hand_size}"


def combined_cache_key(combos: list[Combo], deck_size: int, hand_size: int) -> str:
    """Key for an "any combo" probability. Combo boundaries are joined with ``||``."""
    shapes = "||".join(_combo_shape(combo) for combo in combos)
    return f"combined-{shapes}-{deck_size}-{hand_size}"


class ResultCache:
    """
    Unbounded in-memory store of computed probabilities.

    Owned by one engine. Not thread-safe.
    """

    def __init__(self) -> None:
        self._results: dict[str, float] = {}

    def get(self, key: str) -> float | None:
        result = self._results.get(key)
        if result is not None:
            logger.debug("Cache hit for %s", key)
        return result

    def put(self, key: str, probability: float) -> None:
        self._results[key] = probability

    def clear(self) -> None:
        """Drop every cached result."""
        self._results.clear()

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, key: object) -> bool:
        return key in self._results
