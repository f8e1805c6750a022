"""
Random sampling without replacement.

The simulated deck is an array of column ids (one element per copy)
padded with OTHER up to the deck size. Drawing a hand runs only the first
``hand_size`` steps of a Fisher-Yates shuffle: position i is swapped with a
uniformly chosen position in [i, N). The first ``hand_size`` positions are
then a uniform random hand, with the same label counts as hypergeometric
sampling.
"""

import random

# Column id for cards that carry no tracked label
OTHER = -1


def make_rng(seed: int | None = None) -> random.Random:
    """
    Create a private random generator.

    A fixed seed makes every simulation that uses the generator
    reproducible; None seeds from the operating system.
    """
    return random.Random(seed)


class DeckBuffer:
    """
    Reusable deck array for repeated draws.

    The buffer is refilled from its template before every draw, so every
    trial starts from the same ordered deck.
    """

    def __init__(self, copies: list[int], deck_size: int) -> None:
        """
        Args:
            copies: Copies in the deck per column (column id = index)
            deck_size: Total deck size; the remainder is padded with OTHER.
                If the labelled copies exceed it, the deck holds just them.
        """
        template = [column for column, count in enumerate(copies) for _ in range(count)]
        if len(template) < deck_size:
            template.extend([OTHER] * (deck_size - len(template)))
        self._template = template
        self._cards = list(template)

    def __len__(self) -> int:
        return len(self._template)

    def draw(self, hand_size: int, rng: random.Random) -> list[int]:
        """Column ids of a uniformly drawn hand (OTHER for untracked cards)."""
        cards = self._cards
        cards[:] = self._template
        size = len(cards)
        hand_size = min(hand_size, size)
        draw = rng.random
        for i in range(hand_size):
            j = i + int(draw() * (size - i))
            cards[i], cards[j] = cards[j], cards[i]
        return cards[:hand_size]

    def hand_counts(self, hand_size: int, rng: random.Random, columns: int) -> list[int]:
        """Count vector of a freshly drawn hand: copies drawn per column."""
        counts = [0] * columns
        for column in self.draw(hand_size, rng):
            if column != OTHER:
                counts[column] += 1
        return counts

    def distinct_in_hand(self, hand_size: int, rng: random.Random) -> int:
        """Number of distinct columns in a freshly drawn hand."""
        return len({column for column in self.draw(hand_size, rng) if column != OTHER})
