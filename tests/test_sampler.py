"""Tests for the partial Fisher-Yates sampler."""

from collections import Counter

from openingodds.analysis.sampler import OTHER, DeckBuffer, make_rng


class TestMakeRng:
    def test_same_seed_same_sequence(self) -> None:
        assert [make_rng(7).random() for _ in range(3)] == [make_rng(7).random() for _ in range(3)]

    def test_generators_are_independent(self) -> None:
        first = make_rng(7)
        second = make_rng(7)
        first.random()

        assert first.random() != second.random()


class TestDeckBuffer:
    def test_pads_with_other(self) -> None:
        buffer = DeckBuffer([2, 1], deck_size=5)
        hand = buffer.draw(5, make_rng(1))

        assert len(buffer) == 5
        assert Counter(hand) == {0: 2, 1: 1, OTHER: 2}

    def test_grows_when_labels_exceed_deck(self) -> None:
        buffer = DeckBuffer([3, 3], deck_size=4)
        assert len(buffer) == 6

    def test_hand_size_clamped_to_deck(self) -> None:
        buffer = DeckBuffer([1], deck_size=3)
        assert len(buffer.draw(10, make_rng(1))) == 3

    def test_zero_hand(self) -> None:
        buffer = DeckBuffer([3], deck_size=40)
        assert buffer.draw(0, make_rng(1)) == []
        assert buffer.hand_counts(0, make_rng(1), 1) == [0]

    def test_every_draw_starts_from_full_deck(self) -> None:
        """Repeated draws never lose or duplicate cards."""
        buffer = DeckBuffer([3, 2], deck_size=10)
        rng = make_rng(3)
        for _ in range(50):
            buffer.draw(4, rng)

        assert Counter(buffer.draw(10, rng)) == {0: 3, 1: 2, OTHER: 5}

    def test_hand_counts(self) -> None:
        buffer = DeckBuffer([3, 2], deck_size=5)
        assert buffer.hand_counts(5, make_rng(9), 2) == [3, 2]

    def test_distinct_in_hand(self) -> None:
        buffer = DeckBuffer([3, 2], deck_size=5)
        assert buffer.distinct_in_hand(5, make_rng(9)) == 2

    def test_deterministic_under_seed(self) -> None:
        first = DeckBuffer([3, 3, 3], deck_size=40)
        second = DeckBuffer([3, 3, 3], deck_size=40)
        rng_a, rng_b = make_rng(42), make_rng(42)

        first_hands = [first.draw(5, rng_a) for _ in range(20)]
        second_hands = [second.draw(5, rng_b) for _ in range(20)]
        assert first_hands == second_hands

    def test_each_position_equally_likely(self) -> None:
        """A single marked card lands in a 1-card hand about 1/N of the time."""
        buffer = DeckBuffer([1], deck_size=4)
        rng = make_rng(11)
        trials = 20_000

        hits = sum(1 for _ in range(trials) if buffer.draw(1, rng) == [0])

        assert abs(hits / trials - 0.25) < 0.02
