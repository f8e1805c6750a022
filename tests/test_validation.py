"""Tests for combo and input validation."""

import pytest

from openingodds.analysis.validation import (
    validate_combo,
    validate_combo_input,
    validate_deck_size,
    validate_hand_size,
)
from openingodds.models.combo import CardPredicate, Combo, ComboErrorKind


def combo_of(*cards: CardPredicate) -> Combo:
    return Combo(id=1, name="Test", cards=list(cards))


class TestValidateCombo:
    def test_valid_combo(self) -> None:
        verdict = validate_combo(combo_of(CardPredicate("A", 3, 1, 3)), 40, 5)

        assert verdict.valid
        assert verdict.error is None
        assert verdict.message == ""

    @pytest.mark.parametrize(
        "cards,deck_size,hand_size,expected",
        [
            ([], 40, 5, ComboErrorKind.EMPTY_COMBO),
            (
                [CardPredicate("A", 30, 1, 3), CardPredicate("B", 20, 1, 3)],
                40,
                5,
                ComboErrorKind.TOTAL_COPIES_EXCEED_DECK,
            ),
            ([CardPredicate("A", 2, 3, 3)], 40, 5, ComboErrorKind.MIN_EXCEEDS_COPIES),
            ([CardPredicate("A", 10, 6, 6)], 40, 5, ComboErrorKind.MIN_EXCEEDS_HAND),
            ([CardPredicate("A", 3, 2, 1)], 40, 5, ComboErrorKind.MAX_LESS_THAN_MIN),
            (
                [
                    CardPredicate("A", 2, 1, 1),
                    CardPredicate("B", 3, 2, 3),
                    CardPredicate("C", 3, 3, 3),
                ],
                40,
                5,
                ComboErrorKind.SUM_OF_MINS_EXCEEDS_HAND,
            ),
        ],
    )
    def test_error_kinds(
        self,
        cards: list[CardPredicate],
        deck_size: int,
        hand_size: int,
        expected: ComboErrorKind,
    ) -> None:
        verdict = validate_combo(combo_of(*cards), deck_size, hand_size)

        assert not verdict.valid
        assert verdict.error == expected
        assert verdict.message

    def test_zero_copies_with_min_reports_min_exceeds_copies(self) -> None:
        """min > copies is checked before the zero-copies rule."""
        verdict = validate_combo(combo_of(CardPredicate("A", 0, 1, 1)), 40, 5)
        assert verdict.error == ComboErrorKind.MIN_EXCEEDS_COPIES

    def test_zero_copies_zero_min_is_valid(self) -> None:
        assert validate_combo(combo_of(CardPredicate("A", 0, 0, 0)), 40, 5).valid

    def test_idempotent(self) -> None:
        combo = combo_of(CardPredicate("A", 3, 2, 1))
        assert validate_combo(combo, 40, 5) == validate_combo(combo, 40, 5)


class TestSizeValidation:
    @pytest.mark.parametrize("size", [1, 40, 100])
    def test_valid_deck_sizes(self, size: int) -> None:
        assert validate_deck_size(size) is None

    @pytest.mark.parametrize("size", [0, 101, -5])
    def test_invalid_deck_sizes(self, size: int) -> None:
        assert validate_deck_size(size) == "Deck size must be between 1 and 100"

    def test_hand_size_range(self) -> None:
        assert validate_hand_size(5, 40) is None
        assert validate_hand_size(0, 40) == "Hand size must be between 1 and 20"
        assert validate_hand_size(21, 40) == "Hand size must be between 1 and 20"

    def test_hand_size_cannot_exceed_deck(self) -> None:
        assert validate_hand_size(6, 5) == "Hand size cannot exceed deck size"


class TestComboInput:
    def test_clean_combo(self) -> None:
        assert validate_combo_input(combo_of(CardPredicate("A", 3, 1, 3))) == []

    def test_collects_every_problem(self) -> None:
        errors = validate_combo_input(
            combo_of(
                CardPredicate("", 3, 1, 3),
                CardPredicate("B", 2, 2, 3),
                CardPredicate("C", -1, -1, -2),
            )
        )

        assert errors == [
            "Card 1: Card name is required",
            "Card 2: Max copies in hand cannot exceed copies in deck",
            "Card 3: Copies in deck cannot be negative",
            "Card 3: Min copies cannot be negative",
            "Card 3: Max copies cannot be less than min copies",
        ]

    def test_empty_combo(self) -> None:
        assert validate_combo_input(combo_of()) == ["Combo must have at least one card"]
