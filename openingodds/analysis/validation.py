"""
Combo and deck configuration validation.

``validate_combo`` is the engine-side check: an invalid combo is never
simulated and scores 0. The ``validate_*_size`` and ``validate_combo_input``
helpers return user-facing messages for form input.
"""

from openingodds.config import MAX_DECK_SIZE, MAX_HAND_SIZE, MIN_DECK_SIZE, MIN_HAND_SIZE
from openingodds.models.combo import Combo, ComboErrorKind, ComboValidation


def validate_combo(combo: Combo, deck_size: int, hand_size: int) -> ComboValidation:
    """
    Check that a combo can be satisfied by some opening hand.

    Checks, in order:
    1. Total copies across card slots fit in the deck
    2. Per card: min <= copies, min <= hand size, max >= min,
       zero copies only with min 0
    3. Sum of minimums fits in the hand

    Args:
        combo: The combo to check
        deck_size: Total deck size
        hand_size: Cards drawn

    Returns:
        ComboValidation; ``valid`` is False with an error kind on failure.
    """
    if not combo.cards:
        return ComboValidation(ComboErrorKind.EMPTY_COMBO, "Combo must have at least one card")

    total_copies = combo.total_copies()
    if total_copies > deck_size:
        return ComboValidation(
            ComboErrorKind.TOTAL_COPIES_EXCEED_DECK,
            f"Total card copies ({total_copies}) exceed deck size ({deck_size})",
        )

    for card in combo.cards:
        if card.min_in_hand > card.copies_in_deck:
            return ComboValidation(
                ComboErrorKind.MIN_EXCEEDS_COPIES,
                f"Min copies in hand ({card.min_in_hand}) exceeds copies in deck "
                f"({card.copies_in_deck})",
            )
        if card.min_in_hand > hand_size:
            return ComboValidation(
                ComboErrorKind.MIN_EXCEEDS_HAND,
                f"Min copies in hand ({card.min_in_hand}) exceeds hand size ({hand_size})",
            )
        if card.max_in_hand < card.min_in_hand:
            return ComboValidation(
                ComboErrorKind.MAX_LESS_THAN_MIN,
                "Max copies cannot be less than min copies",
            )
        if card.copies_in_deck == 0 and card.min_in_hand > 0:
            return ComboValidation(
                ComboErrorKind.ZERO_COPIES_REQUIRE_ZERO_MIN,
                "Card has 0 copies in deck but requires min > 0 in hand",
            )

    sum_of_mins = combo.total_minimum()
    if sum_of_mins > hand_size:
        return ComboValidation(
            ComboErrorKind.SUM_OF_MINS_EXCEEDS_HAND,
            f"Sum of minimum copies ({sum_of_mins}) exceeds hand size ({hand_size})",
        )

    return ComboValidation()


def validate_deck_size(size: int) -> str | None:
    """Error message for an out-of-range deck size, None if valid."""
    if size < MIN_DECK_SIZE or size > MAX_DECK_SIZE:
        return f"Deck size must be between {MIN_DECK_SIZE} and {MAX_DECK_SIZE}"
    return None


def validate_hand_size(size: int, deck_size: int) -> str | None:
    """Error message for an out-of-range hand size, None if valid."""
    if size < MIN_HAND_SIZE or size > MAX_HAND_SIZE:
        return f"Hand size must be between {MIN_HAND_SIZE} and {MAX_HAND_SIZE}"
    if size > deck_size:
        return "Hand size cannot exceed deck size"
    return None


def validate_combo_input(combo: Combo) -> list[str]:
    """
    Collect every form-level problem with a combo.

    Unlike ``validate_combo`` this does not stop at the first problem and
    does not need deck or hand sizes.
    """
    errors: list[str] = []

    if not combo.cards:
        errors.append("Combo must have at least one card")

    for index, card in enumerate(combo.cards, 1):
        if not card.name.strip():
            errors.append(f"Card {index}: Card name is required")
        if card.copies_in_deck < 0:
            errors.append(f"Card {index}: Copies in deck cannot be negative")
        if card.min_in_hand < 0:
            errors.append(f"Card {index}: Min copies cannot be negative")
        if card.max_in_hand < card.min_in_hand:
            errors.append(f"Card {index}: Max copies cannot be less than min copies")
        if card.max_in_hand > card.copies_in_deck:
            errors.append(f"Card {index}: Max copies in hand cannot exceed copies in deck")

    return errors
