"""
Monte Carlo probability engine.

Estimates how often an opening hand satisfies combos, holds several
distinct combo starters, or holds several distinct hand-traps. Each
trial draws a uniform hand without replacement (partial Fisher-Yates over
a label array) and evaluates the combos' expression trees against the
hand's count vector.

The engine never raises for bad input. Invalid combos and impossible
deck/hand sizes score 0 and are logged. Results are percentages in
[0, 100].

Determinism: every entry point takes an optional ``rng`` (or ``seed``).
With a fixed seed and a fresh engine, results are identical across runs.
"""

import logging
import random

from openingodds.analysis.cache import ResultCache, combined_cache_key, combo_cache_key
from openingodds.analysis.expression import Expression, LabelTable, build_expression_tree
from openingodds.analysis.sampler import DeckBuffer, make_rng
from openingodds.analysis.validation import validate_combo
from openingodds.config import settings
from openingodds.models.combo import Combo, Label
from openingodds.models.deck import DeckSnapshot
from openingodds.models.results import (
    CalculationResult,
    ComboResult,
    HandTrapEntry,
    MultiHandTrapResult,
    MultiStarterResult,
    StarterCard,
)
from openingodds.services.hand_trap import is_hand_trap, unique_hand_traps

logger = logging.getLogger(__name__)

# Distinct-count thresholds reported by calculate_all
MULTI_STARTER_THRESHOLDS = (2, 3)
MULTI_HAND_TRAP_THRESHOLDS = (2, 3, 4)


class ProbabilityEngine:
    """
    Monte Carlo engine with its own result cache.

    Callers that need isolated caches create separate engines.
    """

    def __init__(self, cache: ResultCache | None = None, simulations: int | None = None) -> None:
        """
        Args:
            cache: Result cache to use; a private one is created by default
            simulations: Default trials per estimate. Defaults to
                settings.default_simulations, capped at settings.max_simulations.
        """
        self.cache = cache if cache is not None else ResultCache()
        self.simulations = clamp_simulations(simulations)

    def clear_cache(self) -> None:
        """Forget every cached probability."""
        self.cache.clear()

    # =========================================================================
    # Combos
    # =========================================================================

    def single_combo(
        self,
        combo: Combo,
        deck_size: int,
        hand_size: int,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> float:
        """
        Probability that an opening hand satisfies every card of a combo.

        Args:
            combo: The combo to evaluate
            deck_size: Cards in the deck
            hand_size: Cards drawn
            simulations: Trials to run (engine default if omitted)
            rng: Random generator to draw from
            seed: Seed for a fresh generator when ``rng`` is omitted

        Returns:
            Percentage of trials in which the combo was satisfied. 0 for an
            invalid combo.
        """
        validation = validate_combo(combo, deck_size, hand_size)
        if not validation.valid:
            logger.warning("Invalid combo configuration %s: %s", combo.id, validation.message)
            return 0.0
        if not _sizes_ok(deck_size, hand_size):
            return 0.0

        key = combo_cache_key(combo, deck_size, hand_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        table = LabelTable()
        table.add_combo(combo)
        tree = build_expression_tree(combo.cards, table)
        if tree is None:
            return 0.0

        probability = _success_rate(
            [tree],
            table,
            deck_size,
            hand_size,
            self._trials(simulations),
            _resolve_rng(rng, seed),
        )
        self.cache.put(key, probability)
        return probability

    def any_combo(
        self,
        combos: list[Combo],
        deck_size: int,
        hand_size: int,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> float:
        """
        Probability that an opening hand satisfies at least one combo.

        All combos are evaluated against the same hand. Equal labels share
        one column, drawn from a pool of the largest copy count any combo
        requests for them. Invalid combos never succeed and do not
        contribute cards to the simulated deck.
        """
        valid = [combo for combo in combos if validate_combo(combo, deck_size, hand_size).valid]
        if len(valid) < len(combos):
            logger.warning(
                "Skipping %d invalid combo(s) in combined probability", len(combos) - len(valid)
            )
        if not valid or not _sizes_ok(deck_size, hand_size):
            return 0.0

        key = combined_cache_key(combos, deck_size, hand_size)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        table = LabelTable.for_combos(valid)
        trees: list[Expression] = []
        for combo in valid:
            tree = build_expression_tree(combo.cards, table)
            if tree is not None:
                trees.append(tree)
        logger.debug("Combined simulation over %d labels, %d combos", len(table), len(trees))

        probability = _success_rate(
            trees,
            table,
            deck_size,
            hand_size,
            self._trials(simulations),
            _resolve_rng(rng, seed),
        )
        self.cache.put(key, probability)
        return probability

    # =========================================================================
    # Distinct-count queries
    # =========================================================================

    def independent_starters(self, combos: list[Combo]) -> list[StarterCard]:
        """
        Unique combo starters (first card of each combo), by label.

        A starter used by several combos keeps the largest copy count.
        """
        starters: dict[Label, StarterCard] = {}
        for combo in combos:
            first = combo.starter
            if first is None:
                continue
            existing = starters.get(first.label)
            if existing is None or first.copies_in_deck > existing.copies_in_deck:
                starters[first.label] = StarterCard(
                    name=first.name,
                    catalog_id=first.catalog_id,
                    copies_in_deck=first.copies_in_deck,
                )
        return list(starters.values())

    def multi_starter(
        self,
        combos: list[Combo],
        minimum: int,
        deck_size: int,
        hand_size: int,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> float:
        """
        Probability of opening at least ``minimum`` distinct combo starters.

        Returns 0 when there are fewer starters than ``minimum``.
        """
        starters = self.independent_starters(combos)
        return self._distinct_rate(
            [starter.copies_in_deck for starter in starters],
            minimum,
            deck_size,
            hand_size,
            simulations,
            _resolve_rng(rng, seed),
        )

    def unique_hand_traps(self, deck: DeckSnapshot) -> list[HandTrapEntry]:
        """Distinct hand-traps in the Main Deck with their copies."""
        return unique_hand_traps(deck)

    def multi_hand_trap(
        self,
        deck: DeckSnapshot,
        minimum: int,
        deck_size: int,
        hand_size: int,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> float:
        """
        Probability of opening at least ``minimum`` distinct hand-traps.

        Returns 0 when the deck holds fewer unique hand-traps than ``minimum``.
        """
        hand_traps = unique_hand_traps(deck)
        return self._distinct_rate(
            [entry.copies_in_deck for entry in hand_traps],
            minimum,
            deck_size,
            hand_size,
            simulations,
            _resolve_rng(rng, seed),
        )

    def any_hand_trap(
        self,
        deck: DeckSnapshot,
        deck_size: int,
        hand_size: int,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> float:
        """Probability of opening one or more hand-trap copies."""
        copies = sum(1 for card in deck.main if is_hand_trap(card))
        if copies == 0:
            return 0.0
        return self._distinct_rate(
            [copies],
            1,
            deck_size,
            hand_size,
            simulations,
            _resolve_rng(rng, seed),
        )

    # =========================================================================
    # Everything at once
    # =========================================================================

    def calculate_all(
        self,
        combos: list[Combo],
        deck_size: int,
        hand_size: int,
        deck: DeckSnapshot | None = None,
        simulations: int | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> CalculationResult:
        """
        Compute every probability shown for a set of combos.

        - individual: one result per combo, in input order
        - combined: present iff there are at least 2 combos
        - multi_starter: present iff there are at least 2 distinct starters
        - multi_hand_trap: present iff a deck is given with >= 2 unique hand-traps

        All estimates draw from one generator, in the order listed above.
        """
        rng = _resolve_rng(rng, seed)
        result = CalculationResult()

        for combo in combos:
            validation = validate_combo(combo, deck_size, hand_size)
            result.individual.append(
                ComboResult(
                    combo_id=combo.id,
                    probability=self.single_combo(
                        combo, deck_size, hand_size, simulations=simulations, rng=rng
                    ),
                    cards=list(combo.cards),
                    error=validation.error,
                )
            )

        if len(combos) > 1:
            result.combined = self.any_combo(
                combos, deck_size, hand_size, simulations=simulations, rng=rng
            )

        starters = self.independent_starters(combos)
        if len(starters) >= 2:
            probabilities = {
                minimum: self.multi_starter(
                    combos, minimum, deck_size, hand_size, simulations=simulations, rng=rng
                )
                for minimum in MULTI_STARTER_THRESHOLDS
                if len(starters) >= minimum
            }
            result.multi_starter = MultiStarterResult(
                independent_starters=len(starters),
                two_plus=probabilities[2],
                three_plus=probabilities.get(3),
            )

        if deck is not None:
            hand_traps = unique_hand_traps(deck)
            if len(hand_traps) >= 2:
                probabilities = {
                    minimum: self.multi_hand_trap(
                        deck, minimum, deck_size, hand_size, simulations=simulations, rng=rng
                    )
                    for minimum in MULTI_HAND_TRAP_THRESHOLDS
                    if len(hand_traps) >= minimum
                }
                result.multi_hand_trap = MultiHandTrapResult(
                    unique_hand_traps=len(hand_traps),
                    two_plus=probabilities[2],
                    three_plus=probabilities.get(3),
                    four_plus=probabilities.get(4),
                )

        logger.info(
            "Calculated %d combo(s) over %d simulations (deck %d, hand %d)",
            len(combos),
            self._trials(simulations),
            deck_size,
            hand_size,
        )
        return result

    # =========================================================================
    # Internals
    # =========================================================================

    def _trials(self, simulations: int | None) -> int:
        if simulations is None:
            return self.simulations
        return clamp_simulations(simulations)

    def _distinct_rate(
        self,
        copies: list[int],
        minimum: int,
        deck_size: int,
        hand_size: int,
        simulations: int | None,
        rng: random.Random,
    ) -> float:
        if len(copies) < minimum or not _sizes_ok(deck_size, hand_size):
            return 0.0

        trials = self._trials(simulations)
        buffer = _deck_buffer(copies, deck_size)
        successes = 0
        for _ in range(trials):
            if buffer.distinct_in_hand(hand_size, rng) >= minimum:
                successes += 1
        return successes / trials * 100


def clamp_simulations(simulations: int | None) -> int:
    """Trial count within [1, settings.max_simulations]; None means the default."""
    if simulations is None:
        simulations = settings.default_simulations
    return max(1, min(simulations, settings.max_simulations))


def _resolve_rng(rng: random.Random | None, seed: int | None) -> random.Random:
    if rng is not None:
        return rng
    return make_rng(seed)


def _sizes_ok(deck_size: int, hand_size: int) -> bool:
    if deck_size < 1 or hand_size < 0 or hand_size > deck_size:
        logger.warning("Cannot draw %d cards from a deck of %d", hand_size, deck_size)
        return False
    return True


def _deck_buffer(copies: list[int], deck_size: int) -> DeckBuffer:
    labelled = sum(copies)
    if labelled > deck_size:
        logger.warning(
            "Tracked copies (%d) exceed deck size (%d); simulating a %d-card deck",
            labelled,
            deck_size,
            labelled,
        )
    return DeckBuffer(copies, deck_size)


def _success_rate(
    trees: list[Expression],
    table: LabelTable,
    deck_size: int,
    hand_size: int,
    trials: int,
    rng: random.Random,
) -> float:
    buffer = _deck_buffer(table.copies, deck_size)
    columns = len(table)
    successes = 0
    for _ in range(trials):
        counts = buffer.hand_counts(hand_size, rng, columns)
        # First satisfied combo ends the trial
        if any(tree.evaluate(counts) for tree in trees):
            successes += 1
    return successes / trials * 100
