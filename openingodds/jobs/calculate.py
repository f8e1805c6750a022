"""
Calculate opening-hand probabilities from the command line.

Reads a share link or a JSON calculation file, optionally a deck file,
runs the probability engine, and prints results and formulas as JSON.

    openingodds-calc --link 'https://example.com/#calc=eyJkIjo0MC...'
    openingodds-calc --file calc.json --ydk deck.ydk --card-db cards.json --seed 7
"""

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from openingodds.analysis.hypergeometric import generate_combined_formula, generate_formula
from openingodds.analysis.probability import ProbabilityEngine
from openingodds.analysis.sampler import make_rng
from openingodds.config import settings
from openingodds.models.banlist import BANLISTS, DEFAULT_FORMAT, get_banlist
from openingodds.models.combo import Combo
from openingodds.models.deck import DeckSnapshot
from openingodds.models.failure import FailureKind, KnownError
from openingodds.models.serialized import SerializedCalc
from openingodds.services.card_database import CardCatalog, load_card_database
from openingodds.services.opening_hand import (
    CardSlot,
    HandSlot,
    generate_hand_from_deck,
    generate_probabilistic_hand,
)
from openingodds.services.title_generator import generate_title
from openingodds.services.url_codec import (
    CALC_FRAGMENT,
    decode_calculation_or_raise,
    decode_from_url,
)
from openingodds.services.ydk_parser import load_deck, parse_ydk, read_ydk_file

logger = logging.getLogger(__name__)


def load_calculation(link: str | None = None, path: Path | None = None) -> SerializedCalc:
    """
    Load calculation state from a share link (or its bare payload) or a JSON file.

    Raises:
        KnownError: If the link or file does not hold a calculation
    """
    if link is not None:
        if CALC_FRAGMENT not in link:
            return decode_calculation_or_raise(link)
        calc = decode_from_url(link)
        if calc is None:
            raise KnownError(
                kind=FailureKind.DECODE_FAILED,
                message="Share link could not be decoded",
            )
        return calc

    if path is None:
        raise KnownError(
            kind=FailureKind.MISSING_REQUIRED,
            message="A share link or a calculation file is required",
        )

    try:
        return SerializedCalc.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        raise KnownError(
            kind=FailureKind.DECODE_FAILED,
            message=f"Calculation file {path} could not be read",
            detail=str(e),
        ) from e


def load_snapshot(
    calc: SerializedCalc,
    catalog: CardCatalog | None,
    ydk_path: Path | None,
    format_name: str,
) -> DeckSnapshot | None:
    """
    Deck to use for hand-trap queries and preview hands.

    Priority: deck file on disk, then the deck file embedded in the link,
    then the deck-builder zones embedded in the link. Deck files need a
    catalog to resolve passcodes.
    """
    parsed = None
    if catalog is not None:
        if ydk_path is not None:
            parsed = read_ydk_file(ydk_path, catalog)
        elif calc.ydk is not None:
            parsed = parse_ydk(calc.ydk.content, catalog)

    if parsed is not None:
        deck, rejected = load_deck(parsed, get_banlist(format_name))
        for failure in rejected:
            logger.warning("Card not added: %s", failure.message)
        return deck.snapshot()

    if calc.deck_zones is not None:
        return calc.deck_zones.to_snapshot()

    return None


def _hand_names(hand: list[HandSlot]) -> list[str | None]:
    return [slot.name if isinstance(slot, CardSlot) else None for slot in hand]


def run_calculation(
    calc: SerializedCalc,
    deck: DeckSnapshot | None = None,
    catalog: CardCatalog | None = None,
    simulations: int | None = None,
    seed: int | None = None,
) -> dict[str, Any]:
    """
    Run every query for a calculation.

    Returns:
        JSON-ready dict with results, formulas, title and a preview hand.
    """
    combos = calc.to_combos()
    if catalog is not None:
        combos = [
            Combo(combo.id, combo.name, [catalog.resolve_predicate(card) for card in combo.cards])
            for combo in combos
        ]

    engine = ProbabilityEngine(simulations=simulations)
    rng = make_rng(seed)
    result = engine.calculate_all(combos, calc.deck_size, calc.hand_size, deck=deck, rng=rng)

    payload: dict[str, Any] = {
        "deck_size": calc.deck_size,
        "hand_size": calc.hand_size,
        "simulations": engine.simulations,
        "title": generate_title(combos, calc.deck_size, result.individual, rng) if combos else None,
        "results": asdict(result),
        "formulas": [
            asdict(generate_formula(combo_result, calc.deck_size, calc.hand_size))
            for combo_result in result.individual
        ],
        "combined_formula": asdict(generate_combined_formula(result)),
    }

    if deck is not None:
        payload["any_hand_trap"] = engine.any_hand_trap(
            deck, calc.deck_size, calc.hand_size, rng=rng
        )

    if calc.test_hand_from_decklist and deck is not None and deck.main:
        hand = generate_hand_from_deck(deck, calc.hand_size, rng)
    else:
        hand = generate_probabilistic_hand(combos, calc.deck_size, calc.hand_size, rng)
    payload["preview_hand"] = _hand_names(hand)

    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Opening hand probability calculator")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--link",
        help="Share link (or the encoded payload after #calc=)",
    )
    source.add_argument(
        "--file",
        type=Path,
        help="Path to a calculation JSON file (share-link keys)",
    )
    parser.add_argument(
        "--ydk",
        type=Path,
        help="Path to a .ydk deck file (requires a card database)",
    )
    parser.add_argument(
        "--card-db",
        type=Path,
        help="Path to the card database JSON",
    )
    parser.add_argument(
        "--format",
        default=DEFAULT_FORMAT,
        choices=sorted(BANLISTS),
        help="Banlist applied when loading a deck file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible results",
    )
    parser.add_argument(
        "--simulations",
        type=int,
        help=f"Trials per estimate (default {settings.default_simulations})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        calc = load_calculation(link=args.link, path=args.file)
        catalog = None
        if args.card_db is not None or args.ydk is not None:
            catalog = load_card_database(args.card_db)
        deck = load_snapshot(calc, catalog, args.ydk, args.format)
    except KnownError as e:
        logger.error("%s", e.message)
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load card database: %s", e)
        return 1

    payload = run_calculation(calc, deck, catalog, simulations=args.simulations, seed=args.seed)
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
