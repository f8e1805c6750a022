"""
YDK deck file parser.

A .ydk file is line oriented:

    #created by ...
    #main
    89631139
    #extra
    ...
    !side
    ...

Section markers are recognized before comments, so ``#main`` and
``#extra`` are never mistaken for comments. Body lines are passcodes;
anything else is ignored. Cards found in the wrong section are moved:
Extra Deck monsters listed under ``#main`` go to the Extra Deck and
other cards listed under ``#extra`` go to the Main Deck.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from openingodds.config import MAX_YDK_FILE_BYTES
from openingodds.models.banlist import Banlist
from openingodds.models.card import Card
from openingodds.models.deck import Deck, DeckSnapshot, DeckZone
from openingodds.models.failure import FailureDetail, FailureKind, KnownError
from openingodds.services.card_database import CardCatalog

logger = logging.getLogger(__name__)

YDK_EXTENSION = ".ydk"
YDK_HEADER = "#created by OpeningOdds"

_SECTION_MARKERS: dict[str, DeckZone] = {
    "#main": DeckZone.MAIN,
    "#extra": DeckZone.EXTRA,
    "!side": DeckZone.SIDE,
}


class YdkFileError(KnownError):
    """Raised when a deck file is rejected before parsing."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.INVALID_FILE,
            message=message,
            detail=detail,
            suggestion="Export the deck again as a .ydk file under 100KB.",
        )


@dataclass
class ZoneCorrection:
    """A card moved out of the section it was listed under."""

    card_name: str
    listed: DeckZone
    placed: DeckZone


@dataclass
class YdkParseResult:
    """
    Parsed deck file.

    Attributes:
        main: Main Deck cards, one element per copy
        extra: Extra Deck cards, one element per copy
        side: Side Deck cards, one element per copy
        unmatched_ids: Passcodes missing from the catalog, in file order
        card_counts: Main Deck copies by card name
        corrections: Cards moved between Main and Extra
    """

    main: list[Card] = field(default_factory=list)
    extra: list[Card] = field(default_factory=list)
    side: list[Card] = field(default_factory=list)
    unmatched_ids: list[str] = field(default_factory=list)
    card_counts: dict[str, int] = field(default_factory=dict)
    corrections: list[ZoneCorrection] = field(default_factory=list)

    def zone(self, zone: DeckZone) -> list[Card]:
        if zone == DeckZone.MAIN:
            return self.main
        if zone == DeckZone.EXTRA:
            return self.extra
        return self.side

    def snapshot(self) -> DeckSnapshot:
        """Parsed zones as a deck snapshot (no banlist checks)."""
        return DeckSnapshot(main=tuple(self.main), extra=tuple(self.extra), side=tuple(self.side))


def parse_ydk(content: str, catalog: CardCatalog) -> YdkParseResult:
    """
    Parse deck file text.

    Args:
        content: Raw file text
        catalog: Card catalog used to resolve passcodes

    Returns:
        YdkParseResult. Unknown passcodes are collected, not raised.
    """
    result = YdkParseResult()
    section = DeckZone.MAIN

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        marker = _SECTION_MARKERS.get(line)
        if marker is not None:
            section = marker
            continue

        if line.startswith("#") or not line.isdigit():
            continue

        card = catalog.lookup_by_id(line)
        if card is None:
            result.unmatched_ids.append(line)
            continue

        zone = _correct_zone(card, section, catalog)
        if zone != section:
            logger.warning(
                "Auto-correcting: moving %s from %s to %s",
                card.name,
                section.value,
                zone.value,
            )
            result.corrections.append(ZoneCorrection(card.name, section, zone))

        result.zone(zone).append(card)
        if zone == DeckZone.MAIN:
            result.card_counts[card.name] = result.card_counts.get(card.name, 0) + 1

    logger.info(
        "Parsed deck file: %d main, %d extra, %d side, %d unmatched",
        len(result.main),
        len(result.extra),
        len(result.side),
        len(result.unmatched_ids),
    )
    return result


def _correct_zone(card: Card, section: DeckZone, catalog: CardCatalog) -> DeckZone:
    extra = catalog.is_extra_deck(card)
    if extra and section == DeckZone.MAIN:
        return DeckZone.EXTRA
    if not extra and section == DeckZone.EXTRA:
        return DeckZone.MAIN
    return section


def export_ydk(deck: DeckSnapshot) -> str:
    """
    Write a deck snapshot as normalized deck file text.

    Parsing the output with the same catalog yields the same zones.
    """
    lines = [YDK_HEADER]
    for marker, zone in _SECTION_MARKERS.items():
        lines.append(marker)
        lines.extend(str(card.id) for card in deck.zone(zone))
    return "\n".join(lines) + "\n"


def validate_ydk_file(path: Path) -> None:
    """
    Reject files that are not plausible deck files.

    Raises:
        YdkFileError: If the file is missing, too large, or not a .ydk file
    """
    if path.suffix.lower() != YDK_EXTENSION:
        raise YdkFileError("Only YDK files are supported", detail=str(path))
    if not path.is_file():
        raise YdkFileError(f"Deck file not found: {path}")

    size = path.stat().st_size
    if size > MAX_YDK_FILE_BYTES:
        raise YdkFileError(
            "File size exceeds 100KB limit",
            detail=f"{path} is {size} bytes",
        )


def read_ydk_file(path: Path, catalog: CardCatalog) -> YdkParseResult:
    """
    Validate then parse a deck file from disk.

    Raises:
        YdkFileError: If the file is rejected or is not UTF-8 text
    """
    validate_ydk_file(path)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise YdkFileError("Deck file is not a text file", detail=str(e)) from e
    return parse_ydk(content, catalog)


def load_deck(
    parsed: YdkParseResult, banlist: Banlist | None = None
) -> tuple[Deck, list[FailureDetail]]:
    """
    Build a Deck from parsed zones, enforcing the banlist.

    Cards the deck refuses (banlist, zone capacity) are skipped and their
    failures returned alongside the deck.
    """
    deck = Deck(banlist=banlist) if banlist is not None else Deck()
    rejected: list[FailureDetail] = []

    for zone in DeckZone:
        for card in parsed.zone(zone):
            outcome = deck.add(card, zone)
            if not outcome.ok and outcome.failure is not None:
                rejected.append(outcome.failure)

    if rejected:
        logger.warning("Deck import rejected %d card(s)", len(rejected))
    return deck, rejected
