"""
Per-format banlists and copy limits.

A banlist maps card names to a status. Names absent from the list are
unlimited (3 copies).
"""

from dataclasses import dataclass, field
from enum import Enum


class BanlistStatus(str, Enum):
    """Banlist status of a card in a format."""

    FORBIDDEN = "forbidden"
    LIMITED = "limited"
    SEMI_LIMITED = "semi-limited"
    UNLIMITED = "unlimited"

    @property
    def max_copies(self) -> int:
        """Maximum copies allowed across Main, Extra and Side."""
        return _MAX_COPIES[self]


_MAX_COPIES: dict[BanlistStatus, int] = {
    BanlistStatus.FORBIDDEN: 0,
    BanlistStatus.LIMITED: 1,
    BanlistStatus.SEMI_LIMITED: 2,
    BanlistStatus.UNLIMITED: 3,
}


@dataclass(frozen=True)
class Banlist:
    """
    Copy limits for one format.

    Attributes:
        format_name: Format the list applies to (e.g., "TCG")
        statuses: Card name -> status for every restricted card
    """

    format_name: str
    statuses: dict[str, BanlistStatus] = field(default_factory=dict)

    def status_of(self, card_name: str) -> BanlistStatus:
        """Status of a card; unlisted cards are unlimited."""
        return self.statuses.get(card_name, BanlistStatus.UNLIMITED)

    def max_copies(self, card_name: str) -> int:
        """Maximum copies of a card allowed in a deck."""
        return self.status_of(card_name).max_copies


def build_banlist(
    format_name: str,
    forbidden: list[str] | None = None,
    limited: list[str] | None = None,
    semi_limited: list[str] | None = None,
) -> Banlist:
    """
    Build a banlist from per-status name lists.

    A name appearing on several lists keeps the most restrictive status.
    """
    statuses: dict[str, BanlistStatus] = {}
    for name in semi_limited or []:
        statuses[name] = BanlistStatus.SEMI_LIMITED
    for name in limited or []:
        statuses[name] = BanlistStatus.LIMITED
    for name in forbidden or []:
        statuses[name] = BanlistStatus.FORBIDDEN
    return Banlist(format_name=format_name, statuses=statuses)


BANLISTS: dict[str, Banlist] = {
    "TCG": build_banlist(
        "TCG",
        forbidden=[
            "Pot of Greed",
            "Graceful Charity",
            "Delinquent Duo",
            "The Forceful Sentry",
            "Confiscation",
            "Last Will",
            "Painful Choice",
        ],
        limited=[
            "Raigeki",
            "Dark Hole",
            "Monster Reborn",
            "Change of Heart",
            "Imperial Order",
            "Mystical Space Typhoon",
        ],
        semi_limited=["Mystical Space Typhoon", "Mirror Force"],
    ),
    "OCG": build_banlist(
        "OCG",
        forbidden=["Pot of Greed", "Graceful Charity", "Delinquent Duo"],
        limited=["Raigeki", "Dark Hole", "Monster Reborn"],
        semi_limited=["Mirror Force"],
    ),
    "Master Duel": build_banlist(
        "Master Duel",
        forbidden=["Pot of Greed", "Graceful Charity"],
        limited=["Raigeki", "Dark Hole"],
        semi_limited=["Mirror Force"],
    ),
    "No Banlist": build_banlist("No Banlist"),
}

DEFAULT_FORMAT = "TCG"


def get_banlist(format_name: str) -> Banlist:
    """
    Get a built-in banlist by format name.

    Raises:
        KeyError: If the format is unknown
    """
    return BANLISTS[format_name]
