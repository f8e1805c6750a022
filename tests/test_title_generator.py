from openingodds.analysis.sampler import make_rng
from openingodds.models.combo import CardPredicate, Combo
from openingodds.models.results import ComboResult
from openingodds.services.title_generator import (
    FLAVOR_TEXTS,
    SUFFIXES,
    deck_flavor,
    generate_title,
    probability_emoji,
)


def split_title(title: str) -> tuple[str, str, str, str]:
    left, flavor = title.split(" | ")
    emoji, deck, suffix = left.split(" ")
    return emoji, deck, suffix, flavor


class TestTitleParts:
    def test_emoji_thresholds(self) -> None:
        assert probability_emoji(81) == "\U0001f525"
        assert probability_emoji(80) == "\u26a1"
        assert probability_emoji(61) == "\u26a1"
        assert probability_emoji(60) == "\U0001f3b2"
        assert probability_emoji(41) == "\U0001f3b2"
        assert probability_emoji(40) == "\U0001f480"

    def test_deck_flavor(self) -> None:
        assert deck_flavor(40) == "Standard"
        assert deck_flavor(60) == "Big Deck"
        assert deck_flavor(35) == "Compact"
        assert deck_flavor(50) == "Massive"


class TestGenerateTitle:
    def test_single_card_high_probability(self) -> None:
        combos = [Combo(id=1, name="C", cards=[CardPredicate("A", 3, 1, 3)])]

        title = generate_title(combos, 40, [ComboResult(1, 90.0)], make_rng(1))

        emoji, deck, suffix, flavor = split_title(title)
        assert emoji == "\U0001f525"
        assert deck == "Standard"
        assert suffix in SUFFIXES["single"]
        assert flavor in FLAVOR_TEXTS["high"]

    def test_pair_medium_probability(self) -> None:
        combos = [
            Combo(id=1, name="C", cards=[CardPredicate("A", 3, 1, 3), CardPredicate("B", 3, 1, 3)])
        ]

        title = generate_title(combos, 40, [ComboResult(1, 50.0)], make_rng(2))

        emoji, _, suffix, flavor = split_title(title)
        assert emoji == "\U0001f3b2"
        assert suffix in SUFFIXES["pair"]
        assert flavor in FLAVOR_TEXTS["medium"]

    def test_blank_names_are_not_counted(self) -> None:
        combos = [
            Combo(id=1, name="C", cards=[CardPredicate("A", 3, 1, 3), CardPredicate("", 3, 1, 3)]),
        ]

        title = generate_title(combos, 40, [ComboResult(1, 10.0)], make_rng(3))

        _, _, suffix, _ = split_title(title)

        assert suffix in SUFFIXES["single"]

    def test_average_over_results(self) -> None:
        combos = [
            Combo(id=1, name="C1", cards=[CardPredicate("A", 3, 1, 3)]),
            Combo(id=2, name="C2", cards=[CardPredicate("B", 3, 1, 3)]),
            Combo(id=3, name="C3", cards=[CardPredicate("C", 3, 1, 3)]),
        ]
        results = [ComboResult(1, 100.0), ComboResult(2, 20.0), ComboResult(3, 0.0)]

        emoji, _, suffix, flavor = split_title(generate_title(combos, 40, results, make_rng(4)))

        assert emoji == "\U0001f480"
        assert suffix in SUFFIXES["multi"]
        assert flavor in FLAVOR_TEXTS["low"]

    def test_no_results(self) -> None:
        emoji, _, _, flavor = split_title(generate_title([], 40, [], make_rng(5)))

        assert emoji == "\U0001f480"
        assert flavor in FLAVOR_TEXTS["low"]

    def test_seeded_titles_repeat(self) -> None:
        combos = [Combo(id=1, name="C", cards=[CardPredicate("A", 3, 1, 3)])]
        results = [ComboResult(1, 55.0)]

        assert generate_title(combos, 40, results, make_rng(6)) == generate_title(
            combos, 40, results, make_rng(6)
        )
