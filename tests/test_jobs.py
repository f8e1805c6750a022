"""Tests for the calculation CLI."""

import json
from pathlib import Path

import pytest

from openingodds.jobs.calculate import load_calculation, load_snapshot, main, run_calculation
from openingodds.models.card import Card
from openingodds.models.combo import CardPredicate, Combo
from openingodds.models.deck import DeckSnapshot
from openingodds.models.failure import FailureKind, KnownError
from openingodds.models.serialized import SerializedCalc, SerializedYdk
from openingodds.services.card_database import CardCatalog
from openingodds.services.url_codec import share_url

YDK_CONTENT = (
    "#main\n"
    + "14558127\n" * 3
    + "97268402\n" * 3
    + "10045474\n" * 2
    + "#extra\n86066372\n!side\n"
)


@pytest.fixture
def calc() -> SerializedCalc:
    combos = [
        Combo(id=1, name="Ash", cards=[CardPredicate("Ash Blossom & Joyous Spring", 3, 1, 3)]),
        Combo(id=2, name="Pot", cards=[CardPredicate("pot of desires", 2, 1, 2)]),
    ]
    return SerializedCalc.from_state(40, 5, combos)


@pytest.fixture
def calc_file(calc: SerializedCalc, tmp_path: Path) -> Path:
    path = tmp_path / "calc.json"
    path.write_text(calc.model_dump_json(by_alias=True), encoding="utf-8")
    return path


@pytest.fixture
def ydk_file(tmp_path: Path) -> Path:
    path = tmp_path / "deck.ydk"
    path.write_text(YDK_CONTENT, encoding="utf-8")
    return path


class TestLoadCalculation:
    def test_from_file(self, calc: SerializedCalc, calc_file: Path) -> None:
        assert load_calculation(path=calc_file) == calc

    def test_from_link(self, calc: SerializedCalc) -> None:
        assert load_calculation(link=share_url(calc, "https://odds.example/")) == calc

    def test_bad_link(self) -> None:
        with pytest.raises(KnownError) as exc_info:
            load_calculation(link="https://odds.example/#calc=%%%")
        assert exc_info.value.kind == FailureKind.DECODE_FAILED

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(KnownError) as exc_info:
            load_calculation(path=tmp_path / "missing.json")
        assert exc_info.value.kind == FailureKind.DECODE_FAILED

    def test_nothing_given(self) -> None:
        with pytest.raises(KnownError) as exc_info:
            load_calculation()
        assert exc_info.value.kind == FailureKind.MISSING_REQUIRED


class TestLoadSnapshot:
    def test_no_deck(self, calc: SerializedCalc) -> None:
        assert load_snapshot(calc, None, None, "TCG") is None

    def test_deck_file(self, calc: SerializedCalc, catalog: CardCatalog, ydk_file: Path) -> None:
        snapshot = load_snapshot(calc, catalog, ydk_file, "TCG")

        assert snapshot is not None
        assert snapshot.main_size == 8
        assert len(snapshot.extra) == 1

    def test_embedded_deck_file(self, catalog: CardCatalog) -> None:
        ydk = SerializedYdk(name="deck.ydk", content=YDK_CONTENT)
        calc = SerializedCalc.from_state(40, 5, [], ydk=ydk)

        snapshot = load_snapshot(calc, catalog, None, "TCG")

        assert snapshot is not None
        assert snapshot.main_size == 8

    def test_embedded_zones(self, filler_card: Card) -> None:
        calc = SerializedCalc.from_state(40, 5, [], deck=DeckSnapshot(main=(filler_card,) * 2))

        snapshot = load_snapshot(calc, None, None, "TCG")

        assert snapshot is not None
        assert [card.name for card in snapshot.main] == [filler_card.name] * 2


class TestRunCalculation:
    def test_payload(self, calc: SerializedCalc) -> None:
        payload = run_calculation(calc, simulations=500, seed=1)

        assert payload["simulations"] == 500
        assert len(payload["results"]["individual"]) == 2
        assert payload["results"]["combined"] is not None
        assert len(payload["formulas"]) == 2
        assert len(payload["preview_hand"]) == 5
        assert "any_hand_trap" not in payload
        json.dumps(payload)

    def test_catalog_resolves_names(self, calc: SerializedCalc, catalog: CardCatalog) -> None:
        payload = run_calculation(calc, catalog=catalog, simulations=200, seed=2)

        cards = payload["results"]["individual"][1]["cards"]
        assert cards[0]["name"] == "Pot of Desires"
        assert cards[0]["catalog_id"] == 35261759
        assert cards[0]["is_custom"] is False

    def test_with_deck(self, calc: SerializedCalc, catalog: CardCatalog, ydk_file: Path) -> None:
        deck = load_snapshot(calc, catalog, ydk_file, "TCG")

        payload = run_calculation(calc, deck=deck, catalog=catalog, simulations=200, seed=3)

        assert 0 < payload["any_hand_trap"] <= 100
        assert payload["results"]["multi_hand_trap"]["unique_hand_traps"] == 3

    def test_seeded_runs_repeat(self, calc: SerializedCalc) -> None:
        assert run_calculation(calc, simulations=300, seed=4) == run_calculation(
            calc, simulations=300, seed=4
        )


class TestMain:
    def test_file(self, calc_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["--file", str(calc_file), "--seed", "1", "--simulations", "500"])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["deck_size"] == 40
        assert payload["title"]

    def test_link(self, calc: SerializedCalc, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["--link", share_url(calc), "--seed", "2", "--simulations", "200"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["hand_size"] == 5

    def test_deck_file(
        self,
        calc_file: Path,
        card_db_file: Path,
        ydk_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = main(
            [
                "--file",
                str(calc_file),
                "--ydk",
                str(ydk_file),
                "--card-db",
                str(card_db_file),
                "--simulations",
                "200",
            ]
        )

        assert exit_code == 0
        assert "any_hand_trap" in json.loads(capsys.readouterr().out)

    def test_undecodable_deck_file_fails(
        self,
        calc_file: Path,
        card_db_file: Path,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A deck file that is not UTF-8 is reported as a deck file problem."""
        deck_path = tmp_path / "broken.ydk"
        deck_path.write_bytes(b"#main\n\xff\xfe\n")

        exit_code = main(
            ["--file", str(calc_file), "--ydk", str(deck_path), "--card-db", str(card_db_file)]
        )

        assert exit_code == 1
        assert "not a text file" in caplog.text
        assert "Failed to load card database" not in caplog.text

    def test_bad_link_fails(self) -> None:
        assert main(["--link", "not-a-calculation"]) == 1

    def test_missing_card_database_fails(self, calc_file: Path, tmp_path: Path) -> None:
        assert main(["--file", str(calc_file), "--card-db", str(tmp_path / "missing.json")]) == 1

    def test_source_is_required(self) -> None:
        with pytest.raises(SystemExit):
            main([])
