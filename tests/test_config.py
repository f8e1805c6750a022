import pytest

from openingodds.config import MAX_YDK_FILE_BYTES, Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEFAULT_SIMULATIONS", raising=False)

        config = Settings(_env_file=None)

        assert config.default_simulations == 100_000
        assert config.max_simulations >= config.default_simulations
        assert config.default_deck_size == 40
        assert config.default_hand_size == 5
        assert config.card_database_path is None

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
        monkeypatch.setenv("DEFAULT_SIMULATIONS", "5000")
        monkeypatch.setenv("CARD_DATABASE_PATH", str(tmp_path / "cards.json"))

        config = Settings(_env_file=None)

        assert config.default_simulations == 5000
        assert config.card_database_path == tmp_path / "cards.json"

    def test_file_size_limit(self) -> None:
        assert MAX_YDK_FILE_BYTES == 102_400
