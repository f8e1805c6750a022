from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "OpeningOdds"
    debug: bool = False

    # Monte Carlo trial counts. Precision grows with sqrt(simulations),
    # latency grows linearly.
    default_simulations: int = 100_000
    max_simulations: int = 1_000_000

    default_deck_size: int = 40
    default_hand_size: int = 5

    # Catalog JSON (YGOPRODeck export). None means data/cardDatabase.json
    card_database_path: Path | None = None

    log_level: str = "INFO"


settings = Settings()


# =============================================================================
# DECK AND HAND LIMITS
# =============================================================================

MIN_DECK_SIZE = 1
MAX_DECK_SIZE = 100

MIN_HAND_SIZE = 1
MAX_HAND_SIZE = 20

# Zone capacities enforced by the deck model
MAX_MAIN_DECK = 60
MAX_EXTRA_DECK = 15
MAX_SIDE_DECK = 15

# Smallest main deck that counts as tournament legal
LEGAL_MAIN_DECK_MIN = 40

# Deck-import files larger than this are rejected before parsing
MAX_YDK_FILE_BYTES = 100 * 1024
