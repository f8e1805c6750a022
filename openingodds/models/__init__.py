from openingodds.models.banlist import (
    BANLISTS,
    DEFAULT_FORMAT,
    Banlist,
    BanlistStatus,
    build_banlist,
    get_banlist,
)
from openingodds.models.card import Card, CardCategory
from openingodds.models.combo import (
    CardPredicate,
    Combo,
    ComboErrorKind,
    ComboValidation,
    Label,
    LogicOperator,
    create_combo,
)
from openingodds.models.deck import Deck, DeckEntry, DeckSnapshot, DeckStatistics, DeckZone
from openingodds.models.failure import (
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    KnownError,
    Outcome,
    OutcomeType,
)
from openingodds.models.formula import (
    FormulaCardHeader,
    FormulaDisplay,
    FormulaLine,
    FormulaMetadata,
    FormulaType,
)
from openingodds.models.results import (
    CalculationResult,
    ComboResult,
    HandTrapEntry,
    MultiHandTrapResult,
    MultiStarterResult,
    StarterCard,
)
from openingodds.models.serialized import (
    SerializedCalc,
    SerializedCard,
    SerializedCombo,
    SerializedDeckZones,
    SerializedYdk,
    SerializedZoneCard,
)

__all__ = [
    "BANLISTS",
    "Banlist",
    "BanlistStatus",
    "CalculationResult",
    "Card",
    "CardCategory",
    "CardNotFoundError",
    "CardPredicate",
    "Combo",
    "ComboErrorKind",
    "ComboResult",
    "ComboValidation",
    "DEFAULT_FORMAT",
    "Deck",
    "DeckEntry",
    "DeckSnapshot",
    "DeckStatistics",
    "DeckZone",
    "FailureDetail",
    "FailureKind",
    "FormulaCardHeader",
    "FormulaDisplay",
    "FormulaLine",
    "FormulaMetadata",
    "FormulaType",
    "HandTrapEntry",
    "KnownError",
    "Label",
    "LogicOperator",
    "MultiHandTrapResult",
    "MultiStarterResult",
    "Outcome",
    "OutcomeType",
    "SerializedCalc",
    "SerializedCard",
    "SerializedCombo",
    "SerializedDeckZones",
    "SerializedYdk",
    "SerializedZoneCard",
    "StarterCard",
    "build_banlist",
    "create_combo",
    "get_banlist",
]
