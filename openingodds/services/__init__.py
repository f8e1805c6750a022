"""
OpeningOdds services.

Catalog access, deck import and export, share links, and hand previews.
"""

from openingodds.services.card_database import (
    CardCatalog,
    card_from_record,
    get_card_catalog,
    is_extra_deck_type,
    load_card_database,
)
from openingodds.services.hand_trap import (
    KNOWN_HAND_TRAPS,
    count_hand_traps,
    is_hand_trap,
    unique_hand_traps,
)
from openingodds.services.url_codec import (
    decode_calculation,
    decode_calculation_or_raise,
    decode_from_url,
    encode_calculation,
    extract_calc_fragment,
    share_url,
)
from openingodds.services.ydk_parser import (
    YdkFileError,
    YdkParseResult,
    export_ydk,
    load_deck,
    parse_ydk,
    read_ydk_file,
    validate_ydk_file,
)

__all__ = [
    "CardCatalog",
    "KNOWN_HAND_TRAPS",
    "YdkFileError",
    "YdkParseResult",
    "card_from_record",
    "count_hand_traps",
    "decode_calculation",
    "decode_calculation_or_raise",
    "decode_from_url",
    "encode_calculation",
    "export_ydk",
    "extract_calc_fragment",
    "get_card_catalog",
    "is_extra_deck_type",
    "is_hand_trap",
    "load_card_database",
    "load_deck",
    "parse_ydk",
    "read_ydk_file",
    "share_url",
    "unique_hand_traps",
    "validate_ydk_file",
]
