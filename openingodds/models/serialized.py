"""
Serialized calculation state at the share-link boundary.

Wire keys are compact (``d``, ``h``, ``c`` ...) so that encoded links stay
short; Python attribute names are descriptive. Missing required fields
fail validation, unknown fields are ignored, and documented defaults are
filled in (``logic`` = AND, ``testHand`` = true).
"""

from pydantic import BaseModel, ConfigDict, Field

from openingodds.models.card import Card, CardCategory
from openingodds.models.combo import CardPredicate, Combo, LogicOperator
from openingodds.models.deck import DeckSnapshot, DeckZone


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SerializedCard(_WireModel):
    """One combo card slot on the wire."""

    name: str = Field(default="", alias="s")
    catalog_id: int | None = Field(default=None, alias="cId")
    is_custom: bool = Field(default=False, alias="iC")
    copies_in_deck: int = Field(..., alias="deck")
    min_in_hand: int = Field(..., alias="min")
    max_in_hand: int = Field(..., alias="max")
    logic: LogicOperator = Field(default=LogicOperator.AND, alias="logic")

    def to_predicate(self) -> CardPredicate:
        """Convert to the engine's card predicate."""
        return CardPredicate(
            name=self.name,
            copies_in_deck=self.copies_in_deck,
            min_in_hand=self.min_in_hand,
            max_in_hand=self.max_in_hand,
            catalog_id=self.catalog_id,
            is_custom=self.is_custom,
            logic=self.logic,
        )

    @classmethod
    def from_predicate(cls, card: CardPredicate) -> "SerializedCard":
        """Build from an engine card predicate."""
        return cls(
            name=card.name,
            catalog_id=card.catalog_id,
            is_custom=card.is_custom,
            copies_in_deck=card.copies_in_deck,
            min_in_hand=card.min_in_hand,
            max_in_hand=card.max_in_hand,
            logic=card.logic,
        )


class SerializedCombo(_WireModel):
    """One combo on the wire."""

    id: str | int = Field(..., alias="i")
    name: str = Field(..., alias="n")
    cards: list[SerializedCard] = Field(..., alias="cards")

    def to_combo(self) -> Combo:
        """Convert to the engine's combo."""
        return Combo(id=self.id, name=self.name, cards=[c.to_predicate() for c in self.cards])

    @classmethod
    def from_combo(cls, combo: Combo) -> "SerializedCombo":
        """Build from an engine combo."""
        return cls(
            id=combo.id,
            name=combo.name,
            cards=[SerializedCard.from_predicate(card) for card in combo.cards],
        )


class SerializedZoneCard(_WireModel):
    """A deck-builder card on the wire."""

    name: str = Field(..., alias="n")
    catalog_id: int | None = Field(default=None, alias="cId")
    category: CardCategory = Field(default=CardCategory.MONSTER, alias="t")
    level: int | None = Field(default=None, alias="l")
    attribute: str | None = Field(default=None, alias="a")

    def to_card(self, zone: DeckZone) -> Card:
        """Rebuild a (text-less) card record. Cards without a passcode get id 0."""
        return Card(
            id=self.catalog_id or 0,
            name=self.name,
            category=self.category,
            is_extra_deck=zone == DeckZone.EXTRA,
            attribute=self.attribute,
            level=self.level,
        )

    @classmethod
    def from_card(cls, card: Card) -> "SerializedZoneCard":
        """Build from a card record."""
        return cls(
            name=card.name,
            catalog_id=card.id or None,
            category=card.category,
            level=card.level,
            attribute=card.attribute,
        )


class SerializedDeckZones(_WireModel):
    """Deck-builder zones on the wire."""

    main: list[SerializedZoneCard] = Field(default_factory=list)
    extra: list[SerializedZoneCard] = Field(default_factory=list)
    side: list[SerializedZoneCard] = Field(default_factory=list)

    def to_snapshot(self) -> DeckSnapshot:
        """Rebuild a deck snapshot."""
        return DeckSnapshot(
            main=tuple(card.to_card(DeckZone.MAIN) for card in self.main),
            extra=tuple(card.to_card(DeckZone.EXTRA) for card in self.extra),
            side=tuple(card.to_card(DeckZone.SIDE) for card in self.side),
        )

    @classmethod
    def from_snapshot(cls, snapshot: DeckSnapshot) -> "SerializedDeckZones":
        """Build from a deck snapshot."""
        return cls(
            main=[SerializedZoneCard.from_card(card) for card in snapshot.main],
            extra=[SerializedZoneCard.from_card(card) for card in snapshot.extra],
            side=[SerializedZoneCard.from_card(card) for card in snapshot.side],
        )


class SerializedYdk(_WireModel):
    """An attached deck-import file (opaque text)."""

    name: str
    content: str


class SerializedCalc(_WireModel):
    """Complete shareable calculation state."""

    deck_size: int = Field(..., ge=1, alias="d")
    hand_size: int = Field(..., ge=1, alias="h")
    combos: list[SerializedCombo] = Field(..., alias="c")
    test_hand_from_decklist: bool = Field(default=True, alias="testHand")
    ydk: SerializedYdk | None = Field(default=None, alias="ydk")
    deck_zones: SerializedDeckZones | None = Field(default=None, alias="z")

    def to_combos(self) -> list[Combo]:
        """Combos in engine form."""
        return [combo.to_combo() for combo in self.combos]

    @classmethod
    def from_state(
        cls,
        deck_size: int,
        hand_size: int,
        combos: list[Combo],
        ydk: SerializedYdk | None = None,
        test_hand_from_decklist: bool = True,
        deck: DeckSnapshot | None = None,
    ) -> "SerializedCalc":
        """Capture calculation state for sharing."""
        return cls(
            deck_size=deck_size,
            hand_size=hand_size,
            combos=[SerializedCombo.from_combo(combo) for combo in combos],
            test_hand_from_decklist=test_hand_from_decklist,
            ydk=ydk,
            deck_zones=SerializedDeckZones.from_snapshot(deck) if deck is not None else None,
        )
