"""
Expression trees over hand counts.

A combo compiles to a left-leaning AND chain of range predicates
``min <= count[label] <= max``. Labels are columns of a hand count vector;
a LabelTable assigns columns by first appearance and records how many
copies of each label the simulated deck holds.
"""

from dataclasses import dataclass, field
from typing import Protocol

from openingodds.models.combo import CardPredicate, Combo, Label


class Expression(Protocol):
    """Boolean expression over a hand count vector."""

    def evaluate(self, counts: list[int]) -> bool: ...


@dataclass(frozen=True, slots=True)
class PredicateNode:
    """Leaf: the hand holds between min_copies and max_copies of a column."""

    column: int
    min_copies: int
    max_copies: int

    def evaluate(self, counts: list[int]) -> bool:
        count = counts[self.column]
        return self.min_copies <= count <= self.max_copies


@dataclass(frozen=True, slots=True)
class AndNode:
    """Conjunction of two subtrees."""

    left: Expression
    right: Expression

    def evaluate(self, counts: list[int]) -> bool:
        return self.left.evaluate(counts) and self.right.evaluate(counts)


@dataclass
class LabelTable:
    """
    Column assignment for distinct card labels.

    Attributes:
        columns: Label -> column index, in first-appearance order
        copies: Copies in the simulated deck per column (max requested)
    """

    columns: dict[Label, int] = field(default_factory=dict)
    copies: list[int] = field(default_factory=list)

    def add(self, label: Label, copies_in_deck: int) -> int:
        """Register a label, keeping the largest copy count seen. Returns its column."""
        column = self.columns.get(label)
        if column is None:
            column = len(self.copies)
            self.columns[label] = column
            self.copies.append(copies_in_deck)
        else:
            self.copies[column] = max(self.copies[column], copies_in_deck)
        return column

    def add_combo(self, combo: Combo) -> None:
        """Register every card slot of a combo."""
        for card in combo.cards:
            self.add(card.label, card.copies_in_deck)

    def column_of(self, label: Label) -> int:
        return self.columns[label]

    def __len__(self) -> int:
        return len(self.copies)

    @classmethod
    def for_combos(cls, combos: list[Combo]) -> "LabelTable":
        """Shared table over the union of labels of several combos."""
        table = cls()
        for combo in combos:
            table.add_combo(combo)
        return table


def build_expression_tree(cards: list[CardPredicate], table: LabelTable) -> Expression | None:
    """
    Compile card slots into an AND chain over the table's columns.

    Every slot must already be registered in ``table``. Returns None for
    an empty slot list. Legacy per-card OR markers are ignored: a combo
    succeeds only when all of its cards are satisfied.

    Example: A AND B AND C  ->  AndNode(AndNode(A, B), C)
    """
    if not cards:
        return None

    root: Expression = _leaf(cards[0], table)
    for card in cards[1:]:
        root = AndNode(root, _leaf(card, table))
    return root


def _leaf(card: CardPredicate, table: LabelTable) -> PredicateNode:
    return PredicateNode(table.column_of(card.label), card.min_in_hand, card.max_in_hand)
