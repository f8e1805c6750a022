"""
Failure envelope: typed outcomes instead of faults.

The probability engine never raises. Everything that can go wrong around
it is reported as a value:

- Success: Operation completed
- Refusal: A constraint prevented the operation (banlist, zone rules)
- KnownFailure: The system knows exactly why the operation failed

Host layers (importers, share-link decoding, CLI) raise KnownError
subclasses and convert them with ``to_outcome()``.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Deck constraint violations
    FORMAT_ILLEGAL = "format_illegal"
    ZONE_MISMATCH = "zone_mismatch"
    ZONE_FULL = "zone_full"

    # Boundary failures
    DECODE_FAILED = "decode_failed"
    INVALID_FILE = "invalid_file"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class Outcome(BaseModel, Generic[T]):
    """
    Result envelope for operations that may be refused.

    Every mutation of a deck returns one of these. A non-success outcome
    guarantees the target was left unchanged.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Result data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @property
    def ok(self) -> bool:
        """True if the operation succeeded."""
        return self.outcome == OutcomeType.SUCCESS

    @classmethod
    def success(cls, data: T) -> "Outcome[T]":
        """Create a success outcome."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "Outcome[Any]":
        """
        Create a refusal outcome.

        Use when a constraint prevented the operation.
        Example: adding a forbidden card.
        """
        return cls(
            outcome=OutcomeType.REFUSAL,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "Outcome[Any]":
        """
        Create a known failure outcome.

        Use when the system knows exactly why the operation failed.
        Example: removing an entry that is not in the deck.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_outcome(self) -> Outcome[Any]:
        """Convert to an Outcome."""
        return Outcome.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CardNotFoundError(KnownError):
    """Raised when a catalog id is required but unknown."""

    def __init__(self, card_id: int):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card {card_id} is not in the card database",
            suggestion="Refresh the card database or use a custom card.",
        )
