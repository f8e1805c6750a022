"""
Share-link codec.

A calculation is shared as ``<page>#calc=<base64 JSON>``, where the JSON
uses the compact wire keys of SerializedCalc. Decoding never produces
partial state: a link either yields a complete SerializedCalc or nothing.
"""

import base64
import binascii
import json
import logging
import re

from pydantic import ValidationError

from openingodds.models.failure import FailureKind, KnownError
from openingodds.models.serialized import SerializedCalc

logger = logging.getLogger(__name__)

CALC_FRAGMENT = "#calc="
_FRAGMENT_PATTERN = re.compile(r"#calc=(.+)")


def encode_calculation(calc: SerializedCalc) -> str:
    """Encode calculation state as base64 JSON with compact keys."""
    payload = calc.model_dump(mode="json", by_alias=True, exclude_none=True)
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def share_url(calc: SerializedCalc, base_url: str = "") -> str:
    """Full share link for a calculation."""
    return f"{base_url}{CALC_FRAGMENT}{encode_calculation(calc)}"


def decode_calculation_or_raise(encoded: str) -> SerializedCalc:
    """
    Decode calculation state.

    Raises:
        KnownError: DECODE_FAILED if the text is not base64, not JSON, or
            is missing required fields
    """
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise KnownError(
            kind=FailureKind.DECODE_FAILED,
            message="Share link is not a valid encoded calculation",
            detail=str(e),
        ) from e

    if not isinstance(data, dict):
        raise KnownError(
            kind=FailureKind.DECODE_FAILED,
            message="Share link does not contain a calculation",
        )

    try:
        return SerializedCalc.model_validate(data)
    except ValidationError as e:
        raise KnownError(
            kind=FailureKind.DECODE_FAILED,
            message="Share link is missing required calculation fields",
            detail=str(e),
            suggestion="Ask for a fresh link.",
        ) from e


def decode_calculation(encoded: str) -> SerializedCalc | None:
    """Decode calculation state, or None if the link is unusable."""
    try:
        return decode_calculation_or_raise(encoded)
    except KnownError as e:
        logger.warning("Failed to decode calculation: %s", e.message)
        return None


def extract_calc_fragment(url: str) -> str | None:
    """The encoded payload after ``#calc=``, or None."""
    match = _FRAGMENT_PATTERN.search(url)
    return match.group(1) if match else None


def decode_from_url(url: str) -> SerializedCalc | None:
    """Decode the calculation carried by a share link."""
    fragment = extract_calc_fragment(url)
    if fragment is None:
        return None
    return decode_calculation(fragment)
