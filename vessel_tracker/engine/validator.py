"""Identifier Validator - strict IMO number check

An IMO number here is exactly 7 ASCII digits. No numeric parsing is done:
"0000001" is valid, "+123456", "1234567.0" and non-ASCII digits are not.
"""

from dataclasses import dataclass
from typing import Optional

from vessel_tracker.core.exceptions import InvalidImoException

IMO_LENGTH = 7
_ASCII_DIGITS = frozenset("0123456789")

REASON_REQUIRED = "IMO parameter is required"
REASON_FORMAT = "IMO must be exactly 7 digits"


@dataclass(frozen=True)
class VesselIdentifier:
    """Validated IMO number"""

    value: str

    def __str__(self) -> str:
        return self.value


def validate_imo(raw: Optional[str]) -> VesselIdentifier:
    """Validate a raw identifier

    Args:
        raw: value received at the request boundary

    Returns:
        VesselIdentifier: the validated identifier

    Raises:
        InvalidImoException: missing, wrong length or non-digit characters
    """
    if raw is None or raw == "":
        raise InvalidImoException(raw, REASON_REQUIRED)

    if not isinstance(raw, str) or len(raw) != IMO_LENGTH:
        raise InvalidImoException(str(raw), REASON_FORMAT)

    if not all(ch in _ASCII_DIGITS for ch in raw):
        raise InvalidImoException(raw, REASON_FORMAT)

    return VesselIdentifier(raw)

