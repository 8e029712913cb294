"""Latin ⇄ Persian digit mapping."""
from __future__ import annotations

from typing import Optional

__all__ = [
    "LATIN_DIGITS",
    "PERSIAN_DIGITS",
    "to_latin_digits",
    "to_persian_digits",
]

LATIN_DIGITS = "0123456789"
PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

_TO_LATIN = str.maketrans(PERSIAN_DIGITS + _ARABIC_INDIC_DIGITS, LATIN_DIGITS * 2)
_TO_PERSIAN = str.maketrans(LATIN_DIGITS, PERSIAN_DIGITS)


def to_latin_digits(value: Optional[str]) -> Optional[str]:
    """Replace Persian (and Arabic-Indic) digits with ASCII digits."""

    if value is None:
        return None
    return value.translate(_TO_LATIN)


def to_persian_digits(value: Optional[str]) -> Optional[str]:
    """Replace ASCII digits with Persian digits, for display only."""

    if value is None:
        return None
    return value.translate(_TO_PERSIAN)
