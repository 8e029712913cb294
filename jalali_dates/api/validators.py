"""Input validators for Iranian identity and banking fields.

All validators accept Persian digits and are purely syntactic/checksum
based; none of them touch a database or remote registry.
"""
from __future__ import annotations

import re
from typing import Optional

from .dates import normalize_jalali_input
from .digits import to_latin_digits
from .language import is_jalali_locale

__all__ = [
    "is_valid_birth_date_format",
    "is_valid_iban",
    "is_valid_iranian_id_number",
]

_JALALI_SHAPE = re.compile(r"^\d{4}/\d{2}/\d{2}$", re.ASCII)
_GREGORIAN_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_NATIONAL_ID_SHAPE = re.compile(r"^(\d{8,10}|\d{1,3}-\d{6}-\d)$", re.ASCII)
_IBAN_SHAPE = re.compile(r"^IR\d{24}$", re.ASCII)


def is_valid_birth_date_format(value: Optional[str], locale: Optional[str] = None) -> bool:
    """Check the shape of a birth date for the locale without parsing it.

    Blank values are valid (the field is optional).
    """

    if not value or not value.strip():
        return True
    latin = to_latin_digits(value)
    if is_jalali_locale(locale):
        return bool(_JALALI_SHAPE.match(normalize_jalali_input(latin)))
    return bool(_GREGORIAN_SHAPE.match(latin.split()[0]))


def is_valid_iranian_id_number(value: Optional[str]) -> bool:
    """Validate an Iranian national ID (code meli) checksum."""

    raw = to_latin_digits(value or "").strip()
    if not _NATIONAL_ID_SHAPE.match(raw):
        return False

    code = re.sub(r"\D+", "", raw).zfill(10)
    if len(code) != 10 or len(set(code)) == 1:
        return False

    digits = [int(char) for char in code]
    total = sum(digit * (10 - position) for position, digit in enumerate(digits[:9]))
    remainder = total % 11
    check_digit = digits[9]
    if remainder < 2:
        return check_digit == remainder
    return check_digit == 11 - remainder


def is_valid_iban(value: Optional[str]) -> bool:
    """Validate an Iranian IBAN (Sheba) with the ISO 13616 mod-97 checksum."""

    raw = to_latin_digits(value or "").strip().upper()
    iban = re.sub(r"\s+", "", raw)
    if not _IBAN_SHAPE.match(iban):
        return False

    rearranged = iban[4:] + iban[:4]
    numeric = "".join(char if char.isdigit() else str(ord(char) - 55) for char in rearranged)
    return int(numeric) % 97 == 1
