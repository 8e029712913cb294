"""Fail-soft date formatting for API responses, templates and form input.

Every public helper here is total: blank input gives ``None`` and any value
that cannot be converted is handed back untouched, so a malformed date never
breaks the page or payload it is rendered into.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple, Union

from dateutil import parser as date_parser

from .converter import (
    _gregorian_to_jalali,
    _jalali_to_gregorian,
    is_valid_gregorian_date,
    is_valid_jalali_date,
)
from .digits import to_latin_digits, to_persian_digits
from .language import _api_method, is_jalali_locale

__all__ = [
    "Conversion",
    "convert_to_gregorian",
    "convert_to_jalali",
    "is_gregorian_format",
    "is_jalali_format",
    "normalize_gregorian",
    "normalize_jalali_input",
    "to_gregorian",
    "to_jalali",
    "to_jalali_display",
]

logger = logging.getLogger(__name__)

DateInput = Union[str, date, datetime, None]

_JALALI_SHAPE = re.compile(r"^(\d{4})/(\d{2})/(\d{2})$", re.ASCII)
_GREGORIAN_SHAPE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_LOOSE_JALALI_SHAPE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$", re.ASCII)
# Lenient parsing only runs on text that starts with a full year-first date.
_GREGORIAN_HEAD = re.compile(r"^\d{4}[-/]\d{1,2}[-/]\d{1,2}(?=$|[\sT])", re.ASCII)


@dataclass(frozen=True)
class Conversion:
    """Outcome of a conversion attempt: a new value, or a reason to pass through."""

    value: Optional[str] = None
    reason: Optional[str] = None

    @property
    def converted(self) -> bool:
        return self.reason is None

    @classmethod
    def passthrough(cls, reason: str) -> "Conversion":
        return cls(reason=reason)

    def resolve(self, original: Optional[str]) -> Optional[str]:
        if self.converted:
            return self.value
        logger.debug("Leaving date %r unconverted: %s", original, self.reason)
        return original


def _is_blank(value: DateInput) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_text(value: DateInput) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _format_jalali(jy: int, jm: int, jd: int) -> str:
    return f"{jy:04d}/{jm:02d}/{jd:02d}"


def _format_gregorian(gy: int, gm: int, gd: int) -> str:
    return f"{gy:04d}-{gm:02d}-{gd:02d}"


def is_jalali_format(value: Optional[str]) -> bool:
    return bool(value) and _JALALI_SHAPE.match(value) is not None


def is_gregorian_format(value: Optional[str]) -> bool:
    return bool(value) and _GREGORIAN_SHAPE.match(value) is not None


def _parse_gregorian(value: DateInput) -> Optional[Tuple[int, int, int]]:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.year, value.month, value.day

    text = to_latin_digits(str(value)).strip()
    if not _GREGORIAN_HEAD.match(text):
        return None
    try:
        parsed = date_parser.parse(text, yearfirst=True, dayfirst=False)
    except (ValueError, OverflowError, TypeError):
        return None
    return parsed.year, parsed.month, parsed.day


def _gregorian_to_jalali_text(value: DateInput) -> Conversion:
    parsed = _parse_gregorian(value)
    if parsed is None:
        return Conversion.passthrough("not a recognisable Gregorian date")
    if not is_valid_gregorian_date(*parsed):
        return Conversion.passthrough("Gregorian date out of range")
    jy, jm, jd = _gregorian_to_jalali(*parsed)
    if jy < 1:
        return Conversion.passthrough("date precedes the Jalali epoch")
    return Conversion(_format_jalali(jy, jm, jd))


def _jalali_to_gregorian_text(value: str) -> Conversion:
    normalized = normalize_jalali_input(to_latin_digits(value))
    match = _JALALI_SHAPE.match(normalized)
    if not match:
        return Conversion.passthrough("not in YYYY/MM/DD shape")
    jy, jm, jd = (int(part) for part in match.groups())
    if not is_valid_jalali_date(jy, jm, jd):
        return Conversion.passthrough("Jalali month or day out of range")
    return Conversion(_format_gregorian(*_jalali_to_gregorian(jy, jm, jd)))


def to_jalali(value: DateInput, locale: Optional[str] = None) -> Optional[str]:
    """Render a Gregorian date as Jalali ``YYYY/MM/DD`` for the Jalali locale.

    Other locales get the value back unchanged (date objects as ISO strings).
    """

    if _is_blank(value):
        return None
    if not is_jalali_locale(locale):
        return _as_text(value) if isinstance(value, date) else value
    original = _as_text(value) if isinstance(value, date) else value
    return _gregorian_to_jalali_text(value).resolve(original)


def to_jalali_display(value: DateInput, locale: Optional[str] = None) -> Optional[str]:
    """Like :func:`to_jalali` but with Persian digits, for rendering only."""

    if _is_blank(value):
        return None
    if not is_jalali_locale(locale):
        return _as_text(value) if isinstance(value, date) else value
    original = _as_text(value) if isinstance(value, date) else value
    conversion = _gregorian_to_jalali_text(value)
    if conversion.converted:
        return to_persian_digits(conversion.value)
    return conversion.resolve(original)


def to_gregorian(value: DateInput, locale: Optional[str] = None) -> Optional[str]:
    """Turn Jalali form input into the Gregorian ``YYYY-MM-DD`` the API stores.

    Accepts Persian digits, ``-`` or ``/`` separators, single-digit months and
    days and a trailing time component. Date objects are already Gregorian.
    """

    if _is_blank(value):
        return None
    if isinstance(value, date):
        return _as_text(value)
    if not is_jalali_locale(locale):
        return value
    return _jalali_to_gregorian_text(str(value)).resolve(value)


def normalize_gregorian(value: DateInput) -> Optional[str]:
    """Return only the date portion of a Gregorian date or timestamp."""

    if _is_blank(value):
        return None
    parsed = _parse_gregorian(value)
    if parsed is not None and is_valid_gregorian_date(*parsed):
        return _format_gregorian(*parsed)
    tokens = str(value).split()
    return tokens[0] if tokens else str(value)


def normalize_jalali_input(value: Optional[str]) -> Optional[str]:
    """Trim, drop any time suffix, use ``/`` separators and zero-pad month/day."""

    if value is None:
        return None
    tokens = value.split()
    normalized = (tokens[0] if tokens else "").replace("-", "/")
    match = _LOOSE_JALALI_SHAPE.match(normalized)
    if not match:
        return normalized
    year, month, day = match.groups()
    return f"{year}/{int(month):02d}/{int(day):02d}"


def convert_to_jalali(value: Optional[str] = None, locale: Optional[str] = None, display: bool = False):
    """API endpoint wrapper around :func:`to_jalali` / :func:`to_jalali_display`."""

    if display and str(display).lower() not in {"0", "false"}:
        return to_jalali_display(value, locale)
    return to_jalali(value, locale)


def convert_to_gregorian(value: Optional[str] = None, locale: Optional[str] = None):
    """API endpoint wrapper around :func:`to_gregorian`."""

    return to_gregorian(value, locale)


convert_to_jalali = _api_method(convert_to_jalali)
convert_to_gregorian = _api_method(convert_to_gregorian)
