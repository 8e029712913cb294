"""Gregorian ↔ Jalali conversion helpers.

Both directions use exact integer arithmetic anchored at Gregorian
1600-01-01 / Jalali 979-01-01 (the two day counters differ by 79 days).
Python's floor division keeps the formulas valid for years before the
anchor, so the whole proleptic range starting at Jalali year 1 round-trips.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Tuple, Union

__all__ = [
    "JalaliDate",
    "coerce_gregorian",
    "coerce_jalali",
    "gregorian_month_length",
    "gregorian_to_jalali",
    "is_gregorian_leap",
    "is_jalali_leap",
    "is_valid_gregorian_date",
    "is_valid_jalali_date",
    "jalali_month_length",
    "jalali_to_gregorian",
]

_GREGORIAN_MONTH_LENGTHS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
_JALALI_MONTH_LENGTHS = [31, 31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 29]

_GREGORIAN_EPOCH_YEAR = 1600
_JALALI_EPOCH_YEAR = 979
_EPOCH_OFFSET = 79

Triple = Tuple[int, int, int]


@dataclass(frozen=True)
class JalaliDate:
    """Immutable representation of a Jalali (Persian) calendar date."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if self.year < 1:
            raise ValueError("year must be positive for Jalali calendar")
        if not (1 <= self.month <= 12):
            raise ValueError("month must be in 1..12 for Jalali calendar")
        max_day = jalali_month_length(self.year, self.month)
        if not (1 <= self.day <= max_day):
            raise ValueError(f"day must be in 1..{max_day} for month {self.month}")

    def isoformat(self, sep: str = "-") -> str:
        return f"{self.year:04d}{sep}{self.month:02d}{sep}{self.day:02d}"

    def to_gregorian(self) -> date:
        return jalali_to_gregorian((self.year, self.month, self.day))

    def weekday(self) -> int:
        """Day of the week with Monday as 0, as :meth:`datetime.date.weekday`."""

        return self.to_gregorian().weekday()


def is_gregorian_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def gregorian_month_length(year: int, month: int) -> int:
    if not (1 <= month <= 12):
        return 0
    if month == 2 and is_gregorian_leap(year):
        return 29
    return _GREGORIAN_MONTH_LENGTHS[month - 1]


def is_jalali_leap(year: int) -> bool:
    year_length = _jalali_day_number(year + 1, 1, 1) - _jalali_day_number(year, 1, 1)
    return year_length == 366


def jalali_month_length(year: int, month: int) -> int:
    if not (1 <= month <= 12):
        return 0
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_jalali_leap(year) else 29


def is_valid_jalali_date(year: int, month: int, day: int) -> bool:
    if year < 1:
        return False
    return 1 <= day <= jalali_month_length(year, month)


def is_valid_gregorian_date(year: int, month: int, day: int) -> bool:
    if year < 1:
        return False
    return 1 <= day <= gregorian_month_length(year, month)


def _split_date_string(value: str, calendar: str) -> Triple:
    tokens = value.strip().replace("/", "-").split("-")
    if len(tokens) != 3:
        raise ValueError(f"Unsupported {calendar} date string: {value!r}")
    return tuple(int(part) for part in tokens)  # type: ignore[return-value]


def coerce_gregorian(value: Union[str, date, datetime, Iterable[int]]) -> Triple:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.year, value.month, value.day
    if isinstance(value, str):
        return _split_date_string(value, "Gregorian")
    try:
        year, month, day = value  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise TypeError("Expected a date, string, or iterable of three integers") from exc
    return int(year), int(month), int(day)


def coerce_jalali(value: Union[str, JalaliDate, Iterable[int]]) -> Triple:
    if isinstance(value, JalaliDate):
        return value.year, value.month, value.day
    if isinstance(value, str):
        return _split_date_string(value, "Jalali")
    try:
        year, month, day = value  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise TypeError("Expected a JalaliDate, string, or iterable of three integers") from exc
    return int(year), int(month), int(day)


def gregorian_to_jalali(value: Union[str, date, datetime, Iterable[int]]) -> JalaliDate:
    """Convert a Gregorian date to a :class:`JalaliDate`.

    Dates before 0622-03-21 (Jalali 0001/01/01) raise ``ValueError`` since
    they have no positive Jalali year. The integer core still maps them to
    year 0 and back; see
    ``tests/test_converter.py::test_every_gregorian_date_roundtrips_and_advances_by_one_day``.
    """

    gy, gm, gd = coerce_gregorian(value)
    if not is_valid_gregorian_date(gy, gm, gd):
        raise ValueError(f"Invalid Gregorian date: {gy:04d}-{gm:02d}-{gd:02d}")
    return JalaliDate(*_gregorian_to_jalali(gy, gm, gd))


def jalali_to_gregorian(value: Union[str, JalaliDate, Iterable[int]]) -> date:
    jy, jm, jd = coerce_jalali(value)
    if not is_valid_jalali_date(jy, jm, jd):
        raise ValueError(f"Invalid Jalali date: {jy:04d}/{jm:02d}/{jd:02d}")
    return date(*_jalali_to_gregorian(jy, jm, jd))


def _gregorian_day_number(gy: int, gm: int, gd: int) -> int:
    """Days elapsed since Gregorian 1600-01-01."""

    gy -= _GREGORIAN_EPOCH_YEAR
    gm -= 1
    gd -= 1

    g_day_no = 365 * gy + (gy + 3) // 4 - (gy + 99) // 100 + (gy + 399) // 400
    for i in range(gm):
        g_day_no += _GREGORIAN_MONTH_LENGTHS[i]
    if gm > 1 and is_gregorian_leap(gy + _GREGORIAN_EPOCH_YEAR):
        g_day_no += 1
    return g_day_no + gd


def _jalali_day_number(jy: int, jm: int, jd: int) -> int:
    """Days elapsed since Jalali 979-01-01."""

    jy -= _JALALI_EPOCH_YEAR
    jm -= 1
    jd -= 1

    j_day_no = 365 * jy + jy // 33 * 8 + ((jy % 33) + 3) // 4
    for i in range(jm):
        j_day_no += _JALALI_MONTH_LENGTHS[i]
    return j_day_no + jd


def _gregorian_to_jalali(gy: int, gm: int, gd: int) -> Triple:
    j_day_no = _gregorian_day_number(gy, gm, gd) - _EPOCH_OFFSET

    # 33-year cycles of 12053 days, then 4-year groups starting with a leap year.
    jy = _JALALI_EPOCH_YEAR + 33 * (j_day_no // 12053)
    j_day_no %= 12053
    jy += 4 * (j_day_no // 1461)
    j_day_no %= 1461

    if j_day_no >= 366:
        jy += (j_day_no - 1) // 365
        j_day_no = (j_day_no - 1) % 365

    jm = 0
    while jm < 11 and j_day_no >= _JALALI_MONTH_LENGTHS[jm]:
        j_day_no -= _JALALI_MONTH_LENGTHS[jm]
        jm += 1

    return jy, jm + 1, j_day_no + 1


def _jalali_to_gregorian(jy: int, jm: int, jd: int) -> Triple:
    g_day_no = _jalali_day_number(jy, jm, jd) + _EPOCH_OFFSET

    gy = _GREGORIAN_EPOCH_YEAR + 400 * (g_day_no // 146097)
    g_day_no %= 146097

    leap = True
    if g_day_no >= 36525:
        g_day_no -= 1
        gy += 100 * (g_day_no // 36524)
        g_day_no %= 36524
        if g_day_no >= 365:
            g_day_no += 1
        else:
            leap = False

    gy += 4 * (g_day_no // 1461)
    g_day_no %= 1461

    if g_day_no >= 366:
        leap = False
        g_day_no -= 1
        gy += g_day_no // 365
        g_day_no %= 365

    gm = 0
    while gm < 11:
        month_length = _GREGORIAN_MONTH_LENGTHS[gm]
        if gm == 1 and leap:
            month_length += 1
        if g_day_no < month_length:
            break
        g_day_no -= month_length
        gm += 1

    return gy, gm + 1, g_day_no + 1
