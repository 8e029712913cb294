"""Timestamp helpers for task scheduling forms.

Tasks are planned in Tehran wall-clock time while the API persists UTC
ISO-8601 timestamps. These helpers map between the two and hand date inputs
to the fail-soft formatters in :mod:`jalali_dates.api.dates`.
"""
from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from .dates import is_gregorian_format, normalize_gregorian, to_gregorian, to_jalali
from .digits import to_latin_digits
from .language import is_jalali_locale

try:  # pragma: no cover - frappe is unavailable during tests
    import frappe  # type: ignore
except Exception:  # pragma: no cover - handled via environment fallback
    frappe = None  # type: ignore

__all__ = [
    "BUSINESS_TIMEZONE",
    "business_timezone",
    "to_input_date",
    "to_input_time",
    "to_utc_iso",
]

BUSINESS_TIMEZONE = "Asia/Tehran"
_TIMEZONE_ENV = "JALALI_DATES_TIMEZONE"
_TIMEZONE_CONF_KEY = "jalali_timezone"

_GREGORIAN_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


def business_timezone() -> ZoneInfo:
    """Timezone task times are entered in: site config, then environment, then Tehran."""

    name = None
    if frappe:
        name = getattr(frappe, "conf", {}).get(_TIMEZONE_CONF_KEY)  # type: ignore[attr-defined]
    name = name or os.environ.get(_TIMEZONE_ENV) or BUSINESS_TIMEZONE
    return ZoneInfo(name)


def _to_business_datetime(iso: str) -> Optional[datetime]:
    try:
        parsed = date_parser.isoparse(to_latin_digits(iso.strip()))
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(business_timezone())


def to_input_date(iso: Optional[str], locale: Optional[str] = None) -> str:
    """Business-timezone date of ``iso``: Jalali ``YYYY/MM/DD`` for ``fa``, else ``YYYY-MM-DD``."""

    if not iso:
        return ""
    local = _to_business_datetime(iso)
    if local is None:
        return ""
    gregorian = local.date().isoformat()
    if is_jalali_locale(locale):
        return to_jalali(gregorian, locale)
    return gregorian


def to_input_time(iso: Optional[str]) -> str:
    """Business-timezone wall-clock time of ``iso`` as ``HH:MM``."""

    if not iso:
        return ""
    local = _to_business_datetime(iso)
    if local is None:
        return ""
    return local.strftime("%H:%M")


def to_utc_iso(
    date_value: Optional[str],
    time_value: Optional[str] = None,
    locale: Optional[str] = None,
) -> Optional[str]:
    """Combine date and time form values into the UTC timestamp the API stores.

    A missing time means midnight. Returns ``None`` when the date is missing
    or either value cannot be read.
    """

    raw_date = to_latin_digits((date_value or "").strip())
    if not raw_date:
        return None
    raw_time = to_latin_digits((time_value or "").strip()) or "00:00"

    # A YYYY-MM-DD value is already Gregorian, even when the form is in Persian.
    date_head = raw_date.split()[0]
    if is_gregorian_format(date_head):
        gregorian = date_head
    elif is_jalali_locale(locale):
        gregorian = to_gregorian(raw_date, locale)
    else:
        gregorian = normalize_gregorian(raw_date)

    date_match = _GREGORIAN_DATE.match(gregorian or "")
    time_match = _CLOCK_TIME.match(raw_time)
    if not date_match or not time_match:
        return None

    year, month, day = (int(part) for part in date_match.groups())
    hour, minute = (int(part) for part in time_match.groups())
    try:
        local = datetime(year, month, day, hour, minute, tzinfo=business_timezone())
    except ValueError:
        return None
    return local.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
