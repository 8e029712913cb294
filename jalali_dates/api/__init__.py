"""Server-side helpers exposed by the Jalali dates package."""

from . import converter, dates, datetimes, digits, language, validators

__all__ = [
    "converter",
    "dates",
    "datetimes",
    "digits",
    "language",
    "validators",
]
