"""Display-locale resolution for date rendering.

A request is rendered in the first locale found in this order: the locale
the caller asked for explicitly, the ``Accept-Language`` header, the
locale stored on the user, then the app locale. Only ``fa`` renders Jalali
dates; ``de`` is a UI locale the API serves as ``en``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

try:  # pragma: no cover - frappe is unavailable during tests
    import frappe  # type: ignore
except Exception:  # pragma: no cover - handled via in-process user store
    frappe = None  # type: ignore

__all__ = [
    "API_LOCALES",
    "DEFAULT_LOCALE",
    "JALALI_LOCALE",
    "LocaleSelection",
    "SUPPORTED_LOCALES",
    "get_locale_context",
    "get_locale_preference",
    "get_user_locale",
    "is_jalali_locale",
    "normalize_api_locale",
    "preferred_language",
    "resolve_locale",
    "set_locale_preference",
    "set_user_locale",
]

LocaleSource = Literal["request", "header", "user", "app"]

DEFAULT_LOCALE = "en"
JALALI_LOCALE = "fa"
SUPPORTED_LOCALES = ("fa", "en", "de")
API_LOCALES = ("fa", "en")

# User -> locale, used when no Frappe site is available.
_USER_LOCALES: Dict[str, str] = {}


@dataclass(frozen=True)
class LocaleSelection:
    """Resolved locale and the step of the resolution order that supplied it."""

    value: str
    source: LocaleSource


def _base_language(value: Optional[str]) -> Optional[str]:
    """``"fa-IR"``, ``"fa_IR"`` and ``"FA"`` all mean ``"fa"``; unknown tags give ``None``."""

    if not isinstance(value, str):
        return None
    base = value.strip().lower().replace("_", "-").split("-")[0]
    return base if base in SUPPORTED_LOCALES else None


def preferred_language(accept_language: Optional[str]) -> Optional[str]:
    """Pick the best API locale from an ``Accept-Language`` header.

    Entries are ranked by their ``q`` weight, ties keep header order.
    Returns ``None`` when the header names no locale the API serves.
    """

    if not accept_language:
        return None
    ranked = []
    for position, entry in enumerate(accept_language.split(",")):
        tag, _, params = entry.strip().partition(";")
        weight = 1.0
        if params.strip().startswith("q="):
            try:
                weight = float(params.strip()[2:])
            except ValueError:
                continue
        locale = _base_language(tag)
        if locale in API_LOCALES and weight > 0:
            ranked.append((-weight, position, locale))
    if not ranked:
        return None
    return min(ranked)[2]


def _session_user(user: Optional[str]) -> Optional[str]:
    if user or not frappe:
        return user
    session_user = getattr(getattr(frappe, "session", None), "user", None)
    return None if session_user == "Guest" else session_user


def _request_accept_language() -> Optional[str]:
    if frappe and getattr(frappe, "request", None) is not None:
        return frappe.get_request_header("Accept-Language")  # type: ignore[attr-defined]
    return None


def _app_locale() -> str:
    if frappe:
        return _base_language(getattr(getattr(frappe, "local", None), "lang", None)) or DEFAULT_LOCALE
    return DEFAULT_LOCALE


def get_user_locale(user: Optional[str] = None) -> Optional[str]:
    """Locale stored on the user's profile, if any."""

    user = _session_user(user)
    if not user:
        return None
    if frappe:
        return _base_language(frappe.db.get_value("User", user, "language"))  # type: ignore[attr-defined]
    return _USER_LOCALES.get(user)


def set_user_locale(locale: str, user: Optional[str] = None) -> LocaleSelection:
    """Store ``locale`` on the user's profile and return the new resolution."""

    selected = _base_language(locale)
    if not selected:
        raise ValueError("locale must be one of: {}".format(", ".join(SUPPORTED_LOCALES)))
    user = _session_user(user)
    if not user:
        raise ValueError("Cannot store a locale for an anonymous session")
    if frappe:
        frappe.db.set_value("User", user, "language", selected)  # type: ignore[attr-defined]
    else:
        _USER_LOCALES[user] = selected
    return resolve_locale(user=user)


def resolve_locale(
    locale: Optional[str] = None,
    user: Optional[str] = None,
    accept_language: Optional[str] = None,
) -> LocaleSelection:
    """Resolve the display locale: explicit, header, stored user locale, app locale.

    Inside Frappe the header is read from the current request when
    ``accept_language`` is not given.
    """

    requested = _base_language(locale)
    if requested:
        return LocaleSelection(requested, "request")

    if accept_language is None:
        accept_language = _request_accept_language()
    from_header = preferred_language(accept_language)
    if from_header:
        return LocaleSelection(from_header, "header")

    stored = get_user_locale(user)
    if stored:
        return LocaleSelection(stored, "user")

    return LocaleSelection(_app_locale(), "app")


def is_jalali_locale(locale: Optional[str] = None, user: Optional[str] = None) -> bool:
    """Return ``True`` if dates should be rendered in the Jalali calendar."""

    return resolve_locale(locale, user).value == JALALI_LOCALE


def normalize_api_locale(locale: Optional[str]) -> str:
    """Collapse a UI locale to one the API serves (``fa`` or ``en``)."""

    base = _base_language(locale)
    return base if base in API_LOCALES else DEFAULT_LOCALE


def get_locale_context(user: Optional[str] = None) -> Dict[str, object]:
    """Serialisable description of the resolved locale, for boot payloads."""

    resolved = resolve_locale(user=user)
    return {
        "locale": resolved.value,
        "api_locale": normalize_api_locale(resolved.value),
        "source": resolved.source,
        "is_jalali": resolved.value == JALALI_LOCALE,
        "user_locale": get_user_locale(user),
    }


def _api_method(func):  # pragma: no cover - exercised in Frappe environments
    """Expose ``func`` over Frappe's ``/api/method`` route when running in a site."""

    return frappe.whitelist()(func) if frappe else func  # type: ignore[attr-defined]


@_api_method
def get_locale_preference(locale: Optional[str] = None) -> Dict[str, object]:
    resolved = resolve_locale(locale)
    return {"locale": resolved.value, "source": resolved.source}


@_api_method
def set_locale_preference(locale: str) -> Dict[str, object]:
    resolved = set_user_locale(locale)
    return {"locale": resolved.value, "source": resolved.source}
