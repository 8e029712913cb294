"""Hook implementations that integrate Jalali date rendering with Frappe."""
from __future__ import annotations

from .api import language


def boot_session(bootinfo):
    """Inject the resolved display locale into the boot payload."""

    context = language.get_locale_context()
    if isinstance(bootinfo, dict):
        bootinfo.setdefault("jalali_dates", context)
    else:  # ``bootinfo`` is typically a ``frappe._dict``
        setattr(bootinfo, "jalali_dates", context)
