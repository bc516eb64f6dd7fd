"""Date and time helpers for shift display.

Shift dates travel as ``YYYY-MM-DD`` strings and times as ``HH:MM``. The
display helpers below render them for a locale and parse the rendered text
back, so a submitted value survives a display round-trip unchanged.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Tuple

from ..core.constants import DEFAULT_LOCALE, SUPPORTED_LOCALES

_MONTHS = {
    "es-AR": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "en-US": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

_ES_DATE = re.compile(r"^(\d{1,2}) de ([a-záéíóú]+) de (\d{4})$", re.IGNORECASE)
_EN_DATE = re.compile(r"^([A-Za-z]+) (\d{1,2}), (\d{4})$")
_EN_TIME = re.compile(r"^(\d{1,2}):(\d{2}) (AM|PM)$", re.IGNORECASE)


def resolve_locale(locale: str | None) -> str:
    if locale in SUPPORTED_LOCALES:
        return locale
    return DEFAULT_LOCALE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_date(value) -> str:
    """Backend dates may come as full ISO timestamps; keep the date part."""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value or "")[:10]


def normalize_time(value) -> str:
    """Backend times may carry seconds (``10:00:00``); keep ``HH:MM``."""
    text = str(value or "").strip()
    if len(text) >= 5 and text[2] == ":":
        return text[:5]
    if len(text) == 4 and text[1] == ":":
        return f"0{text}"
    return text


def parse_hhmm(value: str) -> int:
    """Minutes since midnight for ``HH:MM``. Raises ValueError when malformed."""
    parts = (value or "").split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Hora inválida: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Hora inválida: {value!r}")
    return hours * 60 + minutes


def format_shift_date(value: str, locale: str | None = None) -> str:
    locale = resolve_locale(locale)
    d = parse_iso_date(normalize_date(value))
    month = _MONTHS[locale][d.month - 1]
    if locale == "en-US":
        return f"{month} {d.day}, {d.year}"
    return f"{d.day} de {month} de {d.year}"


def parse_shift_date(text: str, locale: str | None = None) -> str:
    """Inverse of ``format_shift_date``; returns ``YYYY-MM-DD``."""
    locale = resolve_locale(locale)
    months = [m.lower() for m in _MONTHS[locale]]
    text = (text or "").strip()

    if locale == "en-US":
        m = _EN_DATE.match(text)
        if not m:
            raise ValueError(f"Fecha inválida: {text!r}")
        month_name, day, year = m.group(1), m.group(2), m.group(3)
    else:
        m = _ES_DATE.match(text)
        if not m:
            raise ValueError(f"Fecha inválida: {text!r}")
        day, month_name, year = m.group(1), m.group(2), m.group(3)

    try:
        month = months.index(month_name.lower()) + 1
    except ValueError:
        raise ValueError(f"Mes inválido: {month_name!r}") from None
    return date(int(year), month, int(day)).strftime("%Y-%m-%d")


def format_time(value: str, locale: str | None = None) -> str:
    locale = resolve_locale(locale)
    minutes = parse_hhmm(normalize_time(value))
    hours, mins = divmod(minutes, 60)
    if locale == "en-US":
        suffix = "AM" if hours < 12 else "PM"
        return f"{(hours % 12) or 12}:{mins:02d} {suffix}"
    return f"{hours:02d}:{mins:02d}"


def parse_time(text: str, locale: str | None = None) -> str:
    locale = resolve_locale(locale)
    text = (text or "").strip()
    if locale == "en-US":
        m = _EN_TIME.match(text)
        if not m:
            raise ValueError(f"Hora inválida: {text!r}")
        hours, mins, suffix = int(m.group(1)) % 12, int(m.group(2)), m.group(3).upper()
        if suffix == "PM":
            hours += 12
        return f"{hours:02d}:{mins:02d}"
    minutes = parse_hhmm(text)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_range(start: str, end: str, locale: str | None = None) -> str:
    return f"{format_time(start, locale)} - {format_time(end, locale)}"


def parse_time_range(text: str, locale: str | None = None) -> Tuple[str, str]:
    start, sep, end = (text or "").partition(" - ")
    if not sep:
        raise ValueError(f"Rango horario inválido: {text!r}")
    return parse_time(start, locale), parse_time(end, locale)


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()
