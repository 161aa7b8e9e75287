"""
Utility helpers shared across routers/services and exposed as Jinja filters.
"""

from __future__ import annotations

from datetime import date, datetime
import re
from typing import Optional

from .config import get_settings

_UK_PHONE = re.compile(
    r"^(?:(?:\+44\s?|0044\s?|0)\s?(?:\d{2}\s?\d{4}\s?\d{4}|\d{3}\s?\d{3}\s?\d{4}|\d{4}\s?\d{6}))$"
)


def absolute_url(path: str, base: Optional[str] = None) -> str:
    """Turn a site-relative path into an absolute URL on PUBLIC_BASE_URL."""
    settings = get_settings()
    base_url = (base or settings.public_base_url).rstrip("/")
    if not path:
        return base_url + "/"
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path


def parse_iso_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value or "")[:10])
    except ValueError:
        return None


def format_date(value) -> str:
    """'2025-07-06' -> '6 July 2025'. Unparseable input is returned as-is."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return str(value or "")
    return f"{parsed.day} {parsed.strftime('%B %Y')}"


def format_time(value: str) -> str:
    """'18:30' -> '6:30 PM'. Values that already carry AM/PM pass through."""
    text = (value or "").strip()
    if not re.fullmatch(r"\d{1,2}:\d{2}", text):
        return text
    hours, minutes = text.split(":")
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def truncate_text(text: str, max_length: int) -> str:
    text = text or ""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def is_valid_phone_uk(phone: str) -> bool:
    return bool(_UK_PHONE.match((phone or "").replace(" ", "")))


def get_contrast_color(hex_color: str) -> str:
    """Pick black or white text for a ``#rrggbb`` background."""
    value = (hex_color or "").lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return "black"
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "black" if luminance > 0.5 else "white"
