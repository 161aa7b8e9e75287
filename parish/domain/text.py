"""Identifier, slug and reading-time helpers for CMS records."""
from __future__ import annotations

import math
import re
import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase
WORDS_PER_MINUTE = 200


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Millisecond timestamp in base36 followed by a random base36 suffix."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return _to_base36(int(time.time() * 1000)) + suffix


def slugify(text: str | None) -> str:
    value = (text or "").lower()
    value = re.sub(r"[^\w\s-]", "", value, flags=re.ASCII)
    value = re.sub(r"[\s_-]+", "-", value, flags=re.ASCII)
    return value.strip("-")


def calculate_read_time(content: str | None) -> int:
    words = len((content or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
