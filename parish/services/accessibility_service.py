"""
Visitor accessibility preferences (text size, spacing, contrast, motion).

Preferences live in a cookie as a small query string; nothing is stored on the
server. Out-of-range or malformed values fall back to the defaults.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Mapping
from urllib.parse import parse_qs, urlencode

COOKIE_NAME = "a11y_prefs"
COOKIE_MAX_AGE = 365 * 24 * 60 * 60

FONT_SIZES = (100, 125, 150, 175, 200)
LINE_HEIGHTS = (1.4, 1.6, 1.8, 2.0)
LETTER_SPACINGS = (0.0, 0.05, 0.1, 0.15)

_TRUE = {"1", "true", "on", "yes"}


@dataclass(frozen=True)
class AccessibilityPreferences:
    font_size: int = 100
    line_height: float = 1.6
    letter_spacing: float = 0.0
    high_contrast: bool = False
    reduced_motion: bool = False
    focus_indicators: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "AccessibilityPreferences":
        defaults = cls()

        def pick(name, allowed, cast):
            try:
                value = cast(values.get(name))
            except (TypeError, ValueError):
                return getattr(defaults, name)
            return value if value in allowed else getattr(defaults, name)

        def flag(name):
            if name not in values:
                return getattr(defaults, name)
            return str(values.get(name)).strip().lower() in _TRUE

        return cls(
            font_size=pick("font_size", FONT_SIZES, int),
            line_height=pick("line_height", LINE_HEIGHTS, float),
            letter_spacing=pick("letter_spacing", LETTER_SPACINGS, float),
            high_contrast=flag("high_contrast"),
            reduced_motion=flag("reduced_motion"),
            focus_indicators=flag("focus_indicators"),
        )

    @classmethod
    def from_cookie(cls, raw: str | None) -> "AccessibilityPreferences":
        if not raw:
            return cls()
        parsed = {key: values[-1] for key, values in parse_qs(raw).items() if values}
        return cls.from_mapping(parsed)

    def to_cookie(self) -> str:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, bool):
                data[key] = "1" if value else "0"
        return urlencode(data)

    @property
    def is_default(self) -> bool:
        return self == AccessibilityPreferences()

    def body_classes(self) -> str:
        classes = []
        if self.high_contrast:
            classes.append("high-contrast")
        if self.reduced_motion:
            classes.append("reduce-motion")
        if self.focus_indicators:
            classes.append("focus-visible")
        return " ".join(classes)

    def css_variables(self) -> str:
        return (
            f"--a11y-font-scale: {self.font_size / 100:g}; "
            f"--a11y-line-height: {self.line_height:g}; "
            f"--a11y-letter-spacing: {self.letter_spacing:g}em;"
        )
