"""
Weekly mass schedule helpers: today's services, the next mass and the live
countdown shown on the home and mass pages.

All datetimes are naive and expressed in the parish's local time; callers
convert "now" with ``local_now()`` before asking.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
import logging
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from parish.core.config import get_settings

logger = logging.getLogger(__name__)

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MASS_DURATION = timedelta(minutes=60)
LOOKAHEAD_DAYS = 7

CONFESSION_TIMES = (
    {"day": "Tuesday", "time": "6:00-6:20 PM", "note": "Before evening Mass"},
    {"day": "Wednesday", "time": "6:00-6:20 PM", "note": "Before evening Mass"},
    {"day": "Thursday", "time": "7:00-7:20 PM", "note": "After evening Mass"},
    {"day": "Friday", "time": "6:00-6:20 PM", "note": "Before evening Mass"},
    {"day": "Saturday", "time": "11:00 AM-12:00 PM", "note": "Before Pilgrim Mass"},
)
CONFESSION_NOTE = "Please ask at other times"

ADORATION_TIMES = (
    {"day": "Thursday", "time": "10:30 AM-12:00 PM", "description": "Morning Adoration"},
    {"day": "Thursday", "time": "7:00-7:30 PM", "description": "Evening Adoration (ends with Benediction)"},
    {"day": "Saturday", "time": "10:30 AM-12:00 PM", "description": "Morning Adoration"},
)

CHURCH_OPENING = {
    "daily": "8:30 AM until after evening Mass",
    "bankHolidays": "Closed at 11:00 AM",
}

_CLOCK_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp]\.?[Mm]\.?)?")


@dataclass(frozen=True)
class NextMass:
    day: str
    starts_at: datetime
    service: dict

    @property
    def time(self) -> str:
        return self.service.get("time", "")

    @property
    def type(self) -> str:
        return self.service.get("type", "")


@dataclass(frozen=True)
class TimeRemaining:
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def as_dict(self) -> dict:
        return {"days": self.days, "hours": self.hours, "minutes": self.minutes, "seconds": self.seconds}


def local_now() -> datetime:
    """Current wall-clock time in SITE_TIMEZONE, without tzinfo."""
    name = get_settings().site_timezone
    try:
        return datetime.now(ZoneInfo(name)).replace(tzinfo=None)
    except ZoneInfoNotFoundError:
        logger.warning("Unknown SITE_TIMEZONE %r; using server local time", name)
        return datetime.now()


def parse_clock(text: str) -> time:
    """
    Parse "10:00", "18:30", "10:00 AM", "6:30 pm" or "7 PM".
    Ranges such as "7:00 PM - 8:00 PM" yield their start. Raises ValueError.
    """
    match = _CLOCK_RE.match(text or "")
    if not match:
        raise ValueError(f"Unrecognised time: {text!r}")
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").replace(".", "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            raise ValueError(f"Unrecognised time: {text!r}")
        hour = hour % 12 + (12 if meridiem == "PM" else 0)
    if hour > 23 or minute > 59:
        raise ValueError(f"Unrecognised time: {text!r}")
    return time(hour, minute)


def services_for_day(mass_times: list[dict], day_name: str) -> list[dict]:
    wanted = (day_name or "").strip().lower()
    for entry in mass_times or []:
        if str(entry.get("day", "")).strip().lower() == wanted:
            return list(entry.get("services") or [])
    return []


def _timed_services(mass_times: list[dict], day: datetime) -> list[tuple[datetime, dict]]:
    timed = []
    for service in services_for_day(mass_times, DAY_NAMES[day.weekday()]):
        try:
            clock = parse_clock(service.get("time", ""))
        except ValueError:
            logger.warning("Skipping service with bad time %r", service.get("time"))
            continue
        timed.append((datetime.combine(day.date(), clock), service))
    timed.sort(key=lambda item: item[0])
    return timed


def todays_services(mass_times: list[dict], now: datetime) -> list[dict]:
    return [service for _, service in _timed_services(mass_times, now)]


def find_next_mass(mass_times: list[dict], now: datetime) -> Optional[NextMass]:
    for starts_at, service in _timed_services(mass_times, now):
        if starts_at > now:
            return NextMass(DAY_NAMES[now.weekday()], starts_at, service)
    for offset in range(1, LOOKAHEAD_DAYS + 1):
        day = now + timedelta(days=offset)
        timed = _timed_services(mass_times, day)
        if timed:
            starts_at, service = timed[0]
            return NextMass(DAY_NAMES[day.weekday()], starts_at, service)
    return None


def time_remaining(target: datetime, now: datetime) -> TimeRemaining:
    seconds_left = int((target - now).total_seconds())
    if seconds_left <= 0:
        return TimeRemaining()
    days, rest = divmod(seconds_left, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(days, hours, minutes, seconds)


def is_mass_live(mass_times: list[dict], now: datetime, duration: timedelta = MASS_DURATION) -> bool:
    return any(start <= now <= start + duration for start, _ in _timed_services(mass_times, now))
