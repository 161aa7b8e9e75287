from __future__ import annotations

from datetime import datetime, time

import pytest

from parish.domain import schedule
from parish.domain.defaults import default_mass_times

# 2025-07-06 is a Sunday
SUNDAY = datetime(2025, 7, 6)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10:00", time(10, 0)),
        ("18:30", time(18, 30)),
        ("10:00 AM", time(10, 0)),
        ("6:30 pm", time(18, 30)),
        ("12:00 PM", time(12, 0)),
        ("12:15 AM", time(0, 15)),
        ("7 PM", time(19, 0)),
        ("7:00 PM - 8:00 PM", time(19, 0)),
    ],
)
def test_parse_clock(text, expected):
    assert schedule.parse_clock(text) == expected


@pytest.mark.parametrize("text", ["", "noon", "25:00", "13:00 PM"])
def test_parse_clock_rejects_garbage(text):
    with pytest.raises(ValueError):
        schedule.parse_clock(text)


def test_todays_services_are_sorted():
    mass_times = [{"day": "Sunday", "services": [{"time": "6:00 PM"}, {"time": "8:00 AM"}, {"time": "bad"}]}]
    assert [s["time"] for s in schedule.todays_services(mass_times, SUNDAY)] == ["8:00 AM", "6:00 PM"]


def test_next_mass_later_today():
    upcoming = schedule.find_next_mass(default_mass_times(), SUNDAY.replace(hour=9))
    assert upcoming.day == "Sunday"
    assert upcoming.time == "10:00 AM"
    assert upcoming.starts_at == datetime(2025, 7, 6, 10, 0)


def test_next_mass_rolls_over_to_tomorrow():
    upcoming = schedule.find_next_mass(default_mass_times(), SUNDAY.replace(hour=20))
    assert upcoming.day == "Monday"
    assert upcoming.starts_at.date() == datetime(2025, 7, 7).date()


def test_next_mass_none_for_empty_schedule():
    assert schedule.find_next_mass([], SUNDAY) is None


def test_time_remaining_breakdown_and_floor_at_zero():
    start = datetime(2025, 7, 6, 10, 0)
    remaining = schedule.time_remaining(datetime(2025, 7, 7, 12, 30, 15), start)
    assert remaining.as_dict() == {"days": 1, "hours": 2, "minutes": 30, "seconds": 15}
    assert schedule.time_remaining(start, datetime(2025, 7, 6, 11, 0)).as_dict() == {
        "days": 0, "hours": 0, "minutes": 0, "seconds": 0,
    }


def test_is_mass_live_within_the_hour():
    mass_times = default_mass_times()
    assert schedule.is_mass_live(mass_times, SUNDAY.replace(hour=10, minute=30)) is True
    assert schedule.is_mass_live(mass_times, SUNDAY.replace(hour=11, minute=1)) is False


def test_services_for_day_is_case_insensitive():
    assert len(schedule.services_for_day(default_mass_times(), "sunday")) == 3
    assert schedule.services_for_day(default_mass_times(), "Funday") == []
