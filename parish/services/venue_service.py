"""
Venue hire catalogue and the booking calendar preview.

The calendar only shows sample slots; nothing here books or stores anything.
Enquiries go to the parish office through the submission service.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from parish.core.utils import parse_iso_date

VENUES = (
    {
        "id": "parish-hall",
        "name": "Parish Hall",
        "description": (
            "Our spacious main hall is perfect for large gatherings, celebrations, and community events. "
            "With a stage area and excellent acoustics, it's ideal for both formal and informal occasions."
        ),
        "capacity": "Up to 150 people",
        "area": "120 square meters",
        "image": "/images/venues/parish-hall.jpg",
        "features": [
            "Stage area with lighting",
            "Sound system available",
            "Kitchen facilities adjacent",
            "Tables and chairs included",
            "Disabled access",
            "Parking available",
        ],
        "hourlyRate": "£35",
        "halfDayRate": "£120",
        "fullDayRate": "£200",
        "suitableFor": ["Weddings", "Birthday parties", "Community meetings", "Concerts", "Fundraising events", "Corporate events"],
    },
    {
        "id": "community-room",
        "name": "Community Room",
        "description": (
            "A comfortable, intimate space perfect for smaller gatherings, meetings, and family celebrations. "
            "Features beautiful stained glass windows and a warm, welcoming atmosphere."
        ),
        "capacity": "Up to 50 people",
        "area": "40 square meters",
        "image": "/images/venues/community-room.jpg",
        "features": [
            "Stained glass windows",
            "Natural lighting",
            "Kitchenette access",
            "Flexible seating arrangements",
            "Heating included",
            "Audio/visual equipment",
        ],
        "hourlyRate": "£20",
        "halfDayRate": "£70",
        "fullDayRate": "£120",
        "suitableFor": ["Small meetings", "Baby showers", "Book clubs", "Training sessions", "Family gatherings", "Prayer groups"],
    },
    {
        "id": "garden-space",
        "name": "Church Garden",
        "description": (
            "Our beautiful, peaceful garden provides a unique outdoor venue surrounded by mature trees and "
            "well-maintained grounds. Perfect for outdoor ceremonies and summer events."
        ),
        "capacity": "Up to 80 people",
        "area": "200 square meters",
        "image": "/images/venues/church-garden.jpg",
        "features": [
            "Beautiful mature trees",
            "Well-maintained lawns",
            "Gazebo available",
            "Access to hall facilities",
            "Photography friendly",
            "Peaceful atmosphere",
        ],
        "hourlyRate": "£25",
        "halfDayRate": "£85",
        "fullDayRate": "£150",
        "suitableFor": ["Garden parties", "Wedding photos", "Outdoor ceremonies", "Summer fairs", "Memorial services", "Children's events"],
    },
)

FAQS = (
    {
        "question": "What's included in the hire fee?",
        "answer": (
            "All venue hire includes basic furniture (tables and chairs), lighting, heating, and access to basic "
            "kitchen facilities. Additional equipment like sound systems or decorative items may incur extra charges."
        ),
    },
    {
        "question": "How far in advance should I book?",
        "answer": (
            "We recommend booking at least 6-8 weeks in advance for popular dates, especially weekends. "
            "Some dates may be available with shorter notice."
        ),
    },
    {
        "question": "Are there any restrictions on what I can hold?",
        "answer": (
            "As a Catholic parish, we ask that all events align with our Christian values. We welcome community "
            "celebrations, educational events, and charitable fundraisers. Please discuss your event with us."
        ),
    },
    {
        "question": "Is parking available?",
        "answer": "Yes, we have an on-site car park with 25 spaces. Additional street parking is available nearby.",
    },
    {
        "question": "Can I bring my own catering?",
        "answer": (
            "Yes, you can bring your own catering or use our approved caterers list. Our kitchen facilities "
            "are available for food preparation and service."
        ),
    },
    {
        "question": "What about decorations?",
        "answer": (
            "You're welcome to decorate the venues appropriately. We ask that no fixtures are damaged and all "
            "decorations are removed after your event."
        ),
    },
)

# Sample availability for the calendar preview.
BOOKING_SLOTS = (
    {"id": "1", "date": "2025-01-27", "time": "09:00", "duration": 4, "venue": "Parish Hall", "venueId": "parish-hall",
     "available": True, "capacity": 100, "rate": "£150"},
    {"id": "2", "date": "2025-01-27", "time": "14:00", "duration": 4, "venue": "Parish Hall", "venueId": "parish-hall",
     "available": False, "capacity": 100, "rate": "£150"},
    {"id": "3", "date": "2025-01-28", "time": "10:00", "duration": 2, "venue": "Community Room",
     "venueId": "community-room", "available": True, "capacity": 30, "rate": "£75"},
    {"id": "4", "date": "2025-01-29", "time": "18:00", "duration": 3, "venue": "Church Hall", "venueId": "parish-hall",
     "available": True, "capacity": 150, "rate": "£200"},
)

CALENDAR_WEEKS = 6
CALENDAR_YEARS = range(1900, 2101)


def get_venue(venue_id: str) -> Optional[dict]:
    for venue in VENUES:
        if venue["id"] == venue_id:
            return venue
    return None


def slots_for_date(day: date) -> list[dict]:
    return [slot for slot in BOOKING_SLOTS if parse_iso_date(slot["date"]) == day]


def available_slots(venue_id: Optional[str] = None) -> list[dict]:
    return [
        slot
        for slot in BOOKING_SLOTS
        if slot["available"] and (venue_id is None or slot["venueId"] == venue_id)
    ]


def month_calendar(year: int, month: int, today: Optional[date] = None) -> list[list[dict]]:
    """
    Six Sunday-first weeks covering ``month``. Each cell carries the day, whether
    it belongs to the month, its slots and whether any slot is still free.
    """
    today = today or date.today()
    first = date(year, month, 1)
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    weeks = []
    for week in range(CALENDAR_WEEKS):
        row = []
        for offset in range(7):
            day = start + timedelta(days=week * 7 + offset)
            slots = slots_for_date(day)
            row.append(
                {
                    "date": day,
                    "inMonth": day.month == month,
                    "isToday": day == today,
                    "slots": slots,
                    "hasAvailable": any(slot["available"] for slot in slots),
                }
            )
        weeks.append(row)
    return weeks


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
