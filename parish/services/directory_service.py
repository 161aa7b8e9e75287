"""Staff directory shown on /staff."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

STAFF = (
    {
        "id": "1",
        "name": "Fr. Krzysztof Krzyskow",
        "title": "Parish Priest",
        "email": "fr.krzysztof@saintsaviours.org.uk",
        "phone": "020 8852 7411",
        "image": "/images/staff/fr-krzysztof.jpg",
        "bio": (
            "Fr. Krzysztof has been serving our parish community for over 8 years. He is passionate about "
            "pastoral care, youth ministry, and building bridges between different cultural communities "
            "within our parish."
        ),
        "languages": ["English", "Polish", "Spanish"],
        "specialties": ["Pastoral Care", "Youth Ministry", "Sacramental Preparation", "Interfaith Dialogue"],
        "availability": "Monday-Friday: 9:00 AM - 5:00 PM, Saturday: 10:00 AM - 2:00 PM",
        "directContact": True,
        "emergencyContact": True,
    },
    {
        "id": "2",
        "name": "Revd. Carlos Lozano",
        "title": "Associate Priest",
        "email": "revd.carlos@saintsaviours.org.uk",
        "phone": "020 8852 7411",
        "image": "/images/staff/revd-carlos.jpg",
        "bio": (
            "Revd. Carlos brings a wealth of experience in community outreach and social justice ministry. "
            "He leads our charitable initiatives and works closely with local organizations to serve those in need."
        ),
        "languages": ["English", "Spanish", "Portuguese"],
        "specialties": ["Community Outreach", "Social Justice", "Marriage Preparation", "Bereavement Support"],
        "availability": "Tuesday-Saturday: 9:00 AM - 4:00 PM",
        "directContact": True,
        "emergencyContact": True,
    },
    {
        "id": "3",
        "name": "Mrs. Margaret Thompson",
        "title": "Parish Secretary",
        "email": "office@saintsaviours.org.uk",
        "phone": "020 8852 7411",
        "image": "/images/staff/margaret-thompson.jpg",
        "bio": (
            "Margaret has been the heart of our parish office for over 15 years. She coordinates all "
            "administrative matters and is often the first friendly face visitors encounter."
        ),
        "languages": ["English"],
        "specialties": ["Administrative Support", "Event Coordination", "Visitor Welcome", "Record Keeping"],
        "availability": "Monday-Friday: 9:00 AM - 5:00 PM",
        "directContact": True,
        "emergencyContact": False,
    },
    {
        "id": "4",
        "name": "Mr. James Wilson",
        "title": "Music Director",
        "email": "music@saintsaviours.org.uk",
        "phone": "020 8852 7411",
        "image": "/images/staff/james-wilson.jpg",
        "bio": (
            "James leads our music ministry and choir, bringing beautiful liturgical music to our celebrations. "
            "He also coordinates special musical events and concerts."
        ),
        "languages": ["English", "Latin"],
        "specialties": ["Liturgical Music", "Choir Direction", "Organ Performance", "Music Education"],
        "availability": "Wednesday-Sunday: Flexible hours",
        "directContact": True,
        "emergencyContact": False,
    },
    {
        "id": "5",
        "name": "Mrs. Sarah O'Brien",
        "title": "Youth Ministry Coordinator",
        "email": "youth@saintsaviours.org.uk",
        "phone": None,
        "image": "/images/staff/sarah-obrien.jpg",
        "bio": (
            "Sarah coordinates our youth programs and helps young people grow in faith. She organizes "
            "retreats, youth groups, and confirmation preparation."
        ),
        "languages": ["English", "Irish"],
        "specialties": ["Youth Ministry", "Confirmation Preparation", "Retreat Leadership", "Family Ministry"],
        "availability": "Monday, Wednesday, Friday: 2:00 PM - 8:00 PM",
        "directContact": True,
        "emergencyContact": False,
    },
)

MAIL_SUBJECT = "Inquiry from Parish Website"


def list_staff(
    language: Optional[str] = None,
    specialty: Optional[str] = None,
    query: Optional[str] = None,
) -> list[dict]:
    members = list(STAFF)
    if language:
        members = [m for m in members if language.lower() in (l.lower() for l in m["languages"])]
    if specialty:
        members = [m for m in members if specialty.lower() in (s.lower() for s in m["specialties"])]
    if query:
        needle = query.strip().lower()
        members = [
            m
            for m in members
            if needle in m["name"].lower()
            or needle in m["title"].lower()
            or any(needle in s.lower() for s in m["specialties"])
        ]
    return members


def get_staff(staff_id: str) -> Optional[dict]:
    for member in STAFF:
        if member["id"] == staff_id:
            return member
    return None


def emergency_contacts() -> list[dict]:
    return [m for m in STAFF if m["emergencyContact"] and m.get("phone")]


def languages() -> list[str]:
    return sorted({lang for m in STAFF for lang in m["languages"]})


def specialties() -> list[str]:
    return sorted({spec for m in STAFF for spec in m["specialties"]})


def mailto_link(member: dict) -> str:
    return f"mailto:{member['email']}?subject={quote(MAIL_SUBJECT)}"


def tel_link(member: dict) -> str:
    phone = member.get("phone") or ""
    return f"tel:{''.join(phone.split())}" if phone else ""
