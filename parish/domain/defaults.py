"""Seed content used when the CMS files are missing or unreadable."""

from __future__ import annotations

import copy

# Keys mirror the settings.json layout (camelCase), which is the on-disk schema.
_DEFAULT_SETTINGS = {
    "contact": {
        "address": "Brockley Rise, London SE23 1NG",
        "phone": "020 8852 7411",
        "email": "parish@saintsaviours.org.uk",
        "emergencyPhone": "999",
        "safeguardingPhone": "020 8858 2854",
    },
    "parish": {
        "name": "St Saviour's Catholic Church",
        "location": "Lewisham",
        "priest": "Fr Krisz Katona",
        "assistantPriest": "Revd. Carlos Lozano",
        "diocese": "Southwark",
        "established": "1889",
        "charityNumber": "1234567",
        "officeHours": {"days": "Mon-Fri", "time": "9:00 AM - 5:00 PM"},
    },
    "social": {
        "facebook": "https://www.facebook.com/stsaviourslewisham",
        "youtube": "https://www.youtube.com/@stsaviourslewisham",
        "instagram": "",
        "twitter": "",
    },
    "website": {
        "announcements": [],
        "maintenanceMode": False,
        "liveStreamEnabled": True,
        "liveStreamUrl": "https://www.youtube.com/@stsaviourslewisham/live",
        "donationsEnabled": True,
        "donationsUrl": "https://donate.givealittle.co/campaigns/st-saviours-lewisham",
    },
    "features": {
        "massBooking": False,
        "eventRegistration": True,
        "newsletter": True,
        "prayerRequests": True,
        "venueHire": True,
    },
    "images": {
        "logo": "/images/logo.svg",
        "hero": [
            {
                "id": "hero-1",
                "url": "/images/pexels-pixabay-218480.jpg",
                "alt": "Interior of St Saviour's Catholic Church showing the altar and pews in warm light",
                "title": "Welcome to St Saviour's Catholic Church",
                "subtitle": "A community of faith in the heart of Lewisham",
                "overlay": "dark",
                "priority": True,
            },
            {
                "id": "hero-2",
                "url": "/images/pexels-jibarofoto-2014775.jpg",
                "alt": "Congregation gathered in prayer during Mass",
                "title": "Join Us in Prayer and Fellowship",
                "subtitle": "Discover the warmth of our parish family",
                "overlay": "darker",
                "priority": False,
            },
            {
                "id": "hero-3",
                "url": "/images/pexels-pixabay-248199.jpg",
                "alt": "Gothic architecture and stained glass windows of our Victorian church",
                "title": "A Place of Sacred Beauty",
                "subtitle": "Experience our historic Victorian church",
                "overlay": "dark",
                "priority": False,
            },
            {
                "id": "hero-4",
                "url": "/images/pexels-pixabay-208216.jpg",
                "alt": "Families and individuals of all ages celebrating together at St Saviour's",
                "title": "Growing in Faith Together",
                "subtitle": "All are welcome in God's house",
                "overlay": "dark",
                "priority": False,
            },
        ],
        "history": [
            {"id": "history-1", "url": "/images/pexels-pixabay-208216.jpg", "alt": "Historical image of St Saviour's foundation", "category": "Heritage"},
            {"id": "history-2", "url": "/images/pexels-jibarofoto-2014775.jpg", "alt": "Parish community gathered together", "category": "Community"},
            {"id": "history-3", "url": "/images/pexels-pixabay-248199.jpg", "alt": "Church mission and ministry", "category": "Mission"},
            {"id": "history-4", "url": "/images/pexels-pixabay-218480.jpg", "alt": "Vision for the future", "category": "Vision"},
        ],
        "news": [
            {"id": "news-1", "url": "/images/pexels-pixabay-208216.jpg", "alt": "Lenten season preparation", "category": "Liturgical Season"},
            {"id": "news-2", "url": "/images/pexels-jibarofoto-2014775.jpg", "alt": "Parish pilgrimage", "category": "Pilgrimage"},
            {"id": "news-3", "url": "/images/pexels-pixabay-248199.jpg", "alt": "First Holy Communion", "category": "Sacraments"},
            {"id": "news-4", "url": "/images/pexels-pixabay-218480.jpg", "alt": "Parish restoration project", "category": "Parish Life"},
        ],
        "cta": {
            "priest": {
                "url": "/images/pexels-brett-sayles-3633711.jpg",
                "alt": "Meet Father Krisz, our parish priest",
            },
            "venue": {
                "url": "/images/pexels-shelaghmurphy-1666816.jpg",
                "alt": "Church interior available for weddings and special celebrations",
            },
        },
        "sacraments": [
            {"sacrament": "baptism", "url": "/images/sacraments/baptism.jpg", "alt": "Baptism ceremony at St Saviour's"},
            {"sacrament": "confirmation", "url": "/images/sacraments/confirmation.jpg", "alt": "Confirmation ceremony at St Saviour's"},
            {"sacrament": "eucharist", "url": "/images/sacraments/eucharist.jpg", "alt": "Holy Eucharist celebration"},
            {"sacrament": "confession", "url": "/images/sacraments/confession.jpg", "alt": "Confession and reconciliation"},
            {"sacrament": "anointing", "url": "/images/sacraments/anointing.jpg", "alt": "Anointing of the sick"},
            {"sacrament": "orders", "url": "/images/sacraments/orders.jpg", "alt": "Holy Orders ordination"},
            {"sacrament": "matrimony", "url": "/images/sacraments/matrimony.jpg", "alt": "Wedding ceremony at St Saviour's"},
        ],
        "pages": {
            "about-us": {"url": "/images/pages/about-us.jpg", "alt": "About St Saviour's Catholic Church"},
            "contact-us": {"url": "/images/pages/contact-us.jpg", "alt": "Contact St Saviour's Catholic Church"},
            "mass-times": {"url": "/images/pages/mass-times.jpg", "alt": "Mass times at St Saviour's"},
            "find-us": {"url": "/images/pages/find-us.jpg", "alt": "Find St Saviour's Catholic Church"},
            "donate": {"url": "/images/pages/donate.jpg", "alt": "Support St Saviour's Catholic Church"},
            "venue-hire": {"url": "/images/pages/venue-hire.jpg", "alt": "Venue hire at St Saviour's"},
            "gallery": {"url": "/images/pages/gallery.jpg", "alt": "Photo gallery of St Saviour's"},
            "streaming": {"url": "/images/pages/streaming.jpg", "alt": "Live streaming services"},
            "podcasts": {"url": "/images/pages/podcasts.jpg", "alt": "St Saviour's podcasts and talks"},
        },
    },
}


def _weekday(day: str) -> dict:
    return {
        "day": day,
        "services": [
            {"time": "10:00 AM", "type": "Weekday Mass", "description": "Morning Mass"},
            {"time": "6:30 PM", "type": "Weekday Mass", "description": "Evening Mass"},
        ],
    }


_DEFAULT_MASS_TIMES = [
    {
        "day": "Sunday",
        "services": [
            {"time": "8:00 AM", "type": "Sunday Mass", "description": "Quiet Mass"},
            {"time": "10:00 AM", "type": "Sunday Mass", "description": "Family Mass with music"},
            {"time": "6:00 PM", "type": "Sunday Mass", "description": "Evening Mass"},
        ],
    },
    _weekday("Monday"),
    _weekday("Tuesday"),
    _weekday("Wednesday"),
    _weekday("Thursday"),
    _weekday("Friday"),
    {
        "day": "Saturday",
        "services": [
            {"time": "10:00 AM", "type": "Weekday Mass", "description": "Morning Mass"},
            {"time": "6:00 PM", "type": "Saturday Vigil", "description": "Vigil Mass for Sunday"},
        ],
    },
]


def default_settings() -> dict:
    """Fresh copy of the default WebsiteSettings document."""
    return copy.deepcopy(_DEFAULT_SETTINGS)


def default_mass_times() -> list[dict]:
    return copy.deepcopy(_DEFAULT_MASS_TIMES)
