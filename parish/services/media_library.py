"""
Static catalogues for the podcast, talks, newsletter archive and community
news pages, with the search and category filters those pages offer.
"""
from __future__ import annotations

from typing import Iterable, Optional

from parish.core.utils import parse_iso_date

ALL_CATEGORIES = "All"

PODCAST_EPISODES = (
    {
        "id": "walking-in-faith",
        "title": "Walking in Faith: A Journey Through Lent",
        "description": (
            "Join Fr Krisz as he explores the spiritual disciplines of Lent and how we can use this holy season "
            "to draw closer to God through prayer, fasting, and almsgiving."
        ),
        "host": "Fr Krisz",
        "guest": "",
        "date": "2025-02-15",
        "duration": "32 minutes",
        "category": "Spiritual Formation",
        "image": "/images/podcast/lent-journey.jpg",
        "season": 2,
        "episode": 8,
        "featured": True,
    },
    {
        "id": "saints-among-us",
        "title": "The Saints Among Us: Stories of Modern Holiness",
        "description": (
            "Deacon Michael shares inspiring stories of contemporary saints and how their examples can guide "
            "our daily Christian living in the 21st century."
        ),
        "host": "Deacon Michael",
        "guest": "",
        "date": "2025-02-01",
        "duration": "28 minutes",
        "category": "Saints & Spirituality",
        "image": "/images/podcast/modern-saints.jpg",
        "season": 2,
        "episode": 7,
        "featured": False,
    },
    {
        "id": "youth-voices",
        "title": "Youth Voices: Faith in Action",
        "description": (
            "Our parish youth share their experiences of living out Catholic values in school, work, and "
            "relationships. A powerful testimony of young faith."
        ),
        "host": "Sarah Mitchell",
        "guest": "Parish Youth Group",
        "date": "2025-01-18",
        "duration": "25 minutes",
        "category": "Youth & Family",
        "image": "/images/podcast/youth-voices.jpg",
        "season": 2,
        "episode": 6,
        "featured": False,
    },
    {
        "id": "understanding-the-mass",
        "title": "Understanding the Mass: The Source and Summit",
        "description": (
            "Fr Krisz takes us through the beautiful structure and meaning of the Catholic Mass, helping us "
            "participate more fully in this central act of worship."
        ),
        "host": "Fr Krisz",
        "guest": "",
        "date": "2025-01-04",
        "duration": "35 minutes",
        "category": "Liturgy & Worship",
        "image": "/images/podcast/mass-explained.jpg",
        "season": 2,
        "episode": 5,
        "featured": True,
    },
    {
        "id": "parish-history",
        "title": "Parish History: 150 Years of Faith",
        "description": (
            "Join local historian Margaret O'Brien as she takes us through the rich 150-year history of "
            "St Saviour's parish and its impact on the Lewisham community."
        ),
        "host": "Fr Krisz",
        "guest": "Margaret O'Brien",
        "date": "2024-12-20",
        "duration": "42 minutes",
        "category": "Parish Life",
        "image": "/images/podcast/parish-history.jpg",
        "season": 2,
        "episode": 4,
        "featured": False,
    },
    {
        "id": "prayer-life",
        "title": "Prayer Life: Finding God in Daily Routine",
        "description": (
            "Sr Catherine from the local convent shares practical advice on developing a meaningful prayer life "
            "that fits into our busy modern schedules."
        ),
        "host": "Deacon Michael",
        "guest": "Sr Catherine",
        "date": "2024-12-06",
        "duration": "30 minutes",
        "category": "Prayer & Devotion",
        "image": "/images/podcast/daily-prayer.jpg",
        "season": 2,
        "episode": 3,
        "featured": False,
    },
)

PODCAST_PLATFORMS = ("Apple Podcasts", "Spotify", "Google Podcasts", "RSS Feed")

TALKS = (
    {
        "id": "call-to-holiness",
        "title": "The Call to Holiness in Everyday Life",
        "speaker": "Fr Krisz",
        "description": (
            "Discover how to live a holy life in the midst of daily challenges and responsibilities. This talk "
            "explores practical ways to grow closer to God through ordinary moments."
        ),
        "date": "2025-01-15",
        "duration": "45 minutes",
        "category": "Spiritual Formation",
        "image": "/images/church/interior-prayer.jpg",
        "formats": ("video", "audio"),
        "featured": True,
    },
    {
        "id": "heaven-on-earth",
        "title": "Understanding the Mass: Heaven on Earth",
        "speaker": "Fr Krisz",
        "description": (
            "Deepen your appreciation of the Holy Mass by understanding its rich symbolism, structure, and "
            "spiritual significance in our Catholic faith."
        ),
        "date": "2024-12-10",
        "duration": "50 minutes",
        "category": "Liturgy",
        "image": "/images/church/altar-mass.jpg",
        "formats": ("video", "audio"),
        "featured": False,
    },
    {
        "id": "mary-our-mother",
        "title": "Mary, Our Mother and Model",
        "speaker": "Fr Krisz",
        "description": (
            "Explore the role of Our Lady in salvation history and how her example of faith, hope, and love "
            "guides us on our spiritual journey."
        ),
        "date": "2024-11-20",
        "duration": "40 minutes",
        "category": "Marian Devotion",
        "image": "/images/church/mary-statue.jpg",
        "formats": ("video", "audio"),
        "featured": False,
    },
    {
        "id": "living-the-beatitudes",
        "title": "Living the Beatitudes Today",
        "speaker": "Deacon Michael",
        "description": (
            "A practical guide to implementing Christ's teachings from the Sermon on the Mount in our modern world."
        ),
        "date": "2024-10-15",
        "duration": "35 minutes",
        "category": "Scripture",
        "image": "/images/church/gospel-book.jpg",
        "formats": ("audio",),
        "featured": False,
    },
    {
        "id": "companions-on-the-journey",
        "title": "The Saints: Our Companions on the Journey",
        "speaker": "Sr Catherine",
        "description": (
            "Learn about the communion of saints and how these holy men and women can inspire and intercede for "
            "us in our daily lives."
        ),
        "date": "2024-09-25",
        "duration": "42 minutes",
        "category": "Saints",
        "image": "/images/church/saints-window.jpg",
        "formats": ("audio",),
        "featured": False,
    },
    {
        "id": "heart-of-christian-life",
        "title": "Prayer: The Heart of Christian Life",
        "speaker": "Fr Krisz",
        "description": (
            "Discover different forms of prayer and how to develop a deeper, more meaningful relationship with "
            "God through regular prayer practice."
        ),
        "date": "2024-08-30",
        "duration": "48 minutes",
        "category": "Prayer",
        "image": "/images/church/prayer-candles.jpg",
        "formats": ("video", "audio"),
        "featured": False,
    },
)

NEWSLETTER_ISSUES = (
    {
        "date": "2025-01-26",
        "title": "Parish Newsletter - 26th January 2025",
        "description": "Fourth Sunday in Ordinary Time - Parish updates, upcoming events, and spiritual reflections.",
        "url": "/newsletters/newsletter-26-jan-2025.pdf",
    },
    {
        "date": "2025-01-19",
        "title": "Parish Newsletter - 19th January 2025",
        "description": "Third Sunday in Ordinary Time - Week of Prayer for Christian Unity special feature.",
        "url": "/newsletters/newsletter-19-jan-2025.pdf",
    },
    {
        "date": "2025-01-12",
        "title": "Parish Newsletter - 12th January 2025",
        "description": "Baptism of the Lord - New Year parish initiatives and ministry opportunities.",
        "url": "/newsletters/newsletter-12-jan-2025.pdf",
    },
    {
        "date": "2025-01-05",
        "title": "Parish Newsletter - 5th January 2025",
        "description": "Epiphany of the Lord - Christmas season reflections and upcoming Lenten preparations.",
        "url": "/newsletters/newsletter-05-jan-2025.pdf",
    },
    {
        "date": "2024-12-29",
        "title": "Parish Newsletter - 29th December 2024",
        "description": "Holy Family Sunday - Year-end gratitude and New Year resolutions.",
        "url": "/newsletters/newsletter-29-dec-2024.pdf",
    },
    {
        "date": "2024-12-22",
        "title": "Parish Newsletter - 22nd December 2024",
        "description": "Fourth Sunday of Advent - Final Christmas preparations and Christmas Mass schedule.",
        "url": "/newsletters/newsletter-22-dec-2024.pdf",
    },
)

NEWSLETTER_SECTIONS = (
    {"title": "Upcoming events", "description": "All parish events, special celebrations, and important dates for the coming week."},
    {"title": "Spiritual reflections", "description": "Weekly reflections on the Sunday Gospel and seasonal spiritual guidance."},
    {"title": "Parish news", "description": "Important announcements, parish news, and updates on ongoing projects."},
    {"title": "Mass times", "description": "Weekly Mass times, intentions, and any changes to the regular schedule."},
)

COMMUNITY_CATEGORIES = ("Community Groups", "Parish Events")

COMMUNITY_STORIES = (
    {
        "slug": "st-bakhita-group",
        "title": "The St Bakhita Group",
        "subtitle": "A community rooted in prayer and welcome",
        "category": "Community Groups",
        "date": "2024-04-21",
        "readTime": "4 min read",
        "image": "/images/devotion_to_saint_josephine_bakhita.jpeg",
        "featured": True,
        "excerpt": (
            "A welcoming place for migrants and parishioners, the St Bakhita Group offers a regular space for "
            "prayer, reflection, and community-building."
        ),
        "intro": (
            "A welcoming place for migrants and parishioners, the St Bakhita Group launched in April 2024, "
            "following the formal installation of a specially commissioned statue of the Saint in February. "
            "With prayers led by Fr Kenneth Iwunna, the group offers a regular space for prayer, reflection, "
            "and community-building, with a focus on the experiences and concerns of migrants."
        ),
        "activities": (
            {"title": "Scripture & Prayer", "description": "Each session includes prayer, a Scripture reading, and time for reflection."},
            {"title": "Community Building", "description": "Intercessions focus on key themes: family life, dignity of work, belonging, and community."},
            {"title": "Open to All", "description": "While rooted in migrant issues, the group welcomes everyone on their journey of faith."},
        ),
        "saint_title": "About St Josephine Bakhita",
        "saint": (
            "At age seven, Josephine Bakhita was kidnapped by slave traders and sold multiple times before being "
            "brought to Italy.",
            "In Italy, she encountered the Canossian Daughters of Charity, who welcomed her with compassion. "
            "She embraced Christianity and was baptised on 9 January 1890, choosing the name Josephine in "
            "tribute to St Joseph.",
            "Her journey from slavery to sainthood is a powerful testament to God's transformative grace. "
            "She died peacefully in 1947, keeping a joyful demeanour and unwavering faith to the end.",
        ),
        "quote": (
            "St Bakhita's story offers a poignant lens through which we view contemporary issues of migration, "
            "freedom, and resilience. Her life reminds us that hope can thrive even in the darkest circumstances."
        ),
    },
    {
        "slug": "pope-john-paul-ii-relics",
        "title": "Relics of St John Paul II Visit the Parish",
        "subtitle": "A day of veneration and prayer",
        "category": "Parish Events",
        "date": "2024-10-22",
        "readTime": "3 min read",
        "image": "/images/mid-mass-priest-and-community.jpg",
        "featured": False,
        "excerpt": (
            "Parishioners and visitors gathered to venerate the relics of Pope St John Paul II on his feast day, "
            "with Mass, adoration and time for private prayer."
        ),
        "intro": "",
        "activities": (),
        "saint_title": "",
        "saint": (),
        "quote": "",
    },
)


def _matches(item: dict, needle: str, fields: Iterable[str]) -> bool:
    return any(needle in str(item.get(name) or "").lower() for name in fields)


def filter_items(items: Iterable[dict], query: str = "", category: str = "", fields: Iterable[str] = ("title", "description")) -> list[dict]:
    """Case-insensitive text match on ``fields`` plus an exact category match ("All" or blank means any)."""
    needle = (query or "").strip().lower()
    wanted = (category or "").strip()
    fields = tuple(fields)
    result = []
    for item in items:
        if wanted and wanted != ALL_CATEGORIES and item.get("category") != wanted:
            continue
        if needle and not _matches(item, needle, fields):
            continue
        result.append(item)
    return result


def categories_of(items: Iterable[dict]) -> list[str]:
    seen: list[str] = []
    for item in items:
        if item.get("category") and item["category"] not in seen:
            seen.append(item["category"])
    return seen


def newest_first(items: Iterable[dict]) -> list[dict]:
    return sorted(items, key=lambda item: parse_iso_date(item.get("date")) or parse_iso_date("1900-01-01"), reverse=True)


def search_podcasts(query: str = "", category: str = "") -> list[dict]:
    return newest_first(filter_items(PODCAST_EPISODES, query, category, ("title", "description", "host", "guest")))


def search_talks(query: str = "", category: str = "") -> list[dict]:
    return newest_first(filter_items(TALKS, query, category, ("title", "description", "speaker")))


def latest_newsletter() -> Optional[dict]:
    issues = newest_first(NEWSLETTER_ISSUES)
    return issues[0] if issues else None


def community_stories(category: str = "") -> list[dict]:
    return newest_first(filter_items(COMMUNITY_STORIES, category=category))


def get_story(slug: str) -> Optional[dict]:
    for story in COMMUNITY_STORIES:
        if story["slug"] == slug:
            return story
    return None


def has_full_story(story: dict) -> bool:
    return bool(story.get("intro"))
