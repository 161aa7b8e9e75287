"""High-level access to the CMS content files."""
from __future__ import annotations

from datetime import date
import logging
from typing import Any

from parish.domain.defaults import default_mass_times, default_settings
from parish.domain.text import generate_id
from parish.repositories.json_storage import (
    EVENTS_FILE,
    GALLERY_FILE,
    MASS_TIMES_FILE,
    NEWS_FILE,
    NEWSLETTER_FILE,
    PARISH_GROUPS_FILE,
    SETTINGS_FILE,
    ensure_data_dir,
    read_json_file,
    write_json_file,
)

logger = logging.getLogger(__name__)


def _as_list(value: Any, filename: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        logger.error("Expected a list in %s, got %s", filename, type(value).__name__)
        return []
    return value


class CMSRepository:
    """Read/write helpers for each content file."""

    # -------------------------- news --------------------------
    def get_news_articles(self) -> list[dict]:
        return _as_list(read_json_file(NEWS_FILE), NEWS_FILE)

    def save_news_articles(self, articles: list[dict]) -> bool:
        return write_json_file(NEWS_FILE, articles)

    # -------------------------- events --------------------------
    def get_events(self) -> list[dict]:
        return _as_list(read_json_file(EVENTS_FILE), EVENTS_FILE)

    def save_events(self, events: list[dict]) -> bool:
        return write_json_file(EVENTS_FILE, events)

    # -------------------------- mass times --------------------------
    def get_mass_times(self) -> list[dict]:
        return _as_list(read_json_file(MASS_TIMES_FILE), MASS_TIMES_FILE)

    def save_mass_times(self, mass_times: list[dict]) -> bool:
        return write_json_file(MASS_TIMES_FILE, mass_times)

    # -------------------------- settings --------------------------
    def get_website_settings(self) -> dict:
        settings = read_json_file(SETTINGS_FILE)
        if not isinstance(settings, dict) or not settings:
            return default_settings()
        return settings

    def save_website_settings(self, settings: dict) -> bool:
        return write_json_file(SETTINGS_FILE, settings)

    # -------------------------- parish groups --------------------------
    def get_parish_groups(self) -> list[dict]:
        return _as_list(read_json_file(PARISH_GROUPS_FILE), PARISH_GROUPS_FILE)

    def save_parish_groups(self, groups: list[dict]) -> bool:
        return write_json_file(PARISH_GROUPS_FILE, groups)

    # -------------------------- gallery --------------------------
    def get_gallery_albums(self) -> list[dict]:
        return _as_list(read_json_file(GALLERY_FILE), GALLERY_FILE)

    def save_gallery_albums(self, albums: list[dict]) -> bool:
        return write_json_file(GALLERY_FILE, albums)

    # -------------------------- newsletter --------------------------
    def get_newsletter_subscribers(self) -> list[dict]:
        return _as_list(read_json_file(NEWSLETTER_FILE), NEWSLETTER_FILE)

    def save_newsletter_subscribers(self, subscribers: list[dict]) -> bool:
        return write_json_file(NEWSLETTER_FILE, subscribers)

    # -------------------------- seeding --------------------------
    def initialize_default_data(self, today: date | None = None) -> list[str]:
        """Seed files that are missing or unreadable; return the names seeded."""
        ensure_data_dir()
        today = today or date.today()
        seeded: list[str] = []

        if read_json_file(NEWS_FILE) is None:
            self.save_news_articles(
                [
                    {
                        "id": generate_id(),
                        "title": "Welcome to Our New Website",
                        "excerpt": "We're excited to launch our new parish website with enhanced features for our community.",
                        "content": (
                            "We're delighted to introduce our new parish website, designed to better serve our "
                            "community and provide easy access to information about our services, events, and "
                            "parish life. The new site features improved accessibility, mobile responsiveness, "
                            "and user-friendly navigation."
                        ),
                        "image": "/images/news/new-website.jpg",
                        "category": "Announcement",
                        "date": today.isoformat(),
                        "readTime": 2,
                        "author": "Parish Office",
                        "published": True,
                        "slug": "welcome-to-our-new-website",
                    }
                ]
            )
            seeded.append(NEWS_FILE)

        if read_json_file(EVENTS_FILE) is None:
            self.save_events(
                [
                    {
                        "id": generate_id(),
                        "title": "Sunday Mass",
                        "description": "Join us for our regular Sunday Mass",
                        "date": "2025-07-06",
                        "time": "10:00 AM",
                        "duration": "1 hour",
                        "location": "Main Church",
                        "category": "Mass",
                        "registrationRequired": False,
                        "published": True,
                    }
                ]
            )
            seeded.append(EVENTS_FILE)

        if read_json_file(SETTINGS_FILE) is None:
            self.save_website_settings(default_settings())
            seeded.append(SETTINGS_FILE)

        if read_json_file(MASS_TIMES_FILE) is None:
            self.save_mass_times(default_mass_times())
            seeded.append(MASS_TIMES_FILE)

        if seeded:
            logger.info("Seeded CMS files: %s", ", ".join(seeded))
        return seeded
