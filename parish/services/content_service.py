"""
Read-only views over the website settings document.

A ``ContentService`` wraps one snapshot of settings.json, so a page render
reads the file once. Sections missing from the stored document fall back to
the defaults key by key.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from parish.core.utils import parse_iso_date
from parish.domain.defaults import default_settings
from parish.repositories.cms_repository import CMSRepository

DEFAULT_OFFICE_HOURS = {"days": "Mon-Fri", "time": "9:00 AM - 5:00 PM"}
SOCIAL_NETWORKS = (("facebook", "Facebook"), ("youtube", "YouTube"), ("instagram", "Instagram"), ("twitter", "Twitter"))


class ContentService:
    def __init__(self, settings: Optional[dict] = None, repository: Optional[CMSRepository] = None) -> None:
        if settings is None:
            settings = (repository or CMSRepository()).get_website_settings()
        self.settings = settings
        self._defaults = default_settings()

    def _section(self, name: str) -> dict:
        base = dict(self._defaults.get(name) or {})
        stored = self.settings.get(name)
        if isinstance(stored, dict):
            base.update(stored)
        return base

    # ---------------------- parish ----------------------
    def get_parish_info(self) -> dict:
        return self._section("parish")

    def get_parish_name(self) -> str:
        return self.get_parish_info().get("name", "")

    def get_full_parish_name(self) -> str:
        parish = self.get_parish_info()
        return f"{parish.get('name', '')}, {parish.get('location', '')}"

    def get_assistant_priest(self) -> str:
        return self.get_parish_info().get("assistantPriest") or ""

    def get_charity_number(self) -> str:
        return self.get_parish_info().get("charityNumber") or ""

    def get_office_hours(self) -> dict:
        return self.get_parish_info().get("officeHours") or dict(DEFAULT_OFFICE_HOURS)

    # ---------------------- contact ----------------------
    def get_contact_info(self) -> dict:
        return self._section("contact")

    def get_contact_display(self) -> dict:
        contact = self.get_contact_info()
        return {key: contact.get(key, "") for key in ("address", "phone", "email")}

    # ---------------------- social ----------------------
    def get_social_media(self) -> dict:
        return self._section("social")

    def get_social_links(self) -> list[dict]:
        social = self.get_social_media()
        return [
            {"name": label, "url": social.get(key), "active": True}
            for key, label in SOCIAL_NETWORKS
            if social.get(key)
        ]

    # ---------------------- website ----------------------
    def get_website(self) -> dict:
        return self._section("website")

    def get_announcements(self) -> list[dict]:
        """Announcements flagged active, regardless of their showUntil date."""
        announcements = self.get_website().get("announcements") or []
        return [item for item in announcements if isinstance(item, dict) and item.get("active") is True]

    def get_visible_announcements(self, today: Optional[date] = None) -> list[dict]:
        today = today or date.today()
        visible = []
        for item in self.get_announcements():
            until = parse_iso_date(item.get("showUntil"))
            if until is None or until >= today:
                visible.append(item)
        return visible

    def is_maintenance_mode(self) -> bool:
        return bool(self.get_website().get("maintenanceMode"))

    def is_live_stream_enabled(self) -> bool:
        return bool(self.get_website().get("liveStreamEnabled"))

    def get_live_stream_url(self) -> str:
        return self.get_website().get("liveStreamUrl") or ""

    def is_donations_enabled(self) -> bool:
        return bool(self.get_website().get("donationsEnabled"))

    def get_donations_url(self) -> str:
        return self.get_website().get("donationsUrl") or ""

    # ---------------------- features ----------------------
    def get_features(self) -> dict:
        return self._section("features")

    def is_feature_enabled(self, name: str) -> bool:
        return bool(self.get_features().get(name))

    # ---------------------- images ----------------------
    def _images(self) -> dict:
        return self._section("images")

    def get_hero_content(self) -> list[dict]:
        return list(self._images().get("hero") or [])

    def get_hero_titles(self) -> list[dict]:
        return [{"title": h.get("title", ""), "subtitle": h.get("subtitle", "")} for h in self.get_hero_content()]

    def get_logo(self) -> str:
        return self._images().get("logo") or ""

    def get_history_images(self) -> list[dict]:
        return list(self._images().get("history") or [])

    def get_news_images(self) -> list[dict]:
        return list(self._images().get("news") or [])

    def get_cta_images(self) -> dict:
        return dict(self._images().get("cta") or {})

    def get_sacrament_image(self, name: str) -> Optional[dict]:
        for image in self._images().get("sacraments") or []:
            if image.get("sacrament") == name:
                return image
        return None

    def get_page_image(self, name: str) -> Optional[dict]:
        return (self._images().get("pages") or {}).get(name)

    def get_news_image(self, index: int) -> Optional[dict]:
        return _indexed_or_first(self.get_news_images(), index)

    def get_history_image(self, index: int) -> Optional[dict]:
        return _indexed_or_first(self.get_history_images(), index)


def _indexed_or_first(items: list[dict], index: int) -> Optional[dict]:
    if not items:
        return None
    if 0 <= index < len(items):
        return items[index]
    return items[0]
