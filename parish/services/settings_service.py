"""Website settings document (settings.json) and the maintenance switch."""
from __future__ import annotations

import logging
from typing import Optional

from parish.repositories.cms_repository import CMSRepository
from parish.services.errors import ContentSaveError, InvalidContentError

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, repository: Optional[CMSRepository] = None) -> None:
        self.repository = repository or CMSRepository()

    def get_settings_document(self) -> dict:
        return self.repository.get_website_settings()

    def save_settings_document(self, document) -> dict:
        if not isinstance(document, dict):
            raise InvalidContentError("Settings must be a JSON object")
        if not self.repository.save_website_settings(document):
            raise ContentSaveError("Failed to save settings")
        logger.info("Website settings updated")
        return document


def check_maintenance_mode(repository: Optional[CMSRepository] = None) -> bool:
    """True when website.maintenanceMode is set; False if settings cannot be read."""
    try:
        settings = (repository or CMSRepository()).get_website_settings()
        website = settings.get("website") or {}
        return bool(website.get("maintenanceMode"))
    except (AttributeError, TypeError) as exc:
        logger.error("Error checking maintenance mode: %s", exc)
        return False
