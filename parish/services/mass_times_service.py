"""Weekly mass schedule stored in mass-times.json."""
from __future__ import annotations

import logging
from typing import Optional

from parish.domain.defaults import default_mass_times
from parish.repositories.cms_repository import CMSRepository
from parish.services.errors import ContentSaveError, InvalidContentError

logger = logging.getLogger(__name__)

OPTIONAL_SERVICE_FIELDS = ("language", "celebrant")


def normalize_service(service: dict) -> dict:
    clean = {
        "time": service.get("time") or "",
        "type": service.get("type") or "",
        "description": service.get("description") or "",
    }
    for key in OPTIONAL_SERVICE_FIELDS:
        if service.get(key):
            clean[key] = service[key]
    return clean


class MassTimesService:
    def __init__(self, repository: Optional[CMSRepository] = None) -> None:
        self.repository = repository or CMSRepository()

    def get_schedule(self) -> list[dict]:
        return self.repository.get_mass_times()

    def replace_schedule(self, days: list[dict]) -> list[dict]:
        if not isinstance(days, list):
            raise InvalidContentError("Mass times must be a list of days")
        schedule = []
        for entry in days:
            if not isinstance(entry, dict) or not entry.get("day"):
                raise InvalidContentError("Each entry needs a day")
            services = entry.get("services") or []
            schedule.append({"day": entry["day"], "services": [normalize_service(s) for s in services]})
        if not self.repository.save_mass_times(schedule):
            raise ContentSaveError("Failed to update mass times")
        logger.info("Mass times replaced (%d days)", len(schedule))
        return schedule

    def reset_to_defaults(self) -> list[dict]:
        schedule = default_mass_times()
        if not self.repository.save_mass_times(schedule):
            raise ContentSaveError("Failed to initialize mass times")
        logger.info("Mass times reset to defaults")
        return schedule
