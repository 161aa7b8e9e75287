"""
CRUD over the list-shaped CMS files (news, events, parish groups, gallery).

Each operation reads the whole list, changes it in memory and writes the
whole list back. Subclasses fill defaults for new records and decide where a
new record goes and how the list is ordered.
"""
from __future__ import annotations

from collections import OrderedDict
from datetime import date
import logging
from typing import Callable, Optional

from parish.core.utils import parse_iso_date
from parish.domain.text import calculate_read_time, generate_id, slugify
from parish.repositories.cms_repository import CMSRepository
from parish.services.errors import ContentSaveError, InvalidContentError, RecordNotFoundError

logger = logging.getLogger(__name__)


def _date_key(record: dict) -> date:
    return parse_iso_date(record.get("date")) or date.min


class CollectionService:
    label = "Record"
    required_fields: tuple[str, ...] = ()

    def __init__(self, repository: Optional[CMSRepository] = None) -> None:
        self.repository = repository or CMSRepository()

    # hooks
    def _load(self) -> list[dict]:
        raise NotImplementedError

    def _store(self, records: list[dict]) -> bool:
        raise NotImplementedError

    def _with_defaults(self, data: dict) -> dict:
        return dict(data)

    def _insert(self, records: list[dict], record: dict) -> None:
        records.append(record)

    def _after_update(self, record: dict, changes: dict) -> dict:
        return record

    def _order(self, records: list[dict]) -> list[dict]:
        return records

    # operations
    def list_all(self) -> list[dict]:
        return self._load()

    def get(self, record_id: str) -> dict:
        for record in self._load():
            if record.get("id") == record_id:
                return record
        raise RecordNotFoundError(f"{self.label} not found")

    def _save(self, records: list[dict], action: str) -> None:
        if not self._store(records):
            raise ContentSaveError(f"Failed to {action} {self.label.lower()}")

    def create(self, data: dict) -> dict:
        missing = [name for name in self.required_fields if not data.get(name)]
        if missing:
            raise InvalidContentError(f"Missing required fields: {', '.join(missing)}")
        payload = {key: value for key, value in data.items() if key != "id"}
        record = self._with_defaults(payload)
        record["id"] = generate_id()
        records = self._load()
        self._insert(records, record)
        self._save(self._order(records), "save")
        logger.info("Created %s %s", self.label.lower(), record["id"])
        return record

    def update(self, record_id: str, changes: dict) -> dict:
        records = self._load()
        for index, current in enumerate(records):
            if current.get("id") == record_id:
                updated = {**current, **{k: v for k, v in changes.items() if k != "id"}}
                updated = self._after_update(updated, changes)
                records[index] = updated
                break
        else:
            raise RecordNotFoundError(f"{self.label} not found")
        self._save(self._order(records), "update")
        logger.info("Updated %s %s", self.label.lower(), record_id)
        return updated

    def delete(self, record_id: str) -> None:
        records = self._load()
        remaining = [record for record in records if record.get("id") != record_id]
        if len(remaining) == len(records):
            raise RecordNotFoundError(f"{self.label} not found")
        self._save(remaining, "delete")
        logger.info("Deleted %s %s", self.label.lower(), record_id)


class NewsService(CollectionService):
    label = "Article"
    required_fields = ("title",)
    default_image = "/images/news/default.jpg"
    default_author = "Parish Office"

    def __init__(self, repository: Optional[CMSRepository] = None, today: Optional[Callable[[], date]] = None):
        super().__init__(repository)
        self._today = today or date.today

    def _load(self):
        return self.repository.get_news_articles()

    def _store(self, records):
        return self.repository.save_news_articles(records)

    def _with_defaults(self, data):
        record = dict(data)
        record.setdefault("excerpt", "")
        record.setdefault("content", "")
        record.setdefault("category", "")
        record["image"] = data.get("image") or self.default_image
        record["date"] = data.get("date") or self._today().isoformat()
        record["readTime"] = data.get("readTime") or calculate_read_time(record["content"])
        record["author"] = data.get("author") or self.default_author
        record["published"] = bool(data.get("published", False))
        record["slug"] = slugify(data.get("title"))
        return record

    def _insert(self, records, record):
        records.insert(0, record)

    def _after_update(self, record, changes):
        record["slug"] = slugify(changes.get("title") or record.get("title"))
        return record

    # public site
    def published_articles(self) -> list[dict]:
        published = [a for a in self._load() if a.get("published")]
        return sorted(published, key=_date_key, reverse=True)

    def get_by_slug(self, slug: str) -> dict:
        for article in self.published_articles():
            if article.get("slug") == slug:
                return article
        raise RecordNotFoundError("Article not found")

    def categories(self) -> list[str]:
        seen = OrderedDict()
        for article in self.published_articles():
            if article.get("category"):
                seen.setdefault(article["category"], None)
        return list(seen)


class EventService(CollectionService):
    label = "Event"
    required_fields = ("title", "date")

    def _load(self):
        return self.repository.get_events()

    def _store(self, records):
        return self.repository.save_events(records)

    def _with_defaults(self, data):
        record = dict(data)
        record["duration"] = data.get("duration") or "1 hour"
        record["registrationRequired"] = bool(data.get("registrationRequired", False))
        record["published"] = bool(data.get("published", False))
        return record

    def _order(self, records):
        return sorted(records, key=_date_key)

    # public site
    def published_events(self) -> list[dict]:
        return sorted((e for e in self._load() if e.get("published")), key=_date_key)

    def upcoming_events(self, today: Optional[date] = None) -> list[dict]:
        today = today or date.today()
        return [e for e in self.published_events() if _date_key(e) >= today]

    def filter_events(self, category: Optional[str] = None, limit: Optional[int] = None) -> list[dict]:
        events = self.published_events()
        if category:
            wanted = category.strip().lower()
            events = [e for e in events if str(e.get("category", "")).lower() == wanted]
        if limit is not None and limit >= 0:
            events = events[:limit]
        return events

    def get_published(self, event_id: str) -> dict:
        event = self.get(event_id)
        if not event.get("published"):
            raise RecordNotFoundError("Event not found")
        return event


class ParishGroupService(CollectionService):
    label = "Group"
    required_fields = ("name",)

    def _load(self):
        return self.repository.get_parish_groups()

    def _store(self, records):
        return self.repository.save_parish_groups(records)

    def _with_defaults(self, data):
        record = dict(data)
        record["active"] = data.get("active") is not False
        record["newMembersWelcome"] = data.get("newMembersWelcome") is not False
        return record

    def active_groups(self) -> "OrderedDict[str, list[dict]]":
        """Active groups keyed by category, categories in first-seen order."""
        grouped: "OrderedDict[str, list[dict]]" = OrderedDict()
        for group in self._load():
            if group.get("active") is False:
                continue
            grouped.setdefault(group.get("category") or "Other", []).append(group)
        return grouped


class GalleryService(CollectionService):
    label = "Album"
    required_fields = ("title",)

    def _load(self):
        return self.repository.get_gallery_albums()

    def _store(self, records):
        return self.repository.save_gallery_albums(records)

    def _with_defaults(self, data):
        record = dict(data)
        record["images"] = data.get("images") or []
        record["featured"] = bool(data.get("featured", False))
        record["published"] = bool(data.get("published", False))
        return record

    def _order(self, records):
        return sorted(records, key=_date_key, reverse=True)

    def published_albums(self) -> list[dict]:
        return [a for a in self._order(self._load()) if a.get("published")]

    def featured_albums(self) -> list[dict]:
        return [a for a in self.published_albums() if a.get("featured")]

    def get_published(self, album_id: str) -> dict:
        album = self.get(album_id)
        if not album.get("published"):
            raise RecordNotFoundError("Album not found")
        return album
