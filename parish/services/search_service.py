"""Site search across news, events, sacraments, parish groups and the Knowledge Hub."""
from __future__ import annotations

from typing import Optional

from parish.core.utils import truncate_text
from parish.repositories.cms_repository import CMSRepository
from parish.services import knowledge_hub_service
from parish.services.collections import EventService, NewsService, ParishGroupService
from parish.services.parish_info import SACRAMENTS

EXCERPT_LENGTH = 160


def _matches(needle: str, *fields) -> bool:
    return any(needle in str(value or "").lower() for value in fields)


def _hit(kind: str, title: str, excerpt: str, url: str) -> dict:
    return {"type": kind, "title": title, "excerpt": truncate_text(excerpt or "", EXCERPT_LENGTH), "url": url}


def search_site(query: str, category: str = "all", repository: Optional[CMSRepository] = None) -> list[dict]:
    """Case-insensitive substring search; ``category`` limits which sections are searched."""
    needle = (query or "").strip().lower()
    if not needle:
        return []
    repository = repository or CMSRepository()
    wanted = category or "all"
    hits: list[dict] = []

    if wanted in ("all", "news"):
        for article in NewsService(repository).published_articles():
            if _matches(needle, article.get("title"), article.get("excerpt"), article.get("category")):
                hits.append(_hit("News", article.get("title", ""), article.get("excerpt", ""),
                                 f"/news/{article.get('slug', '')}"))

    if wanted in ("all", "events"):
        for event in EventService(repository).published_events():
            if _matches(needle, event.get("title"), event.get("description"), event.get("category")):
                hits.append(_hit("Event", event.get("title", ""), event.get("description", ""),
                                 f"/events/{event.get('id', '')}"))

    if wanted in ("all", "sacraments"):
        for sacrament in SACRAMENTS:
            if _matches(needle, sacrament["name"], sacrament["description"], sacrament["details"]):
                hits.append(_hit("Sacrament", sacrament["name"], sacrament["description"],
                                 f"/the-sacraments/{sacrament['slug']}"))

    if wanted in ("all", "groups"):
        for groups in ParishGroupService(repository).active_groups().values():
            for group in groups:
                if _matches(needle, group.get("name"), group.get("description"), group.get("category")):
                    hits.append(_hit("Parish Group", group.get("name", ""), group.get("description", ""),
                                     "/parish-groups"))

    if wanted in ("all", "resources"):
        for article in knowledge_hub_service.search(needle):
            hits.append(_hit("Knowledge Hub", article["title"], article["excerpt"],
                             f"/knowledge-hub/{article['slug']}"))

    return hits
