from __future__ import annotations

from datetime import date

import pytest

from parish.services.collections import EventService, GalleryService, NewsService, ParishGroupService
from parish.services.errors import InvalidContentError, RecordNotFoundError


def test_news_create_fills_defaults_and_prepends(repository):
    service = NewsService(repository, today=lambda: date(2025, 5, 4))
    first = service.create({"title": "First Post"})
    second = service.create({"title": "Second Post!", "content": "word " * 450, "published": True})

    assert first["slug"] == "first-post"
    assert first["date"] == "2025-05-04"
    assert first["author"] == "Parish Office"
    assert first["readTime"] == 1
    assert first["published"] is False
    assert second["readTime"] == 3
    assert [a["id"] for a in repository.get_news_articles()] == [second["id"], first["id"]]


def test_create_ignores_client_id_and_requires_fields(repository):
    service = NewsService(repository)
    record = service.create({"id": "chosen", "title": "Hello"})
    assert record["id"] != "chosen"
    with pytest.raises(InvalidContentError):
        service.create({"excerpt": "no title"})
    with pytest.raises(InvalidContentError):
        EventService(repository).create({"title": "No date"})


def test_news_update_recomputes_slug_and_keeps_id(repository):
    service = NewsService(repository)
    record = service.create({"title": "Old Title"})
    updated = service.update(record["id"], {"id": "hijack", "title": "New Title"})
    assert updated["id"] == record["id"]
    assert updated["slug"] == "new-title"


def test_update_and_delete_unknown_record(repository):
    service = ParishGroupService(repository)
    with pytest.raises(RecordNotFoundError):
        service.update("missing", {"name": "x"})
    with pytest.raises(RecordNotFoundError):
        service.delete("missing")


def test_delete_removes_record(repository):
    service = GalleryService(repository)
    album = service.create({"title": "Easter"})
    service.delete(album["id"])
    assert repository.get_gallery_albums() == []


def test_published_articles_are_newest_first(repository):
    service = NewsService(repository)
    service.create({"title": "Old", "date": "2024-01-01", "published": True, "category": "Parish"})
    service.create({"title": "Draft", "date": "2025-06-01"})
    service.create({"title": "New", "date": "2025-01-01", "published": True, "category": "Liturgy"})
    assert [a["title"] for a in service.published_articles()] == ["New", "Old"]
    assert service.categories() == ["Liturgy", "Parish"]
    assert service.get_by_slug("old")["title"] == "Old"
    with pytest.raises(RecordNotFoundError):
        service.get_by_slug("draft")


def test_events_sorted_by_date_and_filtered(repository):
    service = EventService(repository)
    service.create({"title": "Later", "date": "2030-05-01", "category": "Social", "published": True})
    service.create({"title": "Sooner", "date": "2030-01-01", "category": "Mass", "published": True})
    service.create({"title": "Past", "date": "2020-01-01", "category": "Mass", "published": True})
    service.create({"title": "Hidden", "date": "2030-02-01", "category": "Mass"})

    assert [e["title"] for e in repository.get_events()] == ["Past", "Sooner", "Hidden", "Later"]
    assert [e["title"] for e in service.upcoming_events(today=date(2025, 1, 1))] == ["Sooner", "Later"]
    assert [e["title"] for e in service.filter_events("mass")] == ["Past", "Sooner"]
    assert [e["title"] for e in service.filter_events(limit=1)] == ["Past"]
    assert service.filter_events(limit=0) == []


def test_event_defaults(repository):
    event = EventService(repository).create({"title": "Talk", "date": "2030-01-01"})
    assert event["duration"] == "1 hour"
    assert event["registrationRequired"] is False
    assert event["published"] is False


def test_unpublished_event_is_not_public(repository):
    service = EventService(repository)
    event = service.create({"title": "Draft", "date": "2030-01-01"})
    with pytest.raises(RecordNotFoundError):
        service.get_published(event["id"])


def test_groups_grouped_by_category(repository):
    service = ParishGroupService(repository)
    service.create({"name": "Choir", "category": "Music"})
    service.create({"name": "SVP", "category": "Outreach"})
    service.create({"name": "Old Choir", "category": "Music", "active": False})
    service.create({"name": "Loose"})
    grouped = service.active_groups()
    assert list(grouped) == ["Music", "Outreach", "Other"]
    assert [g["name"] for g in grouped["Music"]] == ["Choir"]


def test_gallery_featured_and_published(repository):
    service = GalleryService(repository)
    service.create({"title": "A", "date": "2024-01-01", "published": True, "featured": True})
    service.create({"title": "B", "date": "2025-01-01", "published": True})
    service.create({"title": "C", "date": "2026-01-01"})
    assert [a["title"] for a in service.published_albums()] == ["B", "A"]
    assert [a["title"] for a in service.featured_albums()] == ["A"]
