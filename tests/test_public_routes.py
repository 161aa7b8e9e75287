"""
Page rendering through the public app with a temporary data directory.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from parish.app import app
from parish.services.collections import EventService, GalleryService, NewsService


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "/about-us",
        "/find-us",
        "/mass",
        "/the-sacraments",
        "/the-sacraments/baptism",
        "/the-sacraments/confession",
        "/the-sacraments/anointing-of-the-sick",
        "/news",
        "/events",
        "/events?past=true",
        "/parish-groups",
        "/gallery",
        "/staff",
        "/staff?language=Polish",
        "/streaming",
        "/knowledge-hub",
        "/podcasts",
        "/podcasts?q=krisz&category=Parish+Life",
        "/st-saviours-talks",
        "/st-saviours-talks?category=Scripture",
        "/weekly-newsletter",
        "/community-news",
        "/community-news?category=Community+Groups",
        "/community-news/st-bakhita-group",
        "/knowledge-hub?q=augustine",
        "/knowledge-hub/category/medieval-theology",
        "/knowledge-hub/peter-abelard-philosopher-love",
        "/contact-us",
        "/venue-hire",
        "/venue-hire?year=2025&month=1&venue=parish-hall",
        "/donate",
        "/safeguarding",
        "/st-saviours-primary-school",
        "/search",
        "/accessibility-statement",
        "/privacy-policy",
        "/cookie-policy",
    ],
)
def test_pages_render(client, path):
    resp = client.get(path)
    assert resp.status_code == 200, path
    assert "text/html" in resp.headers["content-type"]
    assert "St Saviour" in resp.text
    assert resp.cookies.get("csrf_token") or client.cookies.get("csrf_token")


def test_security_headers(client):
    resp = client.get("/")
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert "frame-src" in resp.headers["Content-Security-Policy"]
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_unknown_pages_use_the_404_template(client):
    for path in ("/no-such-page", "/news/missing", "/events/missing", "/the-sacraments/unknown",
                 "/knowledge-hub/missing", "/knowledge-hub/category/missing", "/gallery/missing"):
        resp = client.get(path)
        assert resp.status_code == 404, path
        assert "Page not found" in resp.text


def test_unknown_tracker_variant_is_404(client):
    assert client.get("/the-sacraments/baptism?variant=teen").status_code == 404


def test_tracker_state_comes_from_the_query_string(client):
    resp = client.get("/the-sacraments/baptism?variant=infant&done=registration")
    assert resp.status_code == 200
    assert "20%" in resp.text
    assert "Baptism Preparation Checklist" in resp.text


def test_published_content_is_listed(client, repository):
    article = NewsService(repository).create({"title": "Harvest Festival", "excerpt": "Thanks", "published": True})
    NewsService(repository).create({"title": "Hidden Draft"})
    event = EventService(repository).create({"title": "Quiz Night", "date": "2099-01-01", "published": True})
    album = GalleryService(repository).create({"title": "Easter Vigil", "published": True,
                                               "images": [{"url": "/img/a.jpg", "alt": "Candles"}]})

    news = client.get("/news").text
    assert "Harvest Festival" in news and "Hidden Draft" not in news
    assert client.get(f"/news/{article['slug']}").status_code == 200
    assert client.get("/news/hidden-draft").status_code == 404
    assert "Quiz Night" in client.get("/events").text
    assert client.get(f"/events/{event['id']}").status_code == 200
    assert "Candles" in client.get(f"/gallery/{album['id']}").text


def test_search_results_and_validation(client):
    resp = client.get("/search", params={"q": "baptism"})
    assert resp.status_code == 200
    assert "/the-sacraments/baptism" in resp.text
    resp = client.get("/search", params={"q": "b"})
    assert resp.status_code == 400
    assert "at least 2 characters" in resp.text


def test_qr_codes(client):
    resp = client.get("/qr/donate.png")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/png"
    assert resp.content.startswith(b"\x89PNG")
    assert client.get("/qr/other.png").status_code == 404


def test_maintenance_mode_redirects_pages_but_not_api(client, repository):
    settings = repository.get_website_settings()
    settings["website"]["maintenanceMode"] = True
    repository.save_website_settings(settings)

    resp = client.get("/news", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/maintenance"
    assert client.get("/maintenance").status_code == 503
    assert client.get("/api/mass-times").status_code == 200


def test_announcement_banner(client, repository):
    settings = repository.get_website_settings()
    settings["website"]["announcements"] = [
        {"id": "a", "title": "Parish AGM", "message": "Sunday after Mass", "type": "info", "active": True},
        {"id": "b", "title": "Old notice", "message": "", "type": "info", "active": False},
    ]
    repository.save_website_settings(settings)
    text = client.get("/").text
    assert "Parish AGM" in text
    assert "Old notice" not in text


def test_message_banner_is_escaped(client):
    resp = client.get("/", params={"message": "<script>x</script>"})
    assert "<script>x</script>" not in resp.text
    assert "&lt;script&gt;" in resp.text


def test_app_factories_return_the_module_apps():
    from parish import app_factory

    assert app_factory.create_app() is app_factory.public_app
    assert app_factory.create_admin_app() is app_factory.admin_app
    assert app_factory.public_app.title != app_factory.admin_app.title


@pytest.mark.parametrize(
    "query, month",
    [("year=10000", None), ("year=9999&month=12", 12), ("year=-3", None), ("year=1&month=1", 1), ("month=13", None)],
)
def test_venue_calendar_out_of_range_falls_back_to_current_year(client, query, month):
    from datetime import date

    from parish.services import venue_service

    today = date.today()
    resp = client.get(f"/venue-hire?{query}")
    assert resp.status_code == 200
    assert venue_service.month_title(today.year, month or today.month) in resp.text


def test_media_pages_filter_their_catalogues(client):
    resp = client.get("/podcasts", params={"q": "sr catherine"})
    assert "Prayer Life: Finding God in Daily Routine" in resp.text
    assert "Youth Voices" not in resp.text

    resp = client.get("/st-saviours-talks", params={"category": "Marian Devotion"})
    assert "Mary, Our Mother and Model" in resp.text
    assert "Living the Beatitudes Today" not in resp.text

    resp = client.get("/community-news", params={"category": "Parish Events"})
    assert "St John Paul II" in resp.text
    assert 'href="/community-news/st-bakhita-group"' not in resp.text


def test_weekly_newsletter_lists_issues_and_subscribes(client, repository):
    resp = client.get("/weekly-newsletter")
    assert "Parish Newsletter - 26th January 2025" in resp.text
    assert 'action="/newsletter"' in resp.text
    data = {"email": "reader@example.com", "consent": "1", "next": "/weekly-newsletter",
            "csrf_token": client.cookies.get("csrf_token")}
    resp = client.post("/newsletter", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/weekly-newsletter?message=")
    assert [s["email"] for s in repository.get_newsletter_subscribers()] == ["reader@example.com"]


def test_community_story_pages(client):
    resp = client.get("/community-news/st-bakhita-group")
    assert "Fr Kenneth Iwunna" in resp.text
    assert client.get("/community-news/pope-john-paul-ii-relics").status_code == 404
    assert client.get("/community-news/unknown").status_code == 404
