"""
Content admin API: CRUD, mass times, settings, seeding and uploads.
"""
from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from parish import admin_app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(admin_app, "UPLOADS_DIR", str(tmp_path / "uploads"))
    return TestClient(admin_app.app)


def _png_bytes(size=(40, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def test_dashboard_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "News articles" in resp.text


def test_news_crud(client, repository):
    resp = client.post("/api/news", json={"title": "Parish Fete", "readTime": 3, "published": True})
    assert resp.status_code == 201
    article = resp.json()
    assert article["slug"] == "parish-fete"
    assert article["readTime"] == 3

    resp = client.put(f"/api/news/{article['id']}", json={"title": "Summer Fete"})
    assert resp.status_code == 200
    assert resp.json()["slug"] == "summer-fete"
    assert resp.json()["published"] is True

    assert [a["title"] for a in client.get("/api/news").json()] == ["Summer Fete"]

    resp = client.delete(f"/api/news/{article['id']}")
    assert resp.json() == {"message": "Article deleted successfully"}
    assert repository.get_news_articles() == []


def test_collection_errors(client):
    assert client.post("/api/events", json={"title": "No date"}).status_code == 400
    assert client.post("/api/events", json=["not", "an", "object"]).status_code == 400
    assert client.post("/api/events", content=b"{broken", headers={"content-type": "application/json"}).status_code == 400
    resp = client.post("/api/events", json={"title": "Talk", "date": "2030-01-01", "maxAttendees": 0})
    assert resp.status_code == 400
    assert "maxAttendees" in resp.json()["error"]
    resp = client.put("/api/groups/missing", json={"name": "Choir"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Group not found"}
    assert client.delete("/api/gallery/missing").status_code == 404


def test_event_update_returns_the_updated_record(client):
    first = client.post("/api/events", json={"title": "A", "date": "2030-05-01"}).json()
    client.post("/api/events", json={"title": "B", "date": "2030-01-01"})
    resp = client.put(f"/api/events/{first['id']}", json={"location": "Parish Hall"})
    assert resp.json()["id"] == first["id"]
    assert resp.json()["location"] == "Parish Hall"


def test_foreign_origin_is_rejected(client):
    resp = client.post("/api/news", json={"title": "x"}, headers={"origin": "https://evil.example"})
    assert resp.status_code == 403
    resp = client.post("/api/news", json={"title": "x"}, headers={"origin": "http://localhost:8001"})
    assert resp.status_code == 201


def test_mass_times_endpoints(client):
    assert client.post("/api/mass-times").status_code == 201
    assert client.get("/api/mass-times").json()[0]["day"] == "Sunday"
    resp = client.put("/api/mass-times", json=[{"day": "Sunday", "services": [{"time": "9:00 AM", "type": "Mass"}]}])
    assert resp.status_code == 200
    assert resp.json() == [{"day": "Sunday", "services": [{"time": "9:00 AM", "type": "Mass", "description": ""}]}]
    resp = client.put("/api/mass-times", json={"day": "Sunday"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid data structure"}


def test_settings_endpoints(client):
    document = client.get("/api/settings").json()
    document["website"]["maintenanceMode"] = True
    assert client.put("/api/settings", json=document).status_code == 200
    assert client.get("/api/settings").json()["website"]["maintenanceMode"] is True
    assert client.put("/api/settings", json=[1, 2]).status_code == 400
    assert "Maintenance mode is ON" in client.get("/").text


def test_init_seeds_once(client):
    body = client.post("/api/init").json()
    assert body["success"] is True
    assert body["message"] == "CMS data initialized successfully"
    assert "news.json" in body["seeded"]
    assert client.post("/api/init").json()["seeded"] == []


def test_upload_resizes_and_stores_jpeg(client, tmp_path):
    resp = client.post("/api/uploads", files={"file": ("photo.png", _png_bytes((2400, 1200)), "image/png")})
    assert resp.status_code == 201
    url = resp.json()["url"]
    assert url.startswith("/static/uploads/") and "?v=" in url
    stored = tmp_path / "uploads" / url.split("/")[-1].split("?")[0]
    with Image.open(stored) as img:
        assert img.format == "JPEG"
        assert max(img.size) == 1600


def test_upload_rejections(client):
    assert client.post("/api/uploads", files={"file": ("a.png", b"", "image/png")}).status_code == 400
    assert client.post("/api/uploads", files={"file": ("a.gif", b"GIF89a....", "image/gif")}).status_code == 400
    assert client.post("/api/uploads", files={"file": ("a.png", b"\xff\xd8\xff fake", "image/png")}).status_code == 400


def test_unknown_routes_use_the_error_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
    resp = client.patch("/api/news")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


def _editor_token(client, path="/content/news"):
    assert client.get(path).status_code == 200
    return client.cookies.get("csrf_token")


def test_editor_pages_render(client):
    for path in ("/content/news", "/content/events/new", "/content/groups", "/content/gallery/new",
                 "/content/mass-times", "/content/settings", "/content/uploads"):
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert "name='csrf_token'" in resp.text
    assert client.get("/content/sermons").status_code == 404


def test_news_editor_create_edit_delete(client, repository):
    token = _editor_token(client)
    form = {"csrf_token": token, "title": "Harvest Supper", "content": "Bring a dish.",
            "readTime": "", "published": ["0", "1"]}
    resp = client.post("/content/news/new", data=form, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/content/news?ok=")
    article = repository.get_news_articles()[0]
    assert article["slug"] == "harvest-supper"
    assert article["published"] is True

    page = client.get(f"/content/news/{article['id']}")
    assert "Harvest Supper" in page.text

    form = {"csrf_token": token, "title": "Harvest Supper", "excerpt": "", "content": "Bring a dish.",
            "category": "Events", "published": "0"}
    resp = client.post(f"/content/news/{article['id']}", data=form, follow_redirects=False)
    assert resp.status_code == 303
    updated = repository.get_news_articles()[0]
    assert updated["category"] == "Events"
    assert updated["published"] is False

    listing = client.get("/content/news")
    assert "Harvest Supper" in listing.text

    resp = client.post(f"/content/news/{article['id']}/delete", data={"csrf_token": token}, follow_redirects=False)
    assert resp.status_code == 303
    assert repository.get_news_articles() == []


def test_editor_rerenders_invalid_input(client, repository):
    token = _editor_token(client, "/content/events")
    resp = client.post("/content/events/new", data={"csrf_token": token, "title": "Quiz Night", "date": ""})
    assert resp.status_code == 400
    assert "Date is required" in resp.text
    assert "Quiz Night" in resp.text
    resp = client.post("/content/events/new",
                       data={"csrf_token": token, "title": "Quiz", "date": "2030-02-01", "maxAttendees": "0"})
    assert resp.status_code == 400
    assert "aria-invalid" in resp.text
    assert repository.get_events() == []


def test_editor_posts_need_the_csrf_token(client, repository):
    _editor_token(client)
    assert client.post("/content/news/new", data={"title": "No token"}).status_code == 403
    assert client.post("/content/news/new", data={"title": "Bad", "csrf_token": "x" * 40}).status_code == 403
    assert repository.get_news_articles() == []


def test_gallery_editor_keeps_image_ids(client, repository):
    token = _editor_token(client, "/content/gallery")
    images = "/static/uploads/a.jpg | Procession | Palm Sunday\n/static/uploads/b.jpg"
    client.post("/content/gallery/new", data={"csrf_token": token, "title": "Holy Week", "images": images})
    album = repository.get_gallery_albums()[0]
    assert [i["caption"] for i in album["images"]] == ["Procession", ""]
    first_id = album["images"][0]["id"]

    images = "/static/uploads/a.jpg | Palm procession"
    client.post(f"/content/gallery/{album['id']}", data={"csrf_token": token, "title": "Holy Week", "images": images})
    album = repository.get_gallery_albums()[0]
    assert album["images"] == [
        {"id": first_id, "url": "/static/uploads/a.jpg", "caption": "Palm procession", "alt": ""}
    ]


def test_mass_times_editor(client, repository):
    token = _editor_token(client, "/content/mass-times")
    data = {"csrf_token": token, "day-Sunday": "10:00 AM | Sunday Mass | Family Mass\n6:00 PM | Sunday Mass",
            "day-Monday": ""}
    resp = client.post("/content/mass-times", data=data, follow_redirects=False)
    assert resp.status_code == 303
    schedule = repository.get_mass_times()
    assert [d["day"] for d in schedule] == ["Sunday", "Monday"]
    assert schedule[0]["services"][0]["description"] == "Family Mass"

    resp = client.post("/content/mass-times", data={"csrf_token": token, "day-Sunday": "noon-ish | Mass"})
    assert resp.status_code == 400
    assert "unrecognised time" in resp.text
    assert len(repository.get_mass_times()[0]["services"]) == 2

    resp = client.post("/content/mass-times/reset", data={"csrf_token": token}, follow_redirects=False)
    assert resp.status_code == 303
    assert len(repository.get_mass_times()) == 7


def test_settings_editor(client, repository):
    token = _editor_token(client, "/content/settings")
    data = {
        "csrf_token": token,
        "contact.phone": "020 8852 7585",
        "website.maintenanceMode": ["0", "1"],
        "features.newsletter": "0",
        "announcement_rows": "1",
        "announcements-0-title": "Church closed",
        "announcements-0-message": "No mass on Monday.",
        "announcements-0-type": "warning",
        "announcements-0-showUntil": "2030-01-01",
        "announcements-0-active": ["0", "1"],
    }
    resp = client.post("/content/settings", data=data, follow_redirects=False)
    assert resp.status_code == 303
    saved = repository.get_website_settings()
    assert saved["contact"]["phone"] == "020 8852 7585"
    assert saved["website"]["maintenanceMode"] is True
    assert saved["features"]["newsletter"] is False
    [announcement] = saved["website"]["announcements"]
    assert announcement["id"].startswith("ann-")
    assert announcement["type"] == "warning"
    assert announcement["active"] is True

    data.update({"announcements-0-id": announcement["id"], "announcements-0-showUntil": "next week"})
    resp = client.post("/content/settings", data=data)
    assert resp.status_code == 400
    assert "Show until must be a date" in resp.text

    data.update({"announcements-0-showUntil": "", "announcements-0-remove": "1"})
    assert client.post("/content/settings", data=data, follow_redirects=False).status_code == 303
    assert repository.get_website_settings()["website"]["announcements"] == []


def test_upload_editor(client, tmp_path):
    token = _editor_token(client, "/content/uploads")
    resp = client.post("/content/uploads", data={"csrf_token": token},
                       files={"file": ("photo.png", _png_bytes(), "image/png")})
    assert resp.status_code == 201
    assert "/static/uploads/" in resp.text
    assert len(list((tmp_path / "uploads").iterdir())) == 1

    resp = client.post("/content/uploads", data={"csrf_token": token},
                       files={"file": ("notes.txt", b"hello", "text/plain")}, follow_redirects=False)
    assert resp.status_code == 303
    assert "error=" in resp.headers["location"]
