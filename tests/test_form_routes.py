"""
Form posts: CSRF, honeypot, validation re-render, rate limits and redirects.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from parish.app import app
from parish.core import mailer
from parish.services.collections import EventService


@pytest.fixture()
def outbox(monkeypatch):
    sent = []
    monkeypatch.setattr(mailer, "send_email", lambda subject, *args, **kwargs: sent.append(subject) or True)
    return sent


@pytest.fixture()
def client():
    c = TestClient(app)
    c.get("/contact-us")
    return c


def _token(client) -> str:
    return client.cookies.get("csrf_token")


CONTACT = {
    "firstName": "Mary",
    "lastName": "Jones",
    "email": "mary@example.com",
    "subject": "Baptism enquiry",
    "message": "We would like to arrange a baptism.",
    "preferredContact": "email",
}


def test_contact_form_redirects_with_message(client, outbox):
    resp = client.post("/contact-us", data={**CONTACT, "csrf_token": _token(client)}, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/contact-us?message=")
    assert outbox == ["Website enquiry: Baptism enquiry"]


def test_missing_or_wrong_csrf_token_is_rejected(client, outbox):
    assert client.post("/contact-us", data=CONTACT).status_code == 403
    assert client.post("/contact-us", data={**CONTACT, "csrf_token": "x" * 40}).status_code == 403
    assert outbox == []


def test_cross_origin_post_is_rejected(client):
    resp = client.post("/contact-us", data={**CONTACT, "csrf_token": _token(client)},
                       headers={"origin": "https://evil.example"})
    assert resp.status_code == 403


def test_invalid_contact_form_is_rerendered(client, outbox):
    data = {**CONTACT, "firstName": "M", "csrf_token": _token(client)}
    resp = client.post("/contact-us", data=data)
    assert resp.status_code == 400
    assert "Name must be at least 2 characters" in resp.text
    assert 'value="mary@example.com"' in resp.text
    assert outbox == []


def test_honeypot_submissions_are_dropped(client, outbox):
    data = {**CONTACT, "website": "http://spam.example", "csrf_token": _token(client)}
    resp = client.post("/contact-us", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert outbox == []


def test_contact_form_is_rate_limited(client, outbox):
    data = {**CONTACT, "csrf_token": _token(client)}
    codes = [client.post("/contact-us", data=data, follow_redirects=False).status_code for _ in range(6)]
    assert codes == [303] * 5 + [429]


def test_newsletter_signup_returns_to_page(client, repository):
    data = {"email": "reader@example.com", "consent": "1", "next": "/news", "csrf_token": _token(client)}
    resp = client.post("/newsletter", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/news?message=")
    assert repository.get_newsletter_subscribers()[0]["email"] == "reader@example.com"


def test_newsletter_ignores_offsite_next(client):
    data = {"email": "reader@example.com", "consent": "1", "next": "//evil.example", "csrf_token": _token(client)}
    resp = client.post("/newsletter", data=data, follow_redirects=False)
    assert resp.headers["location"].startswith("/?message=")


def test_newsletter_without_consent(client, repository):
    data = {"email": "reader@example.com", "csrf_token": _token(client)}
    resp = client.post("/newsletter", data=data)
    assert resp.status_code == 400
    assert "You must agree to receive newsletters" in resp.text
    assert repository.get_newsletter_subscribers() == []


def test_disabled_feature_hides_form(client, repository):
    settings = repository.get_website_settings()
    settings["features"]["prayerRequests"] = False
    repository.save_website_settings(settings)
    data = {"prayerType": "petition", "request": "Please pray for us all.", "csrf_token": _token(client)}
    assert client.post("/prayer-requests", data=data).status_code == 404


def test_prayer_request(client, outbox):
    data = {"prayerType": "healing", "request": "For my father in hospital.", "anonymous": "1",
            "csrf_token": _token(client)}
    resp = client.post("/prayer-requests", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert outbox == ["Prayer request: healing"]


def test_mass_intention_errors_render_mass_page(client):
    data = {"requestedBy": "John Smith", "email": "john@example.com", "intentionFor": "Mary",
            "occasionType": "party", "csrf_token": _token(client)}
    resp = client.post("/mass-intentions", data=data)
    assert resp.status_code == 400
    assert "Please select an occasion type" in resp.text
    assert "Weekly Mass Schedule" in resp.text


def test_venue_enquiry_unknown_venue(client, outbox):
    data = {"name": "Ann Lee", "email": "ann@example.com", "venueId": "ballroom", "eventDate": "2099-01-01",
            "eventType": "Party", "guests": "20", "csrf_token": _token(client)}
    resp = client.post("/venue-hire/enquiry", data=data)
    assert resp.status_code == 400
    assert "Please choose one of our venues" in resp.text
    assert outbox == []


def test_event_registration_flow(client, repository, outbox):
    event = EventService(repository).create({"title": "Lent Retreat", "date": "2099-03-01", "published": True,
                                             "registrationRequired": True, "maxAttendees": 4})
    page = client.get(f"/events/{event['id']}")
    assert 'action="/events/%s/register"' % event["id"] in page.text

    data = {"firstName": "Ann", "lastName": "Lee", "email": "ann@example.com", "phone": "020 8852 7411",
            "numberOfAttendees": "2", "emergencyName": "", "csrf_token": _token(client)}
    resp = client.post(f"/events/{event['id']}/register", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"].startswith(f"/events/{event['id']}?message=")
    assert outbox == ["Event registration: Lent Retreat"]

    data["numberOfAttendees"] = "5"
    resp = client.post(f"/events/{event['id']}/register", data=data)
    assert resp.status_code == 400
    assert "limited to 4 attendees" in resp.text


def test_event_registration_for_unknown_event(client):
    data = {"firstName": "Ann", "csrf_token": _token(client)}
    assert client.post("/events/missing/register", data=data).status_code == 404


def test_accessibility_preferences_cookie(client):
    data = {"font_size": "150", "high_contrast": ["0", "1"], "reduced_motion": "0", "focus_indicators": "0",
            "next": "/mass", "csrf_token": _token(client)}
    resp = client.post("/accessibility", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/mass"
    assert "a11y_prefs" in resp.headers["set-cookie"]

    page = client.get("/mass")
    assert 'class="high-contrast"' in page.text
    assert "--a11y-font-scale: 1.5" in page.text

    resp = client.post("/accessibility", data={"reset": "1", "csrf_token": _token(client)}, follow_redirects=False)
    assert resp.status_code == 303
    assert 'class="focus-visible"' in client.get("/").text


def test_accessibility_defaults_clear_the_cookie(client):
    client.post("/accessibility", data={"font_size": "200", "csrf_token": _token(client)})
    assert client.cookies.get("a11y_prefs")
    data = {"font_size": "100", "line_height": "1.6", "letter_spacing": "0.0", "high_contrast": "0",
            "reduced_motion": "0", "focus_indicators": ["0", "1"], "csrf_token": _token(client)}
    resp = client.post("/accessibility", data=data, follow_redirects=False)
    assert resp.status_code == 303
    assert client.cookies.get("a11y_prefs") is None
