from __future__ import annotations

from datetime import date, timedelta

import pytest

from parish.core import mailer
from parish.domain.forms import (
    ContactForm,
    EventRegistrationForm,
    NewsletterForm,
    PrayerRequestForm,
    VenueEnquiryForm,
)
from parish.services.collections import EventService
from parish.services.errors import InvalidContentError, RecordNotFoundError
from parish.services.submission_service import SubmissionService


@pytest.fixture()
def outbox(monkeypatch):
    sent = []

    def fake_send(subject, to_email, html_body, text_body=None, reply_to=None):
        sent.append({"subject": subject, "to": to_email, "text": text_body, "reply_to": reply_to})
        return True

    monkeypatch.setattr(mailer, "send_email", fake_send)
    return sent


def test_newsletter_subscription_is_idempotent(repository):
    service = SubmissionService(repository)
    first = service.subscribe_newsletter(NewsletterForm(email="Jane@Example.com", consent=True))
    again = service.subscribe_newsletter(NewsletterForm(email="jane@example.com", firstName="Jane", consent=True))
    subscribers = repository.get_newsletter_subscribers()
    assert first.created is True
    assert again.created is False
    assert len(subscribers) == 1
    assert subscribers[0]["email"] == "jane@example.com"
    assert subscribers[0]["firstName"] == "Jane"
    assert first.message == "Successfully subscribed to newsletter"


def test_contact_message_goes_to_parish_office(repository, outbox):
    form = ContactForm(
        firstName="Mary", lastName="Jones", email="mary@example.com", subject="Wedding enquiry",
        message="We hope to marry next summer.", urgent=True,
    )
    result = SubmissionService(repository).send_contact_message(form)
    assert result.email_sent is True
    assert outbox[0]["subject"] == "[URGENT] Website enquiry: Wedding enquiry"
    assert outbox[0]["to"] == "parish@saintsaviours.org.uk"
    assert outbox[0]["reply_to"] == "mary@example.com"


def test_submission_is_accepted_without_smtp(repository):
    form = PrayerRequestForm(name="Tom", email="tom@example.com", prayerType="petition",
                             request="For peace in our families.", anonymous=True)
    result = SubmissionService(repository).send_prayer_request(form)
    assert result.email_sent is False
    assert "prayer request has been received" in result.message


def test_anonymous_prayer_hides_sender(repository, outbox):
    form = PrayerRequestForm(name="Tom", email="tom@example.com", prayerType="petition",
                             request="For peace in our families.", anonymous=True)
    SubmissionService(repository).send_prayer_request(form)
    assert "From: Anonymous" in outbox[0]["text"]
    assert "tom@example.com" not in outbox[0]["text"]
    assert outbox[0]["reply_to"] is None


def test_venue_enquiry_needs_a_known_venue(repository, outbox):
    when = (date.today() + timedelta(days=30)).isoformat()
    form = VenueEnquiryForm(name="Ann Lee", email="ann@example.com", venueId="ballroom", eventDate=when,
                            eventType="Party")
    with pytest.raises(InvalidContentError):
        SubmissionService(repository).send_venue_enquiry(form)
    assert outbox == []


def _registration(event_id, attendees=1):
    return EventRegistrationForm(firstName="Ann", lastName="Lee", email="ann@example.com",
                                 phone="020 8852 7411", eventId=event_id, numberOfAttendees=attendees)


def test_event_registration_rules(repository, outbox):
    events = EventService(repository)
    open_event = events.create({"title": "Retreat", "date": "2030-03-01", "published": True,
                                "registrationRequired": True, "maxAttendees": 2})
    walk_in = events.create({"title": "Coffee", "date": "2030-03-02", "published": True})
    service = SubmissionService(repository)

    assert service.register_for_event(_registration(open_event["id"], 2)).message == "You are registered for Retreat."
    with pytest.raises(InvalidContentError):
        service.register_for_event(_registration(open_event["id"], 3))
    with pytest.raises(InvalidContentError):
        service.register_for_event(_registration(walk_in["id"]))
    with pytest.raises(RecordNotFoundError):
        service.register_for_event(_registration("missing"))
