from __future__ import annotations

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from parish.domain.forms import (
    ContactForm,
    EventRegistrationForm,
    MassIntentionForm,
    NewsletterForm,
    PrayerRequestForm,
    SearchForm,
    VenueEnquiryForm,
    format_form_errors,
    is_business_hours,
    is_future_date,
)


def _errors(model, **payload):
    with pytest.raises(ValidationError) as exc:
        model(**payload)
    return format_form_errors(exc.value)


def test_newsletter_requires_consent():
    errors = _errors(NewsletterForm, email="jane@example.com")
    assert errors == {"consent": "You must agree to receive newsletters"}
    form = NewsletterForm(email="jane@example.com", firstName="", consent="1")
    assert form.first_name is None
    assert form.consent is True


def test_newsletter_rejects_bad_email():
    errors = _errors(NewsletterForm, email="not-an-email", consent=True)
    assert errors["email"] == "Please enter a valid email address"


def test_contact_form_accepts_camel_case_html_fields():
    form = ContactForm(
        firstName="Mary", lastName="O'Neill", email="mary@example.com", phone="",
        subject="Baptism enquiry", message="We would like to book a baptism.", preferredContact="Phone",
    )
    assert form.phone is None
    assert form.preferred_contact == "phone"
    assert form.urgent is False


def test_contact_form_messages():
    errors = _errors(
        ContactForm, firstName="M", lastName="Smith2", email="x@example.com",
        subject="Hi", message="short", preferredContact="fax",
    )
    assert errors["firstName"] == "Name must be at least 2 characters"
    assert errors["lastName"] == "Name contains invalid characters"
    assert errors["subject"] == "Subject must be at least 5 characters"
    assert errors["message"] == "Message must be at least 10 characters"
    assert errors["preferredContact"] == "Please select a preferred contact method"


def test_prayer_request_may_be_anonymous():
    form = PrayerRequestForm(prayerType="Healing", request="Please pray for my mother.", anonymous="1")
    assert form.name is None and form.email is None
    assert form.prayer_type == "healing"
    errors = _errors(PrayerRequestForm, prayerType="wish", request="x")
    assert set(errors) == {"prayerType", "request"}


def test_mass_intention_donation_must_be_positive():
    base = dict(requestedBy="John Smith", email="john@example.com", intentionFor="Mary Smith", occasionType="deceased")
    assert MassIntentionForm(**base, donation="").donation is None
    assert MassIntentionForm(**base, donation="10").donation == 10.0
    errors = _errors(MassIntentionForm, **base, donation="-5")
    assert errors["donation"] == "Donation amount must be positive"
    for amount in ("nan", "inf", "-inf"):
        assert _errors(MassIntentionForm, **base, donation=amount)["donation"] == "Please enter a valid donation amount"


def test_event_registration_limits_and_nested_emergency_contact():
    base = dict(firstName="Ann", lastName="Lee", email="ann@example.com", phone="020 8852 7411", eventId="e1")
    assert EventRegistrationForm(**base).number_of_attendees == 1
    errors = _errors(EventRegistrationForm, **base, numberOfAttendees="11")
    assert errors["numberOfAttendees"] == "Maximum 10 attendees per registration"
    errors = _errors(EventRegistrationForm, **base, emergencyContact={"name": "B", "phone": "123", "relationship": "x"})
    assert set(errors) == {"emergencyContact.name", "emergencyContact.phone", "emergencyContact.relationship"}


def test_venue_enquiry_rejects_past_dates():
    base = dict(name="Ann Lee", email="ann@example.com", venueId="parish-hall", eventType="Birthday party")
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    assert VenueEnquiryForm(**base, eventDate=tomorrow, guests="40").guests == 40
    errors = _errors(VenueEnquiryForm, **base, eventDate="2000-01-01")
    assert errors["eventDate"] == "Please choose a date from today onwards"


def test_search_form():
    assert SearchForm(query="  mass ").query == "mass"
    errors = _errors(SearchForm, query="m", category="everything")
    assert errors["query"] == "Search query must be at least 2 characters"
    assert errors["category"] == "Please choose a valid category"


def test_date_and_time_helpers():
    today = date(2025, 1, 10)
    assert is_future_date(today, today) is True
    assert is_future_date(date(2025, 1, 9), today) is False
    assert is_business_hours("09:00") is True
    assert is_business_hours("17:00") is True
    assert is_business_hours("17:01") is False
    assert is_business_hours("lunch") is False
