"""
Visitor submissions: newsletter sign-ups and messages for the parish office.

Newsletter subscribers are kept in newsletter.json. Every other form is
logged and e-mailed to PARISH_OFFICE_EMAIL; when SMTP is not configured the
submission is still accepted and ``email_sent`` is False.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import html
import logging
from typing import Optional

from parish.core import mailer
from parish.core.config import get_settings
from parish.core.utils import format_date
from parish.domain.forms import (
    ContactForm,
    EventRegistrationForm,
    MassIntentionForm,
    NewsletterForm,
    PrayerRequestForm,
    VenueEnquiryForm,
)
from parish.repositories.cms_repository import CMSRepository
from parish.services import venue_service
from parish.services.collections import EventService
from parish.services.errors import ContentSaveError, InvalidContentError

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    message: str
    email_sent: bool = False
    created: bool = False


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _rows_html(rows: list[tuple[str, object]]) -> str:
    cells = "".join(
        f"<tr><th align='left'>{html.escape(label)}</th><td>{html.escape(str(value))}</td></tr>"
        for label, value in rows
        if value not in (None, "")
    )
    return f"<table cellpadding='4'>{cells}</table>"


def _rows_text(rows: list[tuple[str, object]]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in rows if value not in (None, ""))


def _notify_office(subject: str, rows: list[tuple[str, object]], reply_to: Optional[str] = None) -> bool:
    to_email = get_settings().parish_office_email
    return mailer.send_email(
        subject,
        to_email,
        f"<h2>{html.escape(subject)}</h2>{_rows_html(rows)}",
        _rows_text(rows),
        reply_to=reply_to,
    )


class SubmissionService:
    def __init__(self, repository: Optional[CMSRepository] = None) -> None:
        self.repository = repository or CMSRepository()

    # ---------------------- newsletter ----------------------
    def subscribe_newsletter(self, form: NewsletterForm) -> SubmissionResult:
        email = form.email.lower()
        subscribers = self.repository.get_newsletter_subscribers()
        now = _now_iso()
        for subscriber in subscribers:
            if str(subscriber.get("email", "")).lower() == email:
                if form.first_name:
                    subscriber["firstName"] = form.first_name
                subscriber["consent"] = True
                subscriber["updatedAt"] = now
                created = False
                break
        else:
            subscribers.append(
                {"email": email, "firstName": form.first_name or "", "consent": True, "subscribedAt": now}
            )
            created = True
        if not self.repository.save_newsletter_subscribers(subscribers):
            raise ContentSaveError("Failed to save subscription")
        logger.info("Newsletter subscription %s (%s)", email, "new" if created else "refreshed")
        return SubmissionResult("Successfully subscribed to newsletter", created=created)

    # ---------------------- office notifications ----------------------
    def send_contact_message(self, form: ContactForm) -> SubmissionResult:
        name = f"{form.first_name} {form.last_name}"
        logger.info("Contact message from %s (urgent=%s)", form.email, form.urgent)
        prefix = "[URGENT] " if form.urgent else ""
        sent = _notify_office(
            f"{prefix}Website enquiry: {form.subject}",
            [
                ("Name", name),
                ("Email", form.email),
                ("Phone", form.phone),
                ("Preferred contact", form.preferred_contact),
                ("Subject", form.subject),
                ("Message", form.message),
            ],
            reply_to=form.email,
        )
        return SubmissionResult("Thank you for your message. We will be in touch soon.", email_sent=sent)

    def send_prayer_request(self, form: PrayerRequestForm) -> SubmissionResult:
        name = "Anonymous" if form.anonymous or not form.name else form.name
        logger.info("Prayer request received (%s)", form.prayer_type)
        sent = _notify_office(
            f"Prayer request: {form.prayer_type}",
            [
                ("From", name),
                ("Email", None if form.anonymous else form.email),
                ("Type", form.prayer_type),
                ("Share with community", "Yes" if form.share_with_community else "No"),
                ("Request", form.request),
            ],
            reply_to=None if form.anonymous else form.email,
        )
        return SubmissionResult("Your prayer request has been received. We will keep you in our prayers.", email_sent=sent)

    def send_venue_enquiry(self, form: VenueEnquiryForm) -> SubmissionResult:
        venue = venue_service.get_venue(form.venue_id)
        if venue is None:
            raise InvalidContentError("Please choose one of our venues")
        logger.info("Venue enquiry for %s on %s", venue["id"], form.event_date)
        sent = _notify_office(
            f"Venue hire enquiry: {venue['name']}",
            [
                ("Name", form.name),
                ("Email", form.email),
                ("Phone", form.phone),
                ("Venue", venue["name"]),
                ("Date", format_date(form.event_date)),
                ("Event type", form.event_type),
                ("Guests", form.guests),
                ("Message", form.message),
            ],
            reply_to=form.email,
        )
        return SubmissionResult("Thank you for your enquiry. Our parish office will contact you shortly.", email_sent=sent)

    def send_mass_intention(self, form: MassIntentionForm) -> SubmissionResult:
        logger.info("Mass intention request from %s", form.email)
        sent = _notify_office(
            f"Mass intention: {form.intention_for}",
            [
                ("Requested by", form.requested_by),
                ("Email", form.email),
                ("Phone", form.phone),
                ("Intention for", form.intention_for),
                ("Occasion", form.occasion_type),
                ("Preferred date", format_date(form.preferred_date) if form.preferred_date else None),
                ("Special instructions", form.special_instructions),
                ("Offering", f"£{form.donation:.2f}" if form.donation is not None else None),
            ],
            reply_to=form.email,
        )
        return SubmissionResult("Your Mass intention request has been received.", email_sent=sent)

    def register_for_event(self, form: EventRegistrationForm) -> SubmissionResult:
        event = EventService(self.repository).get_published(form.event_id)
        if not event.get("registrationRequired"):
            raise InvalidContentError("This event does not take registrations")
        max_attendees = event.get("maxAttendees")
        if max_attendees and form.number_of_attendees > int(max_attendees):
            raise InvalidContentError(f"This event is limited to {max_attendees} attendees")
        logger.info("Registration for event %s: %d attendee(s)", event["id"], form.number_of_attendees)
        emergency = form.emergency_contact
        sent = _notify_office(
            f"Event registration: {event.get('title', '')}",
            [
                ("Event", event.get("title")),
                ("Date", format_date(event.get("date"))),
                ("Name", f"{form.first_name} {form.last_name}"),
                ("Email", form.email),
                ("Phone", form.phone),
                ("Attendees", form.number_of_attendees),
                ("Special requirements", form.special_requirements),
                ("Emergency contact", f"{emergency.name} ({emergency.relationship}) {emergency.phone}" if emergency else None),
            ],
            reply_to=form.email,
        )
        return SubmissionResult(f"You are registered for {event.get('title', 'this event')}.", email_sent=sent)
