"""
Validation rules for the public forms.

Models accept both snake_case (HTML forms) and camelCase (JSON clients) field
names. Messages are written for visitors, and ``format_form_errors`` turns a
ValidationError into a ``{field: message}`` map for re-rendering a form.
"""
from __future__ import annotations

from datetime import date
import math
import re
from typing import Annotated, Callable, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

_NAME_RE = re.compile(r"^[a-zA-Z\s'-]+$")
_PHONE_RE = re.compile(r"^[\d+\-\s()]+$")


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _name(value: str) -> str:
    value = value.strip()
    if len(value) < 2:
        raise ValueError("Name must be at least 2 characters")
    if len(value) > 50:
        raise ValueError("Name must not exceed 50 characters")
    if not _NAME_RE.match(value):
        raise ValueError("Name contains invalid characters")
    return value


def _phone(value: str) -> str:
    value = value.strip()
    if len(value) < 10:
        raise ValueError("Phone number must be at least 10 digits")
    if len(value) > 15:
        raise ValueError("Phone number must not exceed 15 digits")
    if not _PHONE_RE.match(value):
        raise ValueError("Please enter a valid phone number")
    return value


def _email(value: str) -> str:
    try:
        return validate_email(value.strip(), check_deliverability=False).normalized
    except EmailNotValidError:
        raise ValueError("Please enter a valid email address")


def _text(label: str, min_length: int = 0, max_length: int | None = None) -> Callable[[str], str]:
    def check(value: str) -> str:
        value = value.strip()
        if len(value) < min_length:
            raise ValueError(f"{label} must be at least {min_length} characters")
        if max_length is not None and len(value) > max_length:
            raise ValueError(f"{label} must not exceed {max_length} characters")
        return value

    return check


def _choice(options: tuple[str, ...], message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        value = value.strip().lower()
        if value not in options:
            raise ValueError(message)
        return value

    return check


Name = Annotated[str, AfterValidator(_name)]
Phone = Annotated[str, AfterValidator(_phone)]
Email = Annotated[str, AfterValidator(_email)]
OptionalName = Annotated[Optional[Name], BeforeValidator(_blank_to_none)]
OptionalPhone = Annotated[Optional[Phone], BeforeValidator(_blank_to_none)]
OptionalEmail = Annotated[Optional[Email], BeforeValidator(_blank_to_none)]

PRAYER_TYPES = ("thanksgiving", "petition", "intercession", "healing", "other")
OCCASION_TYPES = ("deceased", "living", "anniversary", "birthday", "wedding", "other")
CONTACT_METHODS = ("email", "phone")
SEARCH_CATEGORIES = ("all", "events", "news", "sacraments", "groups", "resources")


class FormModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class NewsletterForm(FormModel):
    email: Email
    first_name: OptionalName = None
    consent: bool = Field(False, validate_default=True)

    @field_validator("consent")
    @classmethod
    def _must_consent(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must agree to receive newsletters")
        return value


class ContactForm(FormModel):
    first_name: Name
    last_name: Name
    email: Email
    phone: OptionalPhone = None
    subject: Annotated[str, AfterValidator(_text("Subject", 5, 100))]
    message: Annotated[str, AfterValidator(_text("Message", 10, 1000))]
    preferred_contact: Annotated[
        str, AfterValidator(_choice(CONTACT_METHODS, "Please select a preferred contact method"))
    ] = "email"
    urgent: bool = False


class PrayerRequestForm(FormModel):
    name: OptionalName = None
    email: OptionalEmail = None
    prayer_type: Annotated[str, AfterValidator(_choice(PRAYER_TYPES, "Please select a prayer type"))]
    request: Annotated[str, AfterValidator(_text("Prayer request", 10, 500))]
    anonymous: bool = False
    share_with_community: bool = False


class MassIntentionForm(FormModel):
    requested_by: Name
    email: Email
    phone: OptionalPhone = None
    intention_for: Annotated[str, AfterValidator(_text("Intention name", 2, 100))]
    occasion_type: Annotated[str, AfterValidator(_choice(OCCASION_TYPES, "Please select an occasion type"))]
    preferred_date: Annotated[Optional[date], BeforeValidator(_blank_to_none)] = None
    special_instructions: Annotated[
        Optional[Annotated[str, AfterValidator(_text("Special instructions", 0, 200))]],
        BeforeValidator(_blank_to_none),
    ] = None
    donation: Annotated[Optional[float], BeforeValidator(_blank_to_none)] = None

    @field_validator("donation")
    @classmethod
    def _positive_donation(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            raise ValueError("Please enter a valid donation amount")
        if value is not None and value < 0:
            raise ValueError("Donation amount must be positive")
        return value


class EmergencyContact(FormModel):
    name: Name
    phone: Phone
    relationship: Annotated[str, AfterValidator(_text("Relationship", 2))]


class EventRegistrationForm(FormModel):
    first_name: Name
    last_name: Name
    email: Email
    phone: Phone
    event_id: Annotated[str, AfterValidator(_text("Event ID", 1))]
    number_of_attendees: int = 1
    special_requirements: Annotated[
        Optional[Annotated[str, AfterValidator(_text("Special requirements", 0, 300))]],
        BeforeValidator(_blank_to_none),
    ] = None
    emergency_contact: Optional[EmergencyContact] = None

    @field_validator("number_of_attendees")
    @classmethod
    def _attendees_range(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Must have at least 1 attendee")
        if value > 10:
            raise ValueError("Maximum 10 attendees per registration")
        return value


class VenueEnquiryForm(FormModel):
    name: Name
    email: Email
    phone: OptionalPhone = None
    venue_id: Annotated[str, AfterValidator(_text("Venue", 1))]
    event_date: date
    event_type: Annotated[str, AfterValidator(_text("Event type", 2, 100))]
    guests: int = 1
    message: Annotated[
        Optional[Annotated[str, AfterValidator(_text("Message", 0, 1000))]],
        BeforeValidator(_blank_to_none),
    ] = None

    @field_validator("event_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if not is_future_date(value):
            raise ValueError("Please choose a date from today onwards")
        return value

    @field_validator("guests")
    @classmethod
    def _at_least_one_guest(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Please enter the expected number of guests")
        return value


class SearchForm(FormModel):
    query: Annotated[str, AfterValidator(_text("Search query", 2, 100))]
    category: Annotated[
        str, AfterValidator(_choice(SEARCH_CATEGORIES, "Please choose a valid category"))
    ] = "all"


def format_form_errors(exc: ValidationError) -> dict[str, str]:
    """Map dotted field paths to the first message reported for them."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.setdefault(field, message)
    return errors


def is_future_date(value: date, today: date | None = None) -> bool:
    """True for today or any later day."""
    return value >= (today or date.today())


def is_business_hours(value: str) -> bool:
    """'HH:MM' between 09:00 and 17:00 inclusive."""
    try:
        hours, minutes = (int(part) for part in value.split(":", 1))
    except ValueError:
        return False
    total = hours * 60 + minutes
    return 9 * 60 <= total <= 17 * 60
