"""
HTML form posts. Every handler is rate limited and CSRF checked before it
looks at the payload; a filled honeypot is accepted silently and dropped.
Invalid input re-renders the page with field errors (400); success redirects
back with a ``message`` banner (303).
"""
from __future__ import annotations

import logging
from datetime import date
from urllib.parse import quote_plus

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from parish.core import csrf
from parish.core.config import get_settings
from parish.core.rate_limiter import limit_form
from parish.domain.forms import (
    ContactForm,
    EventRegistrationForm,
    MassIntentionForm,
    NewsletterForm,
    PrayerRequestForm,
    VenueEnquiryForm,
    format_form_errors,
)
from parish.repositories.cms_repository import CMSRepository
from parish.routers import pages
from parish.routers.layout import render
from parish.services.accessibility_service import COOKIE_MAX_AGE, COOKIE_NAME, AccessibilityPreferences
from parish.services.collections import EventService
from parish.services.content_service import ContentService
from parish.services.errors import InvalidContentError, RecordNotFoundError
from parish.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["forms"])

_SKIP_FIELDS = {"csrf_token", csrf.HONEYPOT_FIELD, "next"}
EMERGENCY_FIELDS = {"emergencyName": "name", "emergencyPhone": "phone", "emergencyRelationship": "relationship"}


async def _read_form(request: Request, scope: str):
    limit_form(request, scope)
    form = await request.form()
    csrf.validate_csrf(request, form.get("csrf_token"))
    return form


def _payload(form) -> dict:
    return {key: value for key, value in form.items() if key not in _SKIP_FIELDS and isinstance(value, str)}


def _safe_next(value, default: str) -> str:
    target = (value or "").strip()
    if target.startswith("/") and not target.startswith("//"):
        return target
    return default


def _redirect(path: str, message: str) -> RedirectResponse:
    sep = "&" if "?" in path else "?"
    return RedirectResponse(f"{path}{sep}message={quote_plus(message)}", status_code=303)


def _require_feature(content: ContentService, name: str) -> None:
    if not content.is_feature_enabled(name):
        raise HTTPException(404, "This form is not available")


def _is_bot(form, scope: str) -> bool:
    if csrf.is_bot_submission(form.get(csrf.HONEYPOT_FIELD)):
        logger.warning("Honeypot triggered on %s form", scope)
        return True
    return False


# ---------------------- newsletter ----------------------
@router.post("/newsletter")
async def newsletter(request: Request):
    form = await _read_form(request, "newsletter")
    content = ContentService()
    _require_feature(content, "newsletter")
    back = _safe_next(form.get("next"), "/")
    if _is_bot(form, "newsletter"):
        return _redirect(back, "Successfully subscribed to newsletter")
    payload = _payload(form)
    try:
        data = NewsletterForm(**payload)
    except ValidationError as exc:
        context = {"form": payload, "errors": format_form_errors(exc), "next": back}
        return render(request, "newsletter.html", context, status_code=400, content=content)
    result = SubmissionService().subscribe_newsletter(data)
    return _redirect(back, result.message)


# ---------------------- contact & prayer ----------------------
@router.post("/contact-us")
async def contact_us(request: Request):
    form = await _read_form(request, "contact")
    if _is_bot(form, "contact"):
        return _redirect("/contact-us", "Thank you for your message. We will be in touch soon.")
    payload = _payload(form)
    try:
        data = ContactForm(**payload)
    except ValidationError as exc:
        content = ContentService()
        context = pages.contact_context(content)
        context.update({"form": payload, "errors": format_form_errors(exc)})
        return render(request, "contact.html", context, status_code=400, content=content)
    result = SubmissionService().send_contact_message(data)
    return _redirect("/contact-us", result.message)


@router.post("/prayer-requests")
async def prayer_requests(request: Request):
    form = await _read_form(request, "prayer")
    content = ContentService()
    _require_feature(content, "prayerRequests")
    if _is_bot(form, "prayer"):
        return _redirect("/contact-us", "Your prayer request has been received.")
    payload = _payload(form)
    try:
        data = PrayerRequestForm(**payload)
    except ValidationError as exc:
        context = pages.contact_context(content)
        context.update({"prayer_form": payload, "prayer_errors": format_form_errors(exc)})
        return render(request, "contact.html", context, status_code=400, content=content)
    result = SubmissionService().send_prayer_request(data)
    return _redirect("/contact-us", result.message)


# ---------------------- mass intentions ----------------------
@router.post("/mass-intentions")
async def mass_intentions(request: Request):
    form = await _read_form(request, "intention")
    if _is_bot(form, "intention"):
        return _redirect("/mass", "Your Mass intention request has been received.")
    payload = _payload(form)
    try:
        data = MassIntentionForm(**payload)
    except ValidationError as exc:
        repository = CMSRepository()
        content = ContentService(repository=repository)
        context = pages.mass_context(repository, content)
        context.update({"form": payload, "errors": format_form_errors(exc)})
        return render(request, "mass.html", context, status_code=400, content=content)
    result = SubmissionService().send_mass_intention(data)
    return _redirect("/mass", result.message)


# ---------------------- venue hire ----------------------
@router.post("/venue-hire/enquiry")
async def venue_enquiry(request: Request):
    form = await _read_form(request, "venue")
    content = ContentService()
    _require_feature(content, "venueHire")
    if _is_bot(form, "venue"):
        return _redirect("/venue-hire", "Thank you for your enquiry.")
    payload = _payload(form)
    try:
        data = VenueEnquiryForm(**payload)
        result = SubmissionService().send_venue_enquiry(data)
    except ValidationError as exc:
        errors = format_form_errors(exc)
    except InvalidContentError as exc:
        errors = {"venueId": exc.message}
    else:
        return _redirect("/venue-hire", result.message)
    today = date.today()
    context = pages.venue_context(today.year, today.month, payload.get("venueId", ""), today)
    context.update({"form": payload, "errors": errors})
    return render(request, "venue_hire.html", context, status_code=400, content=content)


# ---------------------- event registration ----------------------
def _registration_payload(form) -> dict:
    payload = _payload(form)
    emergency = {}
    for field, key in EMERGENCY_FIELDS.items():
        value = payload.pop(field, "")
        if value.strip():
            emergency[key] = value
    if emergency:
        payload["emergencyContact"] = emergency
    return payload


@router.post("/events/{event_id}/register")
async def register_for_event(request: Request, event_id: str):
    form = await _read_form(request, "registration")
    repository = CMSRepository()
    content = ContentService(repository=repository)
    _require_feature(content, "eventRegistration")
    try:
        event = EventService(repository).get_published(event_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, exc.message)
    back = f"/events/{event_id}"
    if _is_bot(form, "registration"):
        return _redirect(back, f"You are registered for {event.get('title', 'this event')}.")
    payload = _registration_payload(form)
    payload["eventId"] = event_id
    try:
        data = EventRegistrationForm(**payload)
        result = SubmissionService(repository).register_for_event(data)
    except ValidationError as exc:
        errors = format_form_errors(exc)
    except InvalidContentError as exc:
        errors = {"form": exc.message}
    else:
        return _redirect(back, result.message)
    context = {"event": event, "form": _payload(form), "errors": errors}
    return render(request, "event.html", context, status_code=400, content=content)


# ---------------------- accessibility ----------------------
@router.post("/accessibility")
async def accessibility(request: Request):
    form = await _read_form(request, "accessibility")
    back = _safe_next(form.get("next"), "/")
    response = RedirectResponse(back, status_code=303)
    # checkboxes post a hidden "0" first; the last value wins
    prefs = AccessibilityPreferences() if form.get("reset") else AccessibilityPreferences.from_mapping(_payload(form))
    if prefs.is_default:
        response.delete_cookie(COOKIE_NAME, path="/")
        return response
    response.set_cookie(
        COOKIE_NAME,
        prefs.to_cookie(),
        max_age=COOKIE_MAX_AGE,
        httponly=True,
        secure=get_settings().app_env == "prod",
        samesite="lax",
        path="/",
    )
    logger.debug("Accessibility preferences saved: %s", prefs)
    return response
