"""Public JSON endpoints used by the countdown widget and external consumers."""
from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from parish.core import csrf
from parish.core.rate_limiter import limit_form
from parish.domain import schedule
from parish.domain.forms import NewsletterForm, format_form_errors
from parish.domain.preparation import UnknownTrackerError, get_tracker
from parish.repositories.cms_repository import CMSRepository
from parish.services.collections import EventService
from parish.services.content_service import ContentService
from parish.services.errors import ContentError
from parish.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def _last_updated() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@router.get("/events")
def list_events(category: Optional[str] = None, limit: Optional[int] = Query(default=None, ge=0)):
    events = EventService().filter_events(category, limit)
    return {"success": True, "data": events, "total": len(events), "lastUpdated": _last_updated()}


@router.get("/mass-times")
def mass_times():
    return {"success": True, "data": CMSRepository().get_mass_times(), "lastUpdated": _last_updated()}


@router.get("/next-mass")
def next_mass():
    now = schedule.local_now()
    mass_times = CMSRepository().get_mass_times()
    upcoming = schedule.find_next_mass(mass_times, now)
    data = None
    if upcoming:
        data = {
            "day": upcoming.day,
            "time": upcoming.time,
            "type": upcoming.type,
            "startsAt": upcoming.starts_at.isoformat(timespec="minutes"),
            "timeRemaining": schedule.time_remaining(upcoming.starts_at, now).as_dict(),
        }
    return {"success": True, "data": data, "isLive": schedule.is_mass_live(mass_times, now)}


@router.get("/trackers/{sacrament}/{variant}")
def tracker(sacrament: str, variant: str, done: list[str] = Query(default=[])):
    try:
        state = get_tracker(sacrament, variant, done)
    except UnknownTrackerError:
        raise HTTPException(404, "Preparation checklist not found")
    return {"success": True, "data": state.as_dict()}


@router.post("/newsletter/subscribe")
async def newsletter_subscribe(request: Request):
    limit_form(request, "newsletter")
    csrf.validate_csrf(request, None)
    if not ContentService().is_feature_enabled("newsletter"):
        raise HTTPException(404, "Newsletter sign-up is not available")
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse({"success": False, "error": "Invalid JSON body"}, status_code=400)
    if not isinstance(payload, dict):
        return JSONResponse({"success": False, "error": "Invalid JSON body"}, status_code=400)
    try:
        form = NewsletterForm.model_validate(payload)
    except ValidationError as exc:
        return JSONResponse(
            {"success": False, "error": "Validation failed", "errors": format_form_errors(exc)},
            status_code=400,
        )
    try:
        result = SubmissionService().subscribe_newsletter(form)
    except ContentError as exc:
        logger.error("Newsletter subscription failed: %s", exc.message)
        return JSONResponse({"success": False, "error": exc.message}, status_code=exc.status_code)
    return {"success": True, "message": result.message}
