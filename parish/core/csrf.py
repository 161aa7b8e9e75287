"""
Double-submit CSRF protection for the public forms.

The token lives in a readable cookie and is echoed back as a hidden form
field (or the ``x-csrf-token`` header for fetch calls). Forms also carry an
empty ``website`` honeypot field that humans never fill in.
"""

from __future__ import annotations

import secrets
from urllib import parse as urlparse

from fastapi import HTTPException, Request, Response

from parish.core.config import get_settings

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "x-csrf-token"
HONEYPOT_FIELD = "website"


def ensure_csrf_token(request: Request) -> str:
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if not token or len(token) < 16:
        token = secrets.token_urlsafe(32)
    return token


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        max_age=7 * 24 * 60 * 60,
        httponly=False,
        secure=get_settings().app_env == "prod",
        samesite="strict",
        path="/",
    )


def render_with_csrf(request: Request, templates, name: str, context: dict, status_code: int = 200):
    """Render a template carrying a form, refreshing the CSRF cookie."""
    token = ensure_csrf_token(request)
    payload = {"csrf_token": token}
    payload.update(context)
    response = templates.TemplateResponse(request, name, payload, status_code=status_code)
    set_csrf_cookie(response, token)
    return response


def _same_origin(request: Request) -> bool:
    source = request.headers.get("origin") or request.headers.get("referer") or ""
    if not source:
        return True
    parsed = urlparse.urlparse(source)
    host = (request.headers.get("host") or "").split(":", 1)[0].lower()
    source_host = (parsed.hostname or "").lower()
    if source_host and host and source_host != host:
        return False
    return not parsed.scheme or parsed.scheme == request.url.scheme


def validate_csrf(request: Request, supplied_token: str | None) -> None:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    token = (supplied_token or "").strip() or (request.headers.get(CSRF_HEADER_NAME) or "").strip()
    if not cookie_token or not token:
        raise HTTPException(403, "Missing CSRF token.")
    if not secrets.compare_digest(cookie_token, token):
        raise HTTPException(403, "Invalid CSRF token.")
    if not _same_origin(request):
        raise HTTPException(403, "Invalid request origin.")


def is_bot_submission(honeypot_value: str | None) -> bool:
    return bool((honeypot_value or "").strip())
