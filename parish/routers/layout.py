"""
Shared page chrome: navigation, footer data and accessibility preferences.

Every public page renders through ``render`` so the layout always has the
parish details, the announcement banner and a CSRF token for the footer
newsletter form.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import Request

from parish.core import csrf
from parish.services.accessibility_service import COOKIE_NAME, AccessibilityPreferences
from parish.services.content_service import ContentService

NAVIGATION = (
    {
        "title": "About",
        "href": "/about-us",
        "children": [
            {"title": "About Us", "href": "/about-us"},
            {"title": "Find Us", "href": "/find-us"},
            {"title": "Our History", "href": "/about-us#history"},
            {"title": "Leadership", "href": "/about-us#leadership"},
            {"title": "Staff Directory", "href": "/staff"},
        ],
    },
    {
        "title": "Faith & Worship",
        "href": "/mass",
        "children": [
            {"title": "Mass Times", "href": "/mass"},
            {"title": "The Sacraments", "href": "/the-sacraments"},
            {"title": "Baptism", "href": "/the-sacraments/baptism"},
            {"title": "Confirmation", "href": "/the-sacraments/confirmation"},
            {"title": "The Eucharist", "href": "/the-sacraments/the-eucharist"},
            {"title": "Confession", "href": "/the-sacraments/confession"},
            {"title": "Anointing of the Sick", "href": "/the-sacraments/anointing-of-the-sick"},
            {"title": "Holy Orders", "href": "/the-sacraments/holy-orders"},
            {"title": "Matrimony", "href": "/the-sacraments/matrimony"},
        ],
    },
    {
        "title": "Community",
        "href": "/news",
        "children": [
            {"title": "News", "href": "/news"},
            {"title": "Community News", "href": "/community-news"},
            {"title": "Weekly Newsletter", "href": "/weekly-newsletter"},
            {"title": "Events", "href": "/events"},
            {"title": "Parish Groups", "href": "/parish-groups"},
            {"title": "Gallery", "href": "/gallery"},
            {"title": "Live Stream", "href": "/streaming"},
            {"title": "Podcasts", "href": "/podcasts"},
            {"title": "St Saviour's Talks", "href": "/st-saviours-talks"},
            {"title": "Knowledge Hub", "href": "/knowledge-hub"},
        ],
    },
    {"title": "School", "href": "/st-saviours-primary-school", "children": []},
    {
        "title": "Contact & Support",
        "href": "/contact-us",
        "children": [
            {"title": "Contact Us", "href": "/contact-us"},
            {"title": "Venue Hire", "href": "/venue-hire"},
            {"title": "Safeguarding", "href": "/safeguarding"},
            {"title": "Donate", "href": "/donate"},
        ],
    },
)

FOOTER_LINKS = (
    {"title": "Accessibility", "href": "/accessibility-statement"},
    {"title": "Privacy Policy", "href": "/privacy-policy"},
    {"title": "Cookie Policy", "href": "/cookie-policy"},
    {"title": "Safeguarding", "href": "/safeguarding"},
)


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def accessibility_preferences(request: Request) -> AccessibilityPreferences:
    return AccessibilityPreferences.from_cookie(request.cookies.get(COOKIE_NAME))


def layout_context(request: Request, content: Optional[ContentService] = None) -> dict:
    content = content or ContentService()
    path = request.url.path
    return {
        "content": content,
        "parish_name": content.get_parish_name(),
        "full_parish_name": content.get_full_parish_name(),
        "parish": content.get_parish_info(),
        "contact": content.get_contact_display(),
        "office_hours": content.get_office_hours(),
        "social_links": content.get_social_links(),
        "announcements": content.get_visible_announcements(),
        "features": content.get_features(),
        "logo": content.get_logo(),
        "a11y": accessibility_preferences(request),
        "css_href": getattr(request.app.state, "css_href", "/static/site.css"),
        "navigation": NAVIGATION,
        "footer_links": FOOTER_LINKS,
        "current_path": path,
        "message": request.query_params.get("message", ""),
        "year": date.today().year,
    }


def render(
    request: Request,
    name: str,
    context: Optional[dict] = None,
    status_code: int = 200,
    content: Optional[ContentService] = None,
):
    payload = layout_context(request, content)
    payload.update(context or {})
    return csrf.render_with_csrf(request, _templates(request), name, payload, status_code=status_code)
