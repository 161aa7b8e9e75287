from __future__ import annotations

import io
from datetime import date
from typing import Optional

import qrcode
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, StreamingResponse
from pydantic import ValidationError

from parish.core.utils import absolute_url
from parish.domain import schedule
from parish.domain.forms import SEARCH_CATEGORIES, SearchForm, format_form_errors
from parish.domain.preparation import UnknownTrackerError, get_tracker, variants_for
from parish.repositories.cms_repository import CMSRepository
from parish.routers.layout import render
from parish.services import directory_service, knowledge_hub_service, media_library, parish_info, venue_service
from parish.services.collections import EventService, GalleryService, NewsService, ParishGroupService
from parish.services.content_service import ContentService
from parish.services.errors import RecordNotFoundError
from parish.services.search_service import search_site

router = APIRouter(prefix="", tags=["pages"])

HOME_NEWS_COUNT = 3
HOME_EVENTS_COUNT = 3
QR_TARGETS = ("donate", "stream")


def _repository() -> CMSRepository:
    return CMSRepository()


def mass_overview(repository: CMSRepository, now=None) -> dict:
    """Schedule, next mass and live flag for the home, mass and streaming pages."""
    now = now or schedule.local_now()
    mass_times = repository.get_mass_times()
    next_mass = schedule.find_next_mass(mass_times, now)
    return {
        "mass_times": mass_times,
        "todays_services": schedule.todays_services(mass_times, now),
        "today_name": schedule.DAY_NAMES[now.weekday()],
        "next_mass": next_mass,
        "remaining": schedule.time_remaining(next_mass.starts_at, now) if next_mass else None,
        "is_live": schedule.is_mass_live(mass_times, now),
    }


# ---------------------- home & about ----------------------
@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    repository = _repository()
    content = ContentService(repository=repository)
    context = {
        "hero": content.get_hero_content(),
        "cta_images": content.get_cta_images(),
        "latest_news": NewsService(repository).published_articles()[:HOME_NEWS_COUNT],
        "upcoming_events": EventService(repository).upcoming_events()[:HOME_EVENTS_COUNT],
        "sacraments": parish_info.SACRAMENTS,
        "live_stream_enabled": content.is_live_stream_enabled(),
    }
    context.update(mass_overview(repository))
    return render(request, "home.html", context, content=content)


@router.get("/about-us", response_class=HTMLResponse)
def about_us(request: Request):
    content = ContentService()
    context = {
        "page_image": content.get_page_image("about-us"),
        "history_images": content.get_history_images(),
        "assistant_priest": content.get_assistant_priest(),
        "clergy": [m for m in directory_service.STAFF if "Priest" in m["title"]],
    }
    return render(request, "about.html", context, content=content)


@router.get("/find-us", response_class=HTMLResponse)
def find_us(request: Request):
    content = ContentService()
    context = {"page_image": content.get_page_image("find-us"), "opening": schedule.CHURCH_OPENING}
    return render(request, "find_us.html", context, content=content)


# ---------------------- worship ----------------------
def mass_context(repository: CMSRepository, content: ContentService) -> dict:
    context = {
        "page_image": content.get_page_image("mass-times"),
        "confession_times": schedule.CONFESSION_TIMES,
        "confession_note": schedule.CONFESSION_NOTE,
        "adoration_times": schedule.ADORATION_TIMES,
        "opening": schedule.CHURCH_OPENING,
        "form": {},
        "errors": {},
    }
    context.update(mass_overview(repository))
    return context


@router.get("/mass", response_class=HTMLResponse)
def mass(request: Request):
    repository = _repository()
    content = ContentService(repository=repository)
    return render(request, "mass.html", mass_context(repository, content), content=content)


@router.get("/the-sacraments", response_class=HTMLResponse)
def sacraments(request: Request):
    content = ContentService()
    cards = [
        {**sacrament, "picture": content.get_sacrament_image(sacrament["image"])}
        for sacrament in parish_info.SACRAMENTS
    ]
    return render(request, "sacraments.html", {"sacraments": cards}, content=content)


@router.get("/the-sacraments/{slug}", response_class=HTMLResponse)
def sacrament_page(
    request: Request,
    slug: str,
    variant: Optional[str] = None,
    done: list[str] = Query(default=[]),
):
    sacrament = parish_info.get_sacrament(slug)
    if sacrament is None:
        raise HTTPException(404, "Sacrament not found")
    content = ContentService()
    tracker = None
    variants: list[str] = []
    if sacrament["tracker"]:
        try:
            tracker = get_tracker(sacrament["tracker"], variant, done)
        except UnknownTrackerError:
            raise HTTPException(404, "Preparation checklist not found")
        variants = variants_for(sacrament["tracker"])
    context = {
        "sacrament": sacrament,
        "picture": content.get_sacrament_image(sacrament["image"]),
        "tracker": tracker,
        "variants": variants,
        "confession_times": schedule.CONFESSION_TIMES if slug == "confession" else (),
        "confession_note": schedule.CONFESSION_NOTE,
        "chaplaincy": parish_info.HOSPITAL_CHAPLAINCY if slug == "anointing-of-the-sick" else None,
    }
    return render(request, "sacrament.html", context, content=content)


# ---------------------- community ----------------------
@router.get("/news", response_class=HTMLResponse)
def news_list(request: Request, category: str = ""):
    repository = _repository()
    service = NewsService(repository)
    articles = service.published_articles()
    if category:
        articles = [a for a in articles if a.get("category") == category]
    context = {"articles": articles, "categories": service.categories(), "category": category}
    return render(request, "news.html", context, content=ContentService(repository=repository))


@router.get("/news/{slug}", response_class=HTMLResponse)
def news_article(request: Request, slug: str):
    repository = _repository()
    try:
        article = NewsService(repository).get_by_slug(slug)
    except RecordNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return render(request, "news_article.html", {"article": article}, content=ContentService(repository=repository))


@router.get("/events", response_class=HTMLResponse)
def events(request: Request, category: str = "", past: bool = False):
    repository = _repository()
    service = EventService(repository)
    listing = service.published_events() if past else service.upcoming_events()
    if category:
        listing = [e for e in listing if str(e.get("category", "")).lower() == category.lower()]
    categories = sorted({e["category"] for e in service.published_events() if e.get("category")})
    context = {"events": listing, "categories": categories, "category": category, "past": past}
    return render(request, "events.html", context, content=ContentService(repository=repository))


@router.get("/events/{event_id}", response_class=HTMLResponse)
def event_detail(request: Request, event_id: str):
    repository = _repository()
    try:
        event = EventService(repository).get_published(event_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, exc.message)
    context = {"event": event, "form": {}, "errors": {}}
    return render(request, "event.html", context, content=ContentService(repository=repository))


@router.get("/parish-groups", response_class=HTMLResponse)
def parish_groups(request: Request):
    repository = _repository()
    grouped = ParishGroupService(repository).active_groups()
    return render(request, "parish_groups.html", {"grouped": grouped}, content=ContentService(repository=repository))


@router.get("/gallery", response_class=HTMLResponse)
def gallery(request: Request):
    repository = _repository()
    service = GalleryService(repository)
    content = ContentService(repository=repository)
    context = {
        "albums": service.published_albums(),
        "featured": service.featured_albums(),
        "page_image": content.get_page_image("gallery"),
    }
    return render(request, "gallery.html", context, content=content)


@router.get("/gallery/{album_id}", response_class=HTMLResponse)
def gallery_album(request: Request, album_id: str):
    repository = _repository()
    try:
        album = GalleryService(repository).get_published(album_id)
    except RecordNotFoundError as exc:
        raise HTTPException(404, exc.message)
    return render(request, "gallery_album.html", {"album": album}, content=ContentService(repository=repository))


@router.get("/staff", response_class=HTMLResponse)
def staff(request: Request, language: str = "", specialty: str = "", q: str = ""):
    members = directory_service.list_staff(language or None, specialty or None, q or None)
    context = {
        "members": [
            {**m, "mailto": directory_service.mailto_link(m), "tel": directory_service.tel_link(m)}
            for m in members
        ],
        "emergency": directory_service.emergency_contacts(),
        "languages": directory_service.languages(),
        "specialties": directory_service.specialties(),
        "filters": {"language": language, "specialty": specialty, "q": q},
    }
    return render(request, "staff.html", context)


@router.get("/streaming", response_class=HTMLResponse)
def streaming(request: Request):
    repository = _repository()
    content = ContentService(repository=repository)
    context = {
        "page_image": content.get_page_image("streaming"),
        "stream_enabled": content.is_live_stream_enabled(),
        "stream_url": content.get_live_stream_url(),
    }
    context.update(mass_overview(repository))
    return render(request, "streaming.html", context, content=content)


# ---------------------- knowledge hub ----------------------
@router.get("/knowledge-hub", response_class=HTMLResponse)
def knowledge_hub(request: Request, q: str = ""):
    context = {
        "categories": knowledge_hub_service.CATEGORIES,
        "counts": knowledge_hub_service.category_counts(),
        "featured": knowledge_hub_service.featured_articles(),
        "articles": knowledge_hub_service.search(q) if q.strip() else knowledge_hub_service.published_articles(),
        "q": q,
    }
    return render(request, "knowledge_hub.html", context)


@router.get("/knowledge-hub/category/{slug}", response_class=HTMLResponse)
def knowledge_hub_category(request: Request, slug: str):
    category = knowledge_hub_service.get_category(slug)
    if category is None:
        raise HTTPException(404, "Category not found")
    context = {"category": category, "articles": knowledge_hub_service.articles_in_category(slug)}
    return render(request, "knowledge_hub_category.html", context)


@router.get("/knowledge-hub/{slug}", response_class=HTMLResponse)
def knowledge_hub_article(request: Request, slug: str):
    article = knowledge_hub_service.get_article(slug)
    if article is None or article["status"] != "published":
        raise HTTPException(404, "Article not found")
    context = {
        "article": article,
        "category": knowledge_hub_service.get_category(article["category"]),
        "blocks": knowledge_hub_service.content_blocks(article["content"]),
        "related": knowledge_hub_service.related_articles(article["id"]),
    }
    return render(request, "knowledge_hub_article.html", context)


# ---------------------- media & community news ----------------------
@router.get("/podcasts", response_class=HTMLResponse)
def podcasts(request: Request, q: str = "", category: str = ""):
    content = ContentService()
    context = {
        "page_image": content.get_page_image("podcasts"),
        "featured": [e for e in media_library.PODCAST_EPISODES if e["featured"]],
        "episodes": media_library.search_podcasts(q, category),
        "categories": media_library.categories_of(media_library.PODCAST_EPISODES),
        "platforms": media_library.PODCAST_PLATFORMS,
        "q": q,
        "category": category,
    }
    return render(request, "podcasts.html", context, content=content)


@router.get("/st-saviours-talks", response_class=HTMLResponse)
def talks(request: Request, q: str = "", category: str = ""):
    content = ContentService()
    context = {
        "page_image": content.get_page_image("podcasts"),
        "featured": [t for t in media_library.TALKS if t["featured"]],
        "talks": media_library.search_talks(q, category),
        "categories": media_library.categories_of(media_library.TALKS),
        "q": q,
        "category": category,
    }
    return render(request, "talks.html", context, content=content)


@router.get("/weekly-newsletter", response_class=HTMLResponse)
def weekly_newsletter(request: Request):
    context = {
        "latest": media_library.latest_newsletter(),
        "issues": media_library.newest_first(media_library.NEWSLETTER_ISSUES),
        "sections": media_library.NEWSLETTER_SECTIONS,
        "form": {},
        "errors": {},
    }
    return render(request, "weekly_newsletter.html", context)


@router.get("/community-news", response_class=HTMLResponse)
def community_news(request: Request, category: str = ""):
    context = {
        "stories": media_library.community_stories(category),
        "categories": media_library.COMMUNITY_CATEGORIES,
        "category": category,
    }
    return render(request, "community_news.html", context)


@router.get("/community-news/{slug}", response_class=HTMLResponse)
def community_story(request: Request, slug: str):
    story = media_library.get_story(slug)
    if story is None or not media_library.has_full_story(story):
        raise HTTPException(404, "Story not found")
    return render(request, "community_story.html", {"story": story})


# ---------------------- support ----------------------
def contact_context(content: ContentService) -> dict:
    return {
        "page_image": content.get_page_image("contact-us"),
        "contact_info": content.get_contact_info(),
        "form": {},
        "errors": {},
        "prayer_form": {},
        "prayer_errors": {},
    }


@router.get("/contact-us", response_class=HTMLResponse)
def contact_us(request: Request):
    content = ContentService()
    return render(request, "contact.html", contact_context(content), content=content)


@router.get("/venue-hire", response_class=HTMLResponse)
def venue_hire(request: Request, year: Optional[int] = None, month: Optional[int] = None, venue: str = ""):
    today = date.today()
    year = year if year in venue_service.CALENDAR_YEARS else today.year
    month = month if month and 1 <= month <= 12 else today.month
    return render(request, "venue_hire.html", venue_context(year, month, venue, today))


def venue_context(year: int, month: int, venue: str = "", today: Optional[date] = None) -> dict:
    content = ContentService()
    return {
        "page_image": content.get_page_image("venue-hire"),
        "venues": venue_service.VENUES,
        "faqs": venue_service.FAQS,
        "weeks": venue_service.month_calendar(year, month, today),
        "month_title": venue_service.month_title(year, month),
        "prev_month": venue_service.shift_month(year, month, -1),
        "next_month": venue_service.shift_month(year, month, 1),
        "slots": venue_service.available_slots(venue or None),
        "selected_venue": venue,
        "form": {"venueId": venue} if venue else {},
        "errors": {},
    }


@router.get("/donate", response_class=HTMLResponse)
def donate(request: Request):
    content = ContentService()
    context = {
        "page_image": content.get_page_image("donate"),
        "donations_enabled": content.is_donations_enabled(),
        "donations_url": content.get_donations_url(),
        "charity_number": content.get_charity_number(),
    }
    return render(request, "donate.html", context, content=content)


@router.get("/safeguarding", response_class=HTMLResponse)
def safeguarding(request: Request):
    content = ContentService()
    context = {
        "emergency_contacts": parish_info.EMERGENCY_CONTACTS,
        "parish_contacts": parish_info.parish_safeguarding_contacts(content),
        "diocesan_contacts": parish_info.DIOCESAN_CONTACTS,
    }
    return render(request, "safeguarding.html", context, content=content)


@router.get("/st-saviours-primary-school", response_class=HTMLResponse)
def primary_school(request: Request):
    context = {
        "stats": parish_info.SCHOOL_STATS,
        "key_stages": parish_info.SCHOOL_KEY_STAGES,
        "values": parish_info.SCHOOL_VALUES,
    }
    return render(request, "school.html", context)


# ---------------------- search ----------------------
@router.get("/search", response_class=HTMLResponse)
def search(request: Request, q: str = "", category: str = "all"):
    context = {"q": q, "category": category, "categories": SEARCH_CATEGORIES, "results": [], "errors": {}}
    if q:
        try:
            form = SearchForm(query=q, category=category)
        except ValidationError as exc:
            context["errors"] = format_form_errors(exc)
            return render(request, "search.html", context, status_code=400)
        context["results"] = search_site(form.query, form.category)
    return render(request, "search.html", context)


# ---------------------- legal & status ----------------------
@router.get("/accessibility-statement", response_class=HTMLResponse)
def accessibility_statement(request: Request):
    return render(request, "accessibility.html", {})


@router.get("/privacy-policy", response_class=HTMLResponse)
def privacy_policy(request: Request):
    return render(request, "privacy.html", {})


@router.get("/cookie-policy", response_class=HTMLResponse)
def cookie_policy(request: Request):
    return render(request, "cookies.html", {})


@router.get("/maintenance", response_class=HTMLResponse)
def maintenance(request: Request):
    return render(request, "maintenance.html", {}, status_code=503)


@router.get("/qr/{target}.png")
def qr(target: str):
    if target not in QR_TARGETS:
        raise HTTPException(404, "Unknown QR code")
    content = ContentService()
    url = content.get_donations_url() if target == "donate" else content.get_live_stream_url()
    if not url:
        raise HTTPException(404, "Link not configured")
    img = qrcode.make(absolute_url(url))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return StreamingResponse(buf, media_type="image/png")


# Chrome devtools asks for this file on every page load
@router.get("/.well-known/appspecific/com.chrome.devtools.json")
def chrome_devtools_wellknown():
    return PlainTextResponse("", status_code=204)
