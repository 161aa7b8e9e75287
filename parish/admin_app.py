from __future__ import annotations

import hashlib
import html
import io
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type
from urllib.parse import quote_plus

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from parish.core import csrf
from parish.core.config import PROJECT_ROOT, get_settings
from parish.core.logs import configure_logging
from parish.core.utils import parse_iso_date
from parish.domain.forms import format_form_errors
from parish.domain.records import (
    EventIn,
    GalleryAlbumIn,
    MassTimeDayIn,
    NewsArticleIn,
    ParishGroupIn,
    RecordIn,
)
from parish.domain.schedule import parse_clock
from parish.domain.text import generate_id
from parish.repositories.cms_repository import CMSRepository
from parish.services.collections import (
    CollectionService,
    EventService,
    GalleryService,
    NewsService,
    ParishGroupService,
)
from parish.services.errors import ContentError
from parish.services.mass_times_service import MassTimesService
from parish.services.settings_service import SettingsService

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="St Saviour's Content Admin")
settings = get_settings()

UPLOADS_DIR = os.path.join(PROJECT_ROOT, "web", "uploads")
UPLOAD_MAX_SIZE = (1600, 1600)
JPEG_MAGIC = b"\xff\xd8\xff"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"

WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SERVICE_TYPES = (
    "Mass", "Sunday Mass", "Weekday Mass", "Saturday Vigil", "Spanish Mass",
    "Confession", "Adoration", "Vespers", "Special Service",
)
ANNOUNCEMENT_TYPES = ("info", "warning", "success", "error")
_TRUE = {"1", "true", "on", "yes"}


# ---------------------- helpers ----------------------
def _check_origin(request: Request) -> bool:
    origin = request.headers.get("origin") or request.headers.get("referer") or ""
    host = (request.headers.get("host") or "").strip()
    allowed = set(get_settings().admin_hosts)
    if host:
        allowed.add(host)
    if not origin:
        return True
    netloc = origin.split("://", 1)[-1].split("/", 1)[0]
    return netloc in allowed


def require_origin(request: Request) -> None:
    if not _check_origin(request):
        logger.warning("Rejected admin request from origin %s", request.headers.get("origin") or request.headers.get("referer"))
        raise HTTPException(403, "Invalid request origin")


async def _json_body(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(400, "Invalid JSON body")


def _parse(model: Type[RecordIn], payload) -> dict:
    if not isinstance(payload, dict):
        raise HTTPException(400, "Expected a JSON object")
    try:
        return model.model_validate(payload).to_record()
    except ValidationError as exc:
        raise HTTPException(400, format_form_errors(exc))


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


def _layout(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(
        f"""
        <!doctype html><html lang='en-gb'><head>
        <meta charset='utf-8'><meta name='viewport' content='width=device-width,initial-scale=1'>
        <link rel="stylesheet" href="https://unpkg.com/@picocss/pico@2.0.6/css/pico.min.css">
        <title>{html.escape(title)}</title>
        <style>table {{font-size:14px}} td,th {{white-space:nowrap}}</style>
        </head><body>
        <main class="container">
          <nav><ul><li><strong>Content Admin</strong></li></ul>
              <ul><li><a href="/">Dashboard</a></li><li><a href="/content/news">News</a></li><li><a href="/content/events">Events</a></li><li><a href="/content/groups">Groups</a></li><li><a href="/content/gallery">Gallery</a></li><li><a href="/content/mass-times">Mass times</a></li><li><a href="/content/settings">Settings</a></li><li><a href="/content/uploads">Uploads</a></li></ul>
          </nav>
          {body}
        </main>
        </body></html>
        """
    )


def _alert(request: Request) -> str:
    error = (request.query_params.get("error") or "").strip()
    if error:
        return f"<mark role='alert' style='display:block'>{html.escape(error)}</mark>"
    ok = (request.query_params.get("ok") or "").strip()
    if ok:
        return f"<mark role='status' style='display:block'>{html.escape(ok)}</mark>"
    return ""


def _form_page(request: Request, title: str, render_body: Callable[[str], str], status_code: int = 200) -> HTMLResponse:
    """Render an editor page; its forms echo the CSRF cookie set here."""
    token = csrf.ensure_csrf_token(request)
    response = _layout(title, render_body(token))
    response.status_code = status_code
    csrf.set_csrf_cookie(response, token)
    return response


def _csrf_input(token: str) -> str:
    return f"<input type='hidden' name='csrf_token' value='{html.escape(token)}'>"


async def _editor_form(request: Request):
    require_origin(request)
    form = await request.form()
    csrf.validate_csrf(request, form.get("csrf_token"))
    return form


def _back(path: str, *, ok: str = "", error: str = "") -> RedirectResponse:
    key, value = ("error", error) if error else ("ok", ok)
    return RedirectResponse(f"{path}?{key}={quote_plus(value)}", status_code=303)


def _is_checked(value) -> bool:
    return value is True or str(value or "").strip().lower() in _TRUE


# ---------------------- dashboard ----------------------
@app.get("/", response_class=HTMLResponse)
def dashboard():
    repo = CMSRepository()
    website = repo.get_website_settings().get("website") or {}
    news = repo.get_news_articles()
    events = repo.get_events()
    rows = [
        ("News articles", "/content/news", len(news), sum(1 for a in news if a.get("published"))),
        ("Events", "/content/events", len(events), sum(1 for e in events if e.get("published"))),
        ("Parish groups", "/content/groups", len(repo.get_parish_groups()), None),
        ("Gallery albums", "/content/gallery", len(repo.get_gallery_albums()), None),
        ("Mass schedule days", "/content/mass-times", len(repo.get_mass_times()), None),
        ("Newsletter subscribers", "", len(repo.get_newsletter_subscribers()), None),
    ]
    table = "".join(
        f"<tr><td>{f'<a href={href!r}>{html.escape(label)}</a>' if href else html.escape(label)}</td>"
        f"<td>{total}</td><td>{'' if published is None else published}</td></tr>"
        for label, href, total, published in rows
    )
    status = "<mark role='alert'>Maintenance mode is ON</mark>" if website.get("maintenanceMode") else ""
    body = f"""
      <article>
        <h3>Summary</h3>
        {status}
        <table>
          <thead><tr><th>Content</th><th>Total</th><th>Published</th></tr></thead>
          <tbody>{table}</tbody>
        </table>
        <p>Edit content with the pages above; the same data is served as JSON under <code>/api/</code>.</p>
      </article>
    """
    return _layout("Admin | Dashboard", body)


# ---------------------- collections (JSON) ----------------------
def _register_collection(path: str, service_factory: Callable[[], CollectionService], model: Type[RecordIn]) -> None:
    """GET/POST on ``/api/<path>``, PUT/DELETE on ``/api/<path>/{record_id}``."""

    def list_records():
        return service_factory().list_all()

    async def create_record(request: Request):
        data = _parse(model, await _json_body(request))
        return JSONResponse(service_factory().create(data), status_code=201)

    async def update_record(record_id: str, request: Request):
        data = _parse(model, await _json_body(request))
        return service_factory().update(record_id, data)

    def delete_record(record_id: str):
        service = service_factory()
        service.delete(record_id)
        return {"message": f"{service.label} deleted successfully"}

    guard = [Depends(require_origin)]
    app.add_api_route(f"/api/{path}", list_records, methods=["GET"], name=f"list_{path}")
    app.add_api_route(f"/api/{path}", create_record, methods=["POST"], dependencies=guard, name=f"create_{path}")
    app.add_api_route(f"/api/{path}/{{record_id}}", update_record, methods=["PUT"], dependencies=guard, name=f"update_{path}")
    app.add_api_route(f"/api/{path}/{{record_id}}", delete_record, methods=["DELETE"], dependencies=guard, name=f"delete_{path}")


_register_collection("news", NewsService, NewsArticleIn)
_register_collection("events", EventService, EventIn)
_register_collection("groups", ParishGroupService, ParishGroupIn)
_register_collection("gallery", GalleryService, GalleryAlbumIn)


# ---------------------- mass times (JSON) ----------------------
@app.get("/api/mass-times")
def get_mass_times():
    return MassTimesService().get_schedule()


@app.put("/api/mass-times", dependencies=[Depends(require_origin)])
async def put_mass_times(request: Request):
    payload = await _json_body(request)
    if not isinstance(payload, list):
        raise HTTPException(400, "Invalid data structure")
    days = [_parse(MassTimeDayIn, entry) for entry in payload]
    return MassTimesService().replace_schedule(days)


@app.post("/api/mass-times", dependencies=[Depends(require_origin)])
def reset_mass_times():
    return JSONResponse(MassTimesService().reset_to_defaults(), status_code=201)


# ---------------------- settings (JSON) ----------------------
@app.get("/api/settings")
def get_site_settings():
    return SettingsService().get_settings_document()


@app.put("/api/settings", dependencies=[Depends(require_origin)])
async def put_site_settings(request: Request):
    return SettingsService().save_settings_document(await _json_body(request))


# ---------------------- init ----------------------
@app.post("/api/init", dependencies=[Depends(require_origin)])
def init_data():
    seeded = CMSRepository().initialize_default_data()
    logger.info("CMS data initialised; seeded %s", ", ".join(seeded) or "nothing")
    return {"success": True, "message": "CMS data initialized successfully", "seeded": seeded}


# ---------------------- uploads ----------------------
def _has_valid_signature(data: bytes, content_type: str) -> bool:
    if content_type in {"image/jpeg", "image/jpg", "image/pjpeg"}:
        return data.startswith(JPEG_MAGIC)
    if content_type == "image/png":
        return data.startswith(PNG_MAGIC)
    return False


def _save_resized_image(data: bytes, filename: str, max_size: tuple[int, int]) -> str:
    try:
        image = Image.open(io.BytesIO(data))
        image = ImageOps.exif_transpose(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise HTTPException(400, "Invalid image file") from exc
    image = image.convert("RGB")
    image.thumbnail(max_size, Image.LANCZOS)
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=85, optimize=True)
    payload = buffer.getvalue()
    dest_path = os.path.join(UPLOADS_DIR, filename)
    os.makedirs(os.path.dirname(dest_path), exist_ok=True)
    with open(dest_path, "wb") as f:
        f.write(payload)
    etag = hashlib.md5(payload).hexdigest()[:8]
    return f"/static/uploads/{filename}?v={etag}"


async def _store_upload(file) -> str:
    data = await file.read()
    if not data:
        raise HTTPException(400, "Empty file")
    if len(data) > get_settings().upload_max_bytes:
        raise HTTPException(413, "File too large")
    if not _has_valid_signature(data, (file.content_type or "").lower()):
        raise HTTPException(400, "Only JPEG or PNG images are accepted")
    url = _save_resized_image(data, f"{generate_id()}.jpg", UPLOAD_MAX_SIZE)
    logger.info("Stored upload %s (%d bytes in)", url, len(data))
    return url


@app.post("/api/uploads", dependencies=[Depends(require_origin)])
async def upload_image(file: UploadFile = File(...)):
    return JSONResponse({"url": await _store_upload(file)}, status_code=201)


# ---------------------- editors: uploads ----------------------
def _uploads_body(request: Request, url: str = "") -> Callable[[str], str]:
    result = ""
    if url:
        result = f"<p>Image stored. Use this address in news, events or gallery albums:</p><pre>{html.escape(url)}</pre>"

    def body(token: str) -> str:
        return f"""
        <article>
          <h3>Upload an image</h3>
          {_alert(request)}
          {result}
          <form method='post' action='/content/uploads' enctype='multipart/form-data'>
            {_csrf_input(token)}
            <label>JPEG or PNG image <input type='file' name='file' accept='image/jpeg,image/png' required></label>
            <button>Upload</button>
          </form>
        </article>
        """

    return body


@app.get("/content/uploads", response_class=HTMLResponse)
def uploads_page(request: Request):
    return _form_page(request, "Admin | Uploads", _uploads_body(request))


@app.post("/content/uploads", response_class=HTMLResponse)
async def uploads_submit(request: Request):
    form = await _editor_form(request)
    file = form.get("file")
    if file is None or isinstance(file, str):
        return _back("/content/uploads", error="Choose an image to upload")
    try:
        url = await _store_upload(file)
    except HTTPException as exc:
        return _back("/content/uploads", error=str(exc.detail))
    return _form_page(request, "Admin | Uploads", _uploads_body(request, url), status_code=201)


# ---------------------- editors: mass times ----------------------
def _service_line(service: dict) -> str:
    parts = [service.get("time") or "", service.get("type") or ""]
    if service.get("description"):
        parts.append(service["description"])
    return " | ".join(parts)


def _parse_service_lines(text: str) -> tuple[list[dict], str]:
    """``time | type | description`` per line; returns the services and the first error."""
    services: list[dict] = []
    for number, line in enumerate((text or "").splitlines(), 1):
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split("|")]
        if len(parts) < 2 or not parts[1]:
            return services, f"Line {number}: use 'time | type | description'"
        try:
            parse_clock(parts[0])
        except ValueError:
            return services, f"Line {number}: unrecognised time '{parts[0]}'"
        services.append({"time": parts[0], "type": parts[1], "description": " | ".join(parts[2:])})
    return services, ""


def _mass_times_body(request: Request, texts: dict[str, str], errors: dict[str, str]) -> Callable[[str], str]:
    def day_field(day: str) -> str:
        error = errors.get(day, "")
        invalid = " aria-invalid='true'" if error else ""
        note = f"<small>{html.escape(error)}</small>" if error else ""
        return (
            f"<label>{html.escape(day)}<textarea name='day-{html.escape(day)}' rows='4'{invalid}>"
            f"{html.escape(texts.get(day, ''))}</textarea>{note}</label>"
        )

    def body(token: str) -> str:
        fields = "\n".join(day_field(day) for day in texts)
        return f"""
        <article>
          <h3>Weekly mass schedule</h3>
          {_alert(request)}
          <p>One service per line as <code>time | type | description</code>, for example
             <code>10:00 AM | Sunday Mass | Family Mass with music</code>.
             Usual types: {html.escape(', '.join(SERVICE_TYPES))}.</p>
          <form method='post' action='/content/mass-times'>
            {_csrf_input(token)}
            {fields}
            <button>Save schedule</button>
          </form>
          <form method='post' action='/content/mass-times/reset' onsubmit="return confirm('Replace the schedule with the default timetable?');">
            {_csrf_input(token)}
            <button class='secondary'>Reset to defaults</button>
          </form>
        </article>
        """

    return body


@app.get("/content/mass-times", response_class=HTMLResponse)
def mass_times_page(request: Request):
    schedule = MassTimesService().get_schedule()
    texts = {entry.get("day", ""): "\n".join(_service_line(s) for s in entry.get("services") or []) for entry in schedule}
    for day in WEEK:
        texts.setdefault(day, "")
    return _form_page(request, "Admin | Mass times", _mass_times_body(request, texts, {}))


@app.post("/content/mass-times", response_class=HTMLResponse)
async def mass_times_submit(request: Request):
    form = await _editor_form(request)
    texts: dict[str, str] = {}
    days: list[dict] = []
    errors: dict[str, str] = {}
    for key, raw in form.multi_items():
        if not key.startswith("day-") or not isinstance(raw, str):
            continue
        day = key[len("day-"):]
        texts[day] = raw
        services, error = _parse_service_lines(raw)
        if error:
            errors[day] = error
        days.append({"day": day, "services": services})
    if errors:
        return _form_page(request, "Admin | Mass times", _mass_times_body(request, texts, errors), status_code=400)
    MassTimesService().replace_schedule(days)
    return _back("/content/mass-times", ok="Mass times saved")


@app.post("/content/mass-times/reset")
async def mass_times_reset(request: Request):
    await _editor_form(request)
    MassTimesService().reset_to_defaults()
    return _back("/content/mass-times", ok="Mass times reset to defaults")


# ---------------------- editors: settings ----------------------
SETTINGS_TEXT_FIELDS = (
    ("Parish", (
        (("parish", "name"), "Name"),
        (("parish", "location"), "Location"),
        (("parish", "priest"), "Parish priest"),
        (("parish", "assistantPriest"), "Assistant priest"),
        (("parish", "diocese"), "Diocese"),
        (("parish", "established"), "Established"),
        (("parish", "charityNumber"), "Charity number"),
        (("parish", "officeHours", "days"), "Office days"),
        (("parish", "officeHours", "time"), "Office hours"),
    )),
    ("Contact", (
        (("contact", "address"), "Address"),
        (("contact", "phone"), "Phone"),
        (("contact", "email"), "Email"),
        (("contact", "emergencyPhone"), "Emergency phone"),
        (("contact", "safeguardingPhone"), "Safeguarding phone"),
    )),
    ("Social media", (
        (("social", "facebook"), "Facebook"),
        (("social", "youtube"), "YouTube"),
        (("social", "instagram"), "Instagram"),
        (("social", "twitter"), "Twitter"),
    )),
    ("Website", (
        (("website", "liveStreamUrl"), "Live stream URL"),
        (("website", "donationsUrl"), "Donations URL"),
    )),
)

SETTINGS_FLAGS = (
    (("website", "maintenanceMode"), "Maintenance mode"),
    (("website", "liveStreamEnabled"), "Live stream enabled"),
    (("website", "donationsEnabled"), "Donations enabled"),
    (("features", "massBooking"), "Mass booking"),
    (("features", "eventRegistration"), "Event registration"),
    (("features", "newsletter"), "Newsletter sign-up"),
    (("features", "prayerRequests"), "Prayer requests"),
    (("features", "venueHire"), "Venue hire enquiries"),
)

ANNOUNCEMENT_FIELDS = ("id", "title", "message", "type", "showUntil", "active", "remove")


def _get_path(document: dict, path: tuple[str, ...]):
    value: Any = document
    for key in path:
        value = value.get(key) if isinstance(value, dict) else None
    return value


def _set_path(document: dict, path: tuple[str, ...], value) -> None:
    target = document
    for key in path[:-1]:
        if not isinstance(target.get(key), dict):
            target[key] = {}
        target = target[key]
    target[path[-1]] = value


def _path_name(path: tuple[str, ...]) -> str:
    return ".".join(path)


def _announcement_rows(document: dict) -> list[dict]:
    rows = [dict(item) for item in _get_path(document, ("website", "announcements")) or [] if isinstance(item, dict)]
    rows.append({"id": "", "title": "", "message": "", "type": "info", "showUntil": "", "active": True})
    return rows


def _announcement_html(index: int, row: dict, error: str) -> str:
    prefix = f"announcements-{index}-"
    options = "".join(
        f"<option value='{kind}'{' selected' if row.get('type') == kind else ''}>{kind.title()}</option>"
        for kind in ANNOUNCEMENT_TYPES
    )
    heading = "New announcement" if not row.get("id") else html.escape(row.get("title") or "Announcement")
    checked = " checked" if _is_checked(row.get("active")) else ""
    note = f"<small>{html.escape(error)}</small>" if error else ""
    remove = (
        f"<label><input type='checkbox' name='{prefix}remove' value='1'> Remove</label>" if row.get("id") else ""
    )
    return f"""
      <fieldset>
        <legend>{heading}</legend>
        <input type='hidden' name='{prefix}id' value='{html.escape(str(row.get('id') or ''))}'>
        <label>Title <input name='{prefix}title' value='{html.escape(str(row.get('title') or ''))}'></label>
        <label>Message <textarea name='{prefix}message' rows='2'>{html.escape(str(row.get('message') or ''))}</textarea></label>
        <div class='grid'>
          <label>Type <select name='{prefix}type'>{options}</select></label>
          <label>Show until <input type='date' name='{prefix}showUntil' value='{html.escape(str(row.get('showUntil') or ''))}'></label>
        </div>
        <input type='hidden' name='{prefix}active' value='0'>
        <label><input type='checkbox' name='{prefix}active' value='1'{checked}> Active</label>
        {remove}
        {note}
      </fieldset>
    """


def _settings_body(request: Request, document: dict, rows: list[dict], errors: dict[str, str]) -> Callable[[str], str]:
    def body(token: str) -> str:
        sections = []
        for title, fields in SETTINGS_TEXT_FIELDS:
            inputs = "".join(
                f"<label>{html.escape(label)} <input name='{_path_name(path)}' "
                f"value='{html.escape(str(_get_path(document, path) or ''))}'></label>"
                for path, label in fields
            )
            sections.append(f"<fieldset><legend>{html.escape(title)}</legend>{inputs}</fieldset>")
        flags = "".join(
            f"<input type='hidden' name='{_path_name(path)}' value='0'>"
            f"<label><input type='checkbox' name='{_path_name(path)}' value='1'"
            f"{' checked' if _get_path(document, path) else ''}> {html.escape(label)}</label>"
            for path, label in SETTINGS_FLAGS
        )
        announcements = "".join(
            _announcement_html(index, row, errors.get(f"announcements-{index}", "")) for index, row in enumerate(rows)
        )
        return f"""
        <article>
          <h3>Website settings</h3>
          {_alert(request)}
          <form method='post' action='/content/settings'>
            {_csrf_input(token)}
            {''.join(sections)}
            <fieldset><legend>Switches</legend>{flags}</fieldset>
            <h4>Announcements</h4>
            <input type='hidden' name='announcement_rows' value='{len(rows)}'>
            {announcements}
            <button>Save settings</button>
          </form>
        </article>
        """

    return body


def _read_announcements(form) -> tuple[list[dict], list[dict], dict[str, str]]:
    """Announcements to store, the rows as submitted, and per-row errors."""
    try:
        count = max(0, min(int(form.get("announcement_rows") or 0), 100))
    except ValueError:
        count = 0
    kept: list[dict] = []
    rows: list[dict] = []
    errors: dict[str, str] = {}
    for index in range(count):
        prefix = f"announcements-{index}-"
        row = {name: str(form.get(prefix + name) or "").strip() for name in ANNOUNCEMENT_FIELDS}
        if _is_checked(row.pop("remove")):
            continue
        if not row["title"] and not row["message"]:
            if row["id"]:
                rows.append(row)
            continue
        rows.append(row)
        if not row["title"] or not row["message"]:
            errors[f"announcements-{index}"] = "Announcements need a title and a message"
            continue
        if row["showUntil"] and parse_iso_date(row["showUntil"]) is None:
            errors[f"announcements-{index}"] = "Show until must be a date"
            continue
        kept.append(
            {
                "id": row["id"] or f"ann-{generate_id()}",
                "title": row["title"],
                "message": row["message"],
                "type": row["type"] if row["type"] in ANNOUNCEMENT_TYPES else "info",
                "active": _is_checked(row["active"]),
                "showUntil": row["showUntil"],
            }
        )
    return kept, rows, errors


@app.get("/content/settings", response_class=HTMLResponse)
def settings_page(request: Request):
    document = SettingsService().get_settings_document()
    return _form_page(request, "Admin | Settings", _settings_body(request, document, _announcement_rows(document), {}))


@app.post("/content/settings", response_class=HTMLResponse)
async def settings_submit(request: Request):
    form = await _editor_form(request)
    service = SettingsService()
    document = service.get_settings_document()
    for _, fields in SETTINGS_TEXT_FIELDS:
        for path, _label in fields:
            raw = form.get(_path_name(path))
            if isinstance(raw, str):
                _set_path(document, path, raw.strip())
    for path, _label in SETTINGS_FLAGS:
        _set_path(document, path, _is_checked(form.get(_path_name(path))))
    announcements, rows, errors = _read_announcements(form)
    if errors:
        rows.append({"id": "", "title": "", "message": "", "type": "info", "showUntil": "", "active": True})
        body = _settings_body(request, document, rows, errors)
        return _form_page(request, "Admin | Settings", body, status_code=400)
    _set_path(document, ("website", "announcements"), announcements)
    service.save_settings_document(document)
    return _back("/content/settings", ok="Settings saved")


# ---------------------- editors: collections ----------------------
@dataclass(frozen=True)
class EditorField:
    name: str
    label: str
    kind: str = "text"
    required: bool = False
    default: Any = None
    hint: str = ""


@dataclass(frozen=True)
class CollectionEditor:
    path: str
    title: str
    noun: str
    service_factory: Callable[[], CollectionService]
    model: Type[RecordIn]
    fields: tuple[EditorField, ...]
    columns: tuple[tuple[str, str], ...]

    def heading(self, record: dict) -> str:
        return str(record.get("title") or record.get("name") or record.get("id") or "")


IMAGE_HINT = "Paste an address from the Uploads page, or leave blank for the default picture."

EDITORS = {
    "news": CollectionEditor(
        "news", "News articles", "article", NewsService, NewsArticleIn,
        (
            EditorField("title", "Title", required=True),
            EditorField("excerpt", "Excerpt", "textarea"),
            EditorField("content", "Content", "textarea"),
            EditorField("category", "Category"),
            EditorField("author", "Author", hint="Defaults to Parish Office."),
            EditorField("date", "Date", "date", hint="Defaults to today."),
            EditorField("readTime", "Read time (minutes)", "number", hint="Worked out from the content when blank."),
            EditorField("image", "Image", hint=IMAGE_HINT),
            EditorField("published", "Published", "checkbox", default=False),
        ),
        (("title", "Title"), ("date", "Date"), ("category", "Category"), ("published", "Published")),
    ),
    "events": CollectionEditor(
        "events", "Events", "event", EventService, EventIn,
        (
            EditorField("title", "Title", required=True),
            EditorField("description", "Description", "textarea"),
            EditorField("date", "Date", "date", required=True),
            EditorField("time", "Time", hint="For example 7:30 PM."),
            EditorField("duration", "Duration", hint="Defaults to 1 hour."),
            EditorField("location", "Location"),
            EditorField("category", "Category"),
            EditorField("image", "Image", hint=IMAGE_HINT),
            EditorField("contactPerson", "Contact person"),
            EditorField("contactEmail", "Contact email", "email"),
            EditorField("maxAttendees", "Maximum attendees", "number"),
            EditorField("registrationRequired", "Registration required", "checkbox", default=False),
            EditorField("published", "Published", "checkbox", default=False),
        ),
        (("title", "Title"), ("date", "Date"), ("time", "Time"), ("location", "Location"), ("published", "Published")),
    ),
    "groups": CollectionEditor(
        "groups", "Parish groups", "group", ParishGroupService, ParishGroupIn,
        (
            EditorField("name", "Name", required=True),
            EditorField("description", "Description", "textarea"),
            EditorField("category", "Category"),
            EditorField("meetingTime", "Meeting time"),
            EditorField("location", "Location"),
            EditorField("contact", "Contact person"),
            EditorField("contactPhone", "Contact phone"),
            EditorField("email", "Email", "email"),
            EditorField("ageRange", "Age range"),
            EditorField("note", "Note"),
            EditorField("active", "Active", "checkbox", default=True),
            EditorField("newMembersWelcome", "New members welcome", "checkbox", default=True),
        ),
        (("name", "Name"), ("category", "Category"), ("meetingTime", "Meets"), ("active", "Active")),
    ),
    "gallery": CollectionEditor(
        "gallery", "Gallery albums", "album", GalleryService, GalleryAlbumIn,
        (
            EditorField("title", "Title", required=True),
            EditorField("description", "Description", "textarea"),
            EditorField("category", "Category"),
            EditorField("date", "Date", "date"),
            EditorField("images", "Images", "images", hint="One image per line: address | caption | alt text"),
            EditorField("featured", "Featured", "checkbox", default=False),
            EditorField("published", "Published", "checkbox", default=False),
        ),
        (("title", "Title"), ("date", "Date"), ("images", "Images"), ("published", "Published")),
    ),
}


def _editor(kind: str) -> CollectionEditor:
    editor = EDITORS.get(kind)
    if editor is None:
        raise HTTPException(404, "Unknown content type")
    return editor


def _images_text(images) -> str:
    lines = []
    for image in images or []:
        if not isinstance(image, dict):
            continue
        parts = [image.get("url") or "", image.get("caption") or "", image.get("alt") or ""]
        while len(parts) > 1 and not parts[-1]:
            parts.pop()
        lines.append(" | ".join(parts))
    return "\n".join(lines)


def _parse_images(text: str, existing) -> list[dict]:
    known = {image.get("url"): image.get("id") for image in existing or [] if isinstance(image, dict)}
    images = []
    for line in (text or "").splitlines():
        parts = [part.strip() for part in line.split("|")]
        if not parts[0]:
            continue
        images.append(
            {
                "id": known.get(parts[0]) or generate_id(),
                "url": parts[0],
                "caption": parts[1] if len(parts) > 1 else "",
                "alt": parts[2] if len(parts) > 2 else "",
            }
        )
    return images


def _initial_values(editor: CollectionEditor, record: dict) -> dict:
    values = {}
    for field in editor.fields:
        value = record.get(field.name, field.default)
        if field.kind == "images":
            value = _images_text(value)
        values[field.name] = "" if value is None else value
    return values


def _editor_payload(editor: CollectionEditor, form, current: Optional[dict]) -> dict:
    """Blank inputs are left out on create so the service fills its defaults."""
    payload: dict = {}
    for field in editor.fields:
        raw = form.get(field.name)
        raw = raw if isinstance(raw, str) else ""
        if field.kind == "checkbox":
            payload[field.name] = _is_checked(raw)
        elif field.kind == "images":
            payload[field.name] = _parse_images(raw, (current or {}).get("images"))
        elif raw.strip():
            payload[field.name] = raw.strip()
        elif current is not None and field.kind in ("text", "textarea", "email"):
            payload[field.name] = ""
    return payload


def _render_field(field: EditorField, value, error: str = "") -> str:
    name = html.escape(field.name)
    label = html.escape(field.label)
    if field.kind == "checkbox":
        checked = " checked" if _is_checked(value) else ""
        return (
            f"<input type='hidden' name='{name}' value='0'>"
            f"<label><input type='checkbox' name='{name}' value='1'{checked}> {label}</label>"
        )
    invalid = " aria-invalid='true'" if error else ""
    required = " required" if field.required else ""
    note = error or field.hint
    note_html = f"<small>{html.escape(note)}</small>" if note else ""
    if field.kind in ("textarea", "images"):
        rows = 8 if field.kind == "textarea" else 5
        return (
            f"<label>{label}<textarea name='{name}' rows='{rows}'{invalid}{required}>"
            f"{html.escape(str(value))}</textarea>{note_html}</label>"
        )
    return (
        f"<label>{label}<input name='{name}' type='{field.kind}' value='{html.escape(str(value))}'"
        f"{invalid}{required}>{note_html}</label>"
    )


def _cell(value) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, list):
        return str(len(value))
    return html.escape(str(value if value is not None else ""))


def _list_body(request: Request, editor: CollectionEditor, records: list[dict]) -> Callable[[str], str]:
    def row(record: dict, token: str) -> str:
        record_id = html.escape(str(record.get("id") or ""))
        cells = "".join(f"<td>{_cell(record.get(key))}</td>" for key, _ in editor.columns)
        return (
            f"<tr>{cells}<td>"
            f"<a href='/content/{editor.path}/{record_id}'>Edit</a> "
            f"<form method='post' action='/content/{editor.path}/{record_id}/delete' style='display:inline' "
            f"onsubmit=\"return confirm('Delete this {editor.noun}? This cannot be undone.');\">"
            f"{_csrf_input(token)}<button class='secondary outline'>Delete</button></form>"
            f"</td></tr>"
        )

    def body(token: str) -> str:
        heads = "".join(f"<th>{html.escape(heading)}</th>" for _, heading in editor.columns)
        rows = "".join(row(record, token) for record in records)
        empty = f"<tr><td colspan='{len(editor.columns) + 1}'>Nothing here yet</td></tr>"
        return f"""
        <article>
          <h3>{html.escape(editor.title)}</h3>
          {_alert(request)}
          <p><a role='button' href='/content/{editor.path}/new'>New {editor.noun}</a></p>
          <table role='grid'>
            <thead><tr>{heads}<th>Actions</th></tr></thead>
            <tbody>{rows or empty}</tbody>
          </table>
        </article>
        """

    return body


def _edit_body(editor: CollectionEditor, action: str, heading: str, values: dict, errors: dict[str, str]) -> Callable[[str], str]:
    def body(token: str) -> str:
        fields = "\n".join(_render_field(f, values.get(f.name, ""), errors.get(f.name, "")) for f in editor.fields)
        general = errors.get("form", "")
        alert = f"<mark role='alert' style='display:block'>{html.escape(general)}</mark>" if general else ""
        return f"""
        <article>
          <h3>{html.escape(heading)}</h3>
          {alert}
          <form method='post' action='{action}'>
            {_csrf_input(token)}
            {fields}
            <button>Save</button>
          </form>
          <p><a class='secondary' href='/content/{editor.path}'>Back to {html.escape(editor.title.lower())}</a></p>
        </article>
        """

    return body


def _save_record(request: Request, editor: CollectionEditor, form, record_id: Optional[str] = None):
    service = editor.service_factory()
    current = service.get(record_id) if record_id else None
    payload = _editor_payload(editor, form, current)
    errors = {f.name: f"{f.label} is required" for f in editor.fields if f.required and not payload.get(f.name)}
    data: dict = {}
    if not errors:
        try:
            data = editor.model.model_validate(payload).to_record()
        except ValidationError as exc:
            for key, message in format_form_errors(exc).items():
                errors.setdefault(key.split(".", 1)[0], message)
    if not errors:
        try:
            saved = service.update(record_id, data) if record_id else service.create(data)
        except ContentError as exc:
            errors["form"] = exc.message
        else:
            verb = "updated" if record_id else "created"
            return _back(f"/content/{editor.path}", ok=f"Saved {editor.noun} '{editor.heading(saved)}' ({verb})")
    values = {f.name: form.get(f.name) if isinstance(form.get(f.name), str) else "" for f in editor.fields}
    action = f"/content/{editor.path}/{record_id}" if record_id else f"/content/{editor.path}/new"
    heading = f"Edit {editor.noun}" if record_id else f"New {editor.noun}"
    body = _edit_body(editor, action, heading, values, errors)
    return _form_page(request, f"Admin | {editor.title}", body, status_code=400)


@app.get("/content/{kind}", response_class=HTMLResponse)
def content_list(kind: str, request: Request):
    editor = _editor(kind)
    records = editor.service_factory().list_all()
    return _form_page(request, f"Admin | {editor.title}", _list_body(request, editor, records))


@app.get("/content/{kind}/new", response_class=HTMLResponse)
def content_new(kind: str, request: Request):
    editor = _editor(kind)
    body = _edit_body(editor, f"/content/{kind}/new", f"New {editor.noun}", _initial_values(editor, {}), {})
    return _form_page(request, f"Admin | {editor.title}", body)


@app.post("/content/{kind}/new", response_class=HTMLResponse)
async def content_create(kind: str, request: Request):
    editor = _editor(kind)
    form = await _editor_form(request)
    return _save_record(request, editor, form)


@app.get("/content/{kind}/{record_id}", response_class=HTMLResponse)
def content_edit(kind: str, record_id: str, request: Request):
    editor = _editor(kind)
    record = editor.service_factory().get(record_id)
    values = _initial_values(editor, record)
    body = _edit_body(editor, f"/content/{kind}/{html.escape(record_id)}", f"Edit {editor.noun}", values, {})
    return _form_page(request, f"Admin | {editor.heading(record)}", body)


@app.post("/content/{kind}/{record_id}", response_class=HTMLResponse)
async def content_update(kind: str, record_id: str, request: Request):
    editor = _editor(kind)
    form = await _editor_form(request)
    return _save_record(request, editor, form, record_id)


@app.post("/content/{kind}/{record_id}/delete")
async def content_delete(kind: str, record_id: str, request: Request):
    editor = _editor(kind)
    await _editor_form(request)
    editor.service_factory().delete(record_id)
    return _back(f"/content/{kind}", ok=f"{editor.noun.capitalize()} deleted")


def create_admin_app() -> FastAPI:
    """Factory for uvicorn/gunicorn."""
    return app
