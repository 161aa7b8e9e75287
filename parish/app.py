import hashlib
import logging
import os
import pathlib
import shutil

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from parish.core.config import PROJECT_ROOT, get_settings
from parish.core.logs import configure_logging
from parish.core.utils import format_date, format_time, truncate_text
from parish.routers import api as api_router
from parish.routers import forms as forms_router
from parish.routers import pages as pages_router
from parish.routers.layout import render
from parish.services.errors import ContentError
from parish.services.settings_service import check_maintenance_mode

configure_logging()
logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self'; "
            "frame-src https://www.youtube.com https://www.youtube-nocookie.com https://www.google.com; "
            "connect-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


MAINTENANCE_PATH = "/maintenance"
MAINTENANCE_EXEMPT_PREFIXES = ("/static/", "/api/")
MAINTENANCE_EXEMPT_PATHS = {MAINTENANCE_PATH, "/favicon.ico"}


class MaintenanceMiddleware(BaseHTTPMiddleware):
    """Send every page request to /maintenance while website.maintenanceMode is on."""

    async def dispatch(self, request, call_next):
        path = request.url.path
        exempt = path in MAINTENANCE_EXEMPT_PATHS or path.startswith(MAINTENANCE_EXEMPT_PREFIXES)
        if not exempt and check_maintenance_mode():
            return RedirectResponse(MAINTENANCE_PATH, status_code=302)
        return await call_next(request)


app = FastAPI(title="St Saviour's Catholic Church")

WEB = os.path.join(PROJECT_ROOT, "web")
TEMPLATES = os.path.join(PROJECT_ROOT, "templates")


class CachedStaticFiles(StaticFiles):
    def set_headers(self, scope, resp, path, stat_result):
        # fingerprinted assets never change under the same name
        resp.headers["Cache-Control"] = "public, max-age=31536000, immutable"


app.mount("/static", CachedStaticFiles(directory=WEB), name="static")
templates = Jinja2Templates(directory=TEMPLATES)
templates.env.filters["format_date"] = format_date
templates.env.filters["format_time"] = format_time
templates.env.filters["truncate_text"] = truncate_text

settings = get_settings()
app.add_middleware(MaintenanceMiddleware)
app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")


def _fingerprint_asset(rel_path: str) -> str:
    """
    Copy ``site.css`` to ``site.<hash8>.css`` and return the versioned name
    (without /static). Falls back to the plain name when the file is missing.
    """
    src = pathlib.Path(WEB) / rel_path
    if not src.exists():
        return rel_path.replace("\\", "/")
    digest = hashlib.sha1(src.read_bytes()).hexdigest()[:8]
    dst = src.with_name(f"{src.stem}.{digest}{src.suffix}")
    if not dst.exists():
        shutil.copy2(src, dst)
    return dst.name


try:
    _css_fp = _fingerprint_asset("site.css")
except OSError as exc:
    logger.warning("Could not fingerprint site.css: %s", exc)
    _css_fp = "site.css"
CSS_HREF = f"/static/{_css_fp}"
app.state.css_href = CSS_HREF
app.state.templates = templates


@app.get("/favicon.ico")
def favicon():
    ico_path = os.path.join(WEB, "favicon.ico")
    if os.path.exists(ico_path):
        return FileResponse(ico_path, media_type="image/x-icon")
    return Response(status_code=204)


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    logger.error("Content error on %s: %s", request.url.path, exc.message)
    if request.url.path.startswith("/api/"):
        return JSONResponse({"success": False, "error": exc.message}, status_code=exc.status_code)
    return render(request, "error.html", {"status_code": exc.status_code, "detail": exc.message},
                  status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/api/"):
        return JSONResponse({"success": False, "error": exc.detail}, status_code=exc.status_code)
    template = "404.html" if exc.status_code == 404 else "error.html"
    return render(request, template, {"status_code": exc.status_code, "detail": exc.detail},
                  status_code=exc.status_code)


app.include_router(api_router.router)
app.include_router(forms_router.router)
app.include_router(pages_router.router)


def create_app() -> FastAPI:
    """Factory for uvicorn/gunicorn."""
    return app
