"""
Configuration helpers for the parish site.

Settings are read once from the environment (public base URL, data directory,
SMTP, admin hosts, etc.) so that routers/services do not fetch os.environ
directly. Tests call ``get_settings.cache_clear()`` after changing env vars.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    data_dir: str
    log_level: str
    site_timezone: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    parish_office_email: str
    admin_hosts: tuple[str, ...]
    upload_max_bytes: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _hosts(value: str | None) -> tuple[str, ...]:
        hosts = [h.strip() for h in (value or "").split(",") if h.strip()]
        hosts.extend(["localhost:8001", "127.0.0.1:8001"])
        return tuple(dict.fromkeys(hosts))

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "https://saintsaviours.org.uk").rstrip("/"),
        data_dir=os.getenv("DATA_DIR") or str(PROJECT_ROOT / "data"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        site_timezone=os.getenv("SITE_TIMEZONE", "Europe/London"),
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_password=os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("SMTP_FROM", os.getenv("SMTP_USER", "")),
        parish_office_email=os.getenv("PARISH_OFFICE_EMAIL", "parish@saintsaviours.org.uk"),
        admin_hosts=_hosts(os.getenv("ADMIN_HOST")),
        upload_max_bytes=_int(os.getenv("UPLOAD_MAX_BYTES", str(5 * 1024 * 1024)), 5 * 1024 * 1024),
    )
