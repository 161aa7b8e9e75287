"""
File-backed JSON storage for the CMS.

Every content type is one JSON document under the data directory, read fully
into memory and overwritten wholesale. Readers get ``None`` when a file is
missing or unreadable and substitute their own defaults; writers get a bool.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
import os
import tempfile
import threading
from typing import Any

from parish.core.config import get_settings

logger = logging.getLogger(__name__)

NEWS_FILE = "news.json"
EVENTS_FILE = "events.json"
SETTINGS_FILE = "settings.json"
MASS_TIMES_FILE = "mass-times.json"
PARISH_GROUPS_FILE = "parish-groups.json"
GALLERY_FILE = "gallery.json"
NEWSLETTER_FILE = "newsletter.json"

_write_lock = threading.Lock()


def data_dir() -> Path:
    return Path(get_settings().data_dir)


def ensure_data_dir() -> Path:
    path = data_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_path(filename: str) -> Path:
    return data_dir() / filename


def read_json_file(filename: str) -> Any | None:
    path = data_path(filename)
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        logger.info("CMS file %s not found", path)
        return None
    except (OSError, ValueError) as exc:
        logger.error("Error reading %s: %s", filename, exc)
        return None


def write_json_file(filename: str, data: Any) -> bool:
    try:
        directory = ensure_data_dir()
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        with _write_lock:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{filename}.", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, directory / filename)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        return True
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Error writing %s: %s", filename, exc)
        return False
