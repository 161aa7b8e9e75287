from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep the parish package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from parish.core import config as core_config
from parish.core.rate_limiter import reset_limits


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point DATA_DIR at a fresh temporary directory for every test."""
    directory = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(directory))
    for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM", "APP_ENV", "ADMIN_HOST"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    reset_limits()
    yield directory
    core_config.get_settings.cache_clear()
    reset_limits()


@pytest.fixture()
def repository():
    from parish.repositories.cms_repository import CMSRepository

    return CMSRepository()
