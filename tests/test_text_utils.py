from __future__ import annotations

from datetime import date

import pytest

from parish.core import utils
from parish.domain.text import calculate_read_time, generate_id, slugify


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Welcome to Our New Website", "welcome-to-our-new-website"),
        ("St Saviour's Summer Fête!", "st-saviours-summer-fte"),
        ("  spaced__out -- title ", "spaced-out-title"),
        (None, ""),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_read_time_has_a_one_minute_floor():
    assert calculate_read_time("") == 1
    assert calculate_read_time("word " * 201) == 2


def test_generate_id_is_unique_base36():
    ids = {generate_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.isalnum() and i == i.lower() for i in ids)


def test_format_date_and_time():
    assert utils.format_date("2025-07-06") == "6 July 2025"
    assert utils.format_date(date(2025, 12, 25)) == "25 December 2025"
    assert utils.format_date("someday") == "someday"
    assert utils.format_time("18:30") == "6:30 PM"
    assert utils.format_time("00:05") == "12:05 AM"
    assert utils.format_time("10:00 AM") == "10:00 AM"


def test_truncate_text():
    assert utils.truncate_text("short", 10) == "short"
    assert utils.truncate_text("a longer sentence", 8) == "a longer..."


def test_contrast_colour():
    assert utils.get_contrast_color("#ffffff") == "black"
    assert utils.get_contrast_color("#000") == "white"


def test_uk_phone_numbers():
    assert utils.is_valid_phone_uk("020 8852 7411")
    assert utils.is_valid_phone_uk("+44 7700 900123")
    assert not utils.is_valid_phone_uk("12345")


def test_absolute_url(monkeypatch):
    assert utils.absolute_url("/donate", base="https://example.org/") == "https://example.org/donate"
    assert utils.absolute_url("https://other.org/x") == "https://other.org/x"
    assert utils.absolute_url("", base="https://example.org") == "https://example.org/"
