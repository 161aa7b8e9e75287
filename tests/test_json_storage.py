from __future__ import annotations

import json

from parish.repositories import json_storage


def test_missing_file_reads_as_none():
    assert json_storage.read_json_file("news.json") is None


def test_write_then_read_round_trip(data_dir):
    payload = [{"id": "1", "title": "Fête"}]
    assert json_storage.write_json_file("news.json", payload) is True
    assert json_storage.read_json_file("news.json") == payload
    # stored as readable UTF-8, two-space indented
    text = (data_dir / "news.json").read_text(encoding="utf-8")
    assert "Fête" in text
    assert '\n  {' in text


def test_write_creates_data_directory(data_dir):
    assert not data_dir.exists()
    json_storage.write_json_file("events.json", [])
    assert data_dir.is_dir()


def test_corrupt_file_reads_as_none(data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "settings.json").write_text("{not json", encoding="utf-8")
    assert json_storage.read_json_file("settings.json") is None


def test_unserialisable_data_returns_false_and_keeps_old_file(data_dir):
    json_storage.write_json_file("news.json", [{"id": "1"}])
    assert json_storage.write_json_file("news.json", [object()]) is False
    assert json.loads((data_dir / "news.json").read_text(encoding="utf-8")) == [{"id": "1"}]
    assert not list(data_dir.glob("*.tmp"))
