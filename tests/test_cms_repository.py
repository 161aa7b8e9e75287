from __future__ import annotations

from datetime import date

from parish.domain.defaults import default_mass_times, default_settings


def test_lists_default_to_empty(repository):
    assert repository.get_news_articles() == []
    assert repository.get_events() == []
    assert repository.get_parish_groups() == []
    assert repository.get_gallery_albums() == []
    assert repository.get_newsletter_subscribers() == []


def test_settings_fall_back_to_defaults(repository):
    assert repository.get_website_settings() == default_settings()


def test_non_list_file_is_treated_as_empty(repository, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "events.json").write_text('{"oops": true}', encoding="utf-8")
    assert repository.get_events() == []


def test_initialize_default_data_seeds_missing_files(repository):
    seeded = repository.initialize_default_data(today=date(2025, 3, 1))
    assert set(seeded) == {"news.json", "events.json", "settings.json", "mass-times.json"}
    news = repository.get_news_articles()
    assert news[0]["slug"] == "welcome-to-our-new-website"
    assert news[0]["date"] == "2025-03-01"
    assert repository.get_mass_times() == default_mass_times()


def test_initialize_default_data_keeps_existing_content(repository):
    repository.save_news_articles([{"id": "x", "title": "Mine"}])
    seeded = repository.initialize_default_data()
    assert "news.json" not in seeded
    assert repository.get_news_articles() == [{"id": "x", "title": "Mine"}]
    assert repository.initialize_default_data() == []


def test_initialize_default_data_keeps_emptied_collections(repository):
    repository.initialize_default_data()
    repository.save_news_articles([])
    repository.save_events([])
    assert repository.initialize_default_data() == []
    assert repository.get_news_articles() == []
    assert repository.get_events() == []


def test_initialize_default_data_reseeds_unreadable_files(repository, data_dir):
    repository.initialize_default_data()
    (data_dir / "news.json").write_text("{not json", encoding="utf-8")
    assert repository.initialize_default_data() == ["news.json"]
