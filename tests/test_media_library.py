from __future__ import annotations

from parish.services import media_library


def test_search_podcasts_matches_guest_and_sorts_newest_first():
    hits = media_library.search_podcasts("SR CATHERINE")
    assert [e["id"] for e in hits] == ["prayer-life"]
    all_episodes = media_library.search_podcasts()
    assert all_episodes[0]["id"] == "walking-in-faith"
    assert [e["date"] for e in all_episodes] == sorted((e["date"] for e in all_episodes), reverse=True)


def test_category_filter_treats_all_and_blank_as_any():
    assert len(media_library.search_talks(category="All")) == len(media_library.TALKS)
    assert len(media_library.search_talks(category="")) == len(media_library.TALKS)
    assert [t["id"] for t in media_library.search_talks(category="Scripture")] == ["living-the-beatitudes"]
    assert media_library.search_talks("krisz", "Saints") == []


def test_categories_keep_first_seen_order():
    assert media_library.categories_of(media_library.TALKS)[:2] == ["Spiritual Formation", "Liturgy"]


def test_latest_newsletter_is_the_newest_issue():
    assert media_library.latest_newsletter()["date"] == "2025-01-26"


def test_community_stories():
    assert [s["slug"] for s in media_library.community_stories("Parish Events")] == ["pope-john-paul-ii-relics"]
    story = media_library.get_story("st-bakhita-group")
    assert media_library.has_full_story(story)
    assert not media_library.has_full_story(media_library.get_story("pope-john-paul-ii-relics"))
    assert media_library.get_story("missing") is None
