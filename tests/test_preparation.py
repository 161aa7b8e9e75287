from __future__ import annotations

from urllib.parse import parse_qs

import pytest

from parish.domain.preparation import (
    PHASE_INITIAL,
    PHASE_PREPARATION,
    PHASE_READY,
    UnknownTrackerError,
    get_tracker,
    variants_for,
)


def test_default_variant_and_unknown_steps_are_dropped():
    tracker = get_tracker("baptism", None, ["registration", "not-a-step"])
    assert tracker.variant == "infant"
    assert tracker.completed == {"registration"}


def test_progress_counts_required_steps_only():
    tracker = get_tracker("baptism", "infant", ["baptism-outfit"])
    assert tracker.required_total == 5
    assert tracker.progress == 0
    assert tracker.phase == PHASE_INITIAL

    tracker = get_tracker("baptism", "infant", ["registration", "baptism-outfit"])
    assert tracker.progress == 20
    assert tracker.phase == PHASE_PREPARATION


def test_all_required_steps_means_ready():
    required = [s.id for s in get_tracker("confirmation", "adult").steps if not s.optional]
    tracker = get_tracker("confirmation", "adult", required)
    assert tracker.progress == 100
    assert tracker.phase == PHASE_READY
    assert tracker.phase_message == "Congratulations! You're ready for confirmation"


def test_communion_messages_depend_on_variant():
    assert get_tracker("communion", "child").phase_message == (
        "Ready to begin your child's First Communion preparation journey"
    )
    assert get_tracker("communion", "adult").phase_message == (
        "Ready to begin your First Communion preparation journey"
    )


def test_toggle_and_query_for():
    tracker = get_tracker("baptism", "infant", ["registration"])
    query = parse_qs(tracker.query_for("godparents"))
    assert query == {"variant": ["infant"], "done": ["registration", "godparents"]}
    query = parse_qs(tracker.query_for("registration"))
    assert query == {"variant": ["infant"]}

    tracker.toggle("godparents")
    tracker.toggle("registration")
    tracker.toggle("bogus")
    assert tracker.completed == {"godparents"}


def test_as_dict_is_camel_cased():
    data = get_tracker("baptism", "adult", ["retreat"]).as_dict()
    assert data["requiredTotal"] == 5
    assert data["requiredDone"] == 0
    retreat = next(step for step in data["steps"] if step["id"] == "retreat")
    assert retreat["optional"] is True
    assert retreat["completed"] is True
    assert "nextAction" in retreat and "estimatedTime" in retreat


def test_unknown_trackers():
    assert variants_for("confirmation") == ["youth", "adult"]
    with pytest.raises(UnknownTrackerError):
        variants_for("matrimony")
    with pytest.raises(UnknownTrackerError):
        get_tracker("baptism", "teen")
