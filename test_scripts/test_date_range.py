from __future__ import annotations

from datetime import datetime

from roadmap_studio.services.timeline.date_range import compute_timeline_window
from roadmap_studio.utils.periods import add_months, iter_month_steps, month_label

from conftest import utc


def test_window_spans_earliest_start_and_latest_end(make_item, make_roadmap):
    roadmap = make_roadmap(
        items=[
            make_item(utc(2025, 3, 1), utc(2025, 3, 20)),
            make_item(utc(2025, 1, 5), utc(2025, 2, 1)),
            make_item(utc(2025, 2, 10), utc(2025, 6, 30), category="QA"),
        ]
    )
    window = compute_timeline_window(roadmap)
    assert window.start == utc(2025, 1, 5)
    assert window.end == utc(2025, 6, 30)


def test_empty_roadmap_defaults_to_three_months_from_now(make_roadmap):
    now = utc(2025, 1, 15, 9)
    window = compute_timeline_window(make_roadmap(), now=now)
    assert window.start == now
    assert window.end == utc(2025, 4, 15, 9)


def test_empty_window_clamps_to_month_end():
    assert add_months(utc(2024, 11, 30), 3) == utc(2025, 2, 28)
    assert add_months(utc(2023, 11, 30), 3) == utc(2024, 2, 29)


def test_inverted_item_still_inside_window(make_item, make_roadmap):
    roadmap = make_roadmap(items=[make_item(utc(2025, 5, 10), utc(2025, 5, 1))])
    window = compute_timeline_window(roadmap)
    assert window.start == utc(2025, 5, 1)
    assert window.end == utc(2025, 5, 10)


def test_window_does_not_modify_roadmap(make_item, make_roadmap):
    roadmap = make_roadmap(items=[make_item(utc(2025, 1, 1), utc(2025, 1, 2))])
    before = roadmap.model_dump()
    compute_timeline_window(roadmap)
    assert roadmap.model_dump() == before


def test_month_steps_and_labels():
    steps = list(iter_month_steps(utc(2025, 1, 31), utc(2025, 4, 30)))
    assert steps == [utc(2025, 1, 31), utc(2025, 2, 28), utc(2025, 3, 31), utc(2025, 4, 30)]
    assert [month_label(s) for s in steps] == ["Jan 2025", "Feb 2025", "Mar 2025", "Apr 2025"]
    assert add_months(utc(2025, 3, 15), -3) == utc(2024, 12, 15)


def test_naive_now_yields_utc_window(make_roadmap):
    window = compute_timeline_window(make_roadmap(), now=datetime(2025, 1, 15, 9))
    assert window.start == utc(2025, 1, 15, 9)
    assert window.end == utc(2025, 4, 15, 9)
    assert window.start.tzinfo is not None


def test_month_steps_stop_at_last_representable_year():
    steps = list(iter_month_steps(utc(9999, 11, 15), utc(9999, 12, 20)))
    assert steps == [utc(9999, 11, 15), utc(9999, 12, 15)]
