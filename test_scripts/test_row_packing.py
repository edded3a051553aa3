from __future__ import annotations

import random
from datetime import timedelta
from itertools import combinations

import pytest

from roadmap_studio.errors import RoadmapPreconditionError, UnknownCategoryError
from roadmap_studio.services.timeline.row_packing import (
    assign_item_rows,
    compute_row_layout,
    intervals_overlap,
    pack_category,
    row_count,
)

from conftest import utc


def _rows(assignments):
    return {a.item.id: a.row for a in assignments}


def test_overlapping_items_get_separate_rows(make_item):
    a = make_item(utc(2025, 1, 1), utc(2025, 1, 10), id="A")
    b = make_item(utc(2025, 1, 5), utc(2025, 1, 15), id="B")
    assert _rows(assign_item_rows([a, b])) == {"A": 0, "B": 1}


def test_sequential_items_share_a_row(make_item):
    a = make_item(utc(2025, 1, 1), utc(2025, 1, 10), id="A")
    c = make_item(utc(2025, 1, 11), utc(2025, 1, 20), id="C")
    assert _rows(assign_item_rows([c, a])) == {"A": 0, "C": 0}


def test_touching_items_share_a_row(make_item):
    a = make_item(utc(2025, 1, 1), utc(2025, 1, 10), id="A")
    b = make_item(utc(2025, 1, 10), utc(2025, 1, 12), id="B")
    assert _rows(assign_item_rows([a, b])) == {"A": 0, "B": 0}
    # the inclusive overlap test still reports the shared instant
    assert intervals_overlap(a, b)


def test_empty_input_returns_empty_list():
    assert assign_item_rows([]) == []
    assert row_count([]) == 0


def test_first_fit_reuses_lowest_free_row(make_item):
    items = [
        make_item(utc(2025, 1, 1), utc(2025, 1, 31), id="long"),
        make_item(utc(2025, 1, 2), utc(2025, 1, 5), id="short1"),
        make_item(utc(2025, 1, 3), utc(2025, 1, 8), id="short2"),
        make_item(utc(2025, 1, 6), utc(2025, 1, 9), id="short3"),
    ]
    rows = _rows(assign_item_rows(items))
    assert rows == {"long": 0, "short1": 1, "short2": 2, "short3": 1}


def test_equal_start_dates_keep_input_order(make_item):
    first = make_item(utc(2025, 2, 1), utc(2025, 2, 5), id="first")
    second = make_item(utc(2025, 2, 1), utc(2025, 2, 3), id="second")
    result = assign_item_rows([first, second])
    assert [a.item.id for a in result] == ["first", "second"]
    assert _rows(result) == {"first": 0, "second": 1}

    swapped = assign_item_rows([second, first])
    assert _rows(swapped) == {"second": 0, "first": 1}


def test_packing_is_deterministic_and_non_overlapping(make_item):
    rng = random.Random(1234)
    base = utc(2025, 1, 1)
    items = []
    for i in range(200):
        start = base + timedelta(hours=rng.randint(0, 24 * 120))
        end = start + timedelta(hours=rng.randint(0, 24 * 20))
        items.append(make_item(start, end, id=f"r{i}"))

    first = assign_item_rows(items)
    second = assign_item_rows(list(items))
    assert _rows(first) == _rows(second)

    by_row = {}
    for a in first:
        by_row.setdefault(a.row, []).append(a.item)
    for row_items in by_row.values():
        for x, y in combinations(row_items, 2):
            # touching endpoints are allowed to share a row
            assert not (x.start_date < y.end_date and y.start_date < x.end_date)

    assert row_count(first) == len(by_row)
    assert sorted(by_row) == list(range(len(by_row)))


def test_inverted_item_is_packed_as_zero_length(make_item):
    inverted = make_item(utc(2025, 3, 10), utc(2025, 3, 1), id="inv")
    after = make_item(utc(2025, 3, 10), utc(2025, 3, 12), id="after")
    assert _rows(assign_item_rows([inverted, after])) == {"inv": 0, "after": 0}


def test_pack_category_filters_items(make_item, make_roadmap):
    roadmap = make_roadmap(
        items=[
            make_item(utc(2025, 1, 1), utc(2025, 1, 10), id="dev1", category="Dev"),
            make_item(utc(2025, 1, 1), utc(2025, 1, 10), id="qa1", category="QA"),
            make_item(utc(2025, 1, 2), utc(2025, 1, 4), id="dev2", category="Dev"),
        ]
    )
    assert _rows(pack_category(roadmap, "Dev")) == {"dev1": 0, "dev2": 1}
    assert _rows(compute_row_layout(roadmap, "QA")) == {"qa1": 0}


def test_pack_category_rejects_unknown_category(make_roadmap):
    roadmap = make_roadmap(categories=["Dev"])
    with pytest.raises(UnknownCategoryError) as exc:
        pack_category(roadmap, "Design")
    assert isinstance(exc.value, RoadmapPreconditionError)
    assert exc.value.category == "Design"


def test_packing_does_not_mutate_items(make_item):
    items = [make_item(utc(2025, 1, 5), utc(2025, 1, 6)), make_item(utc(2025, 1, 1), utc(2025, 1, 9))]
    snapshot = [i.model_dump() for i in items]
    assign_item_rows(items)
    assert [i.model_dump() for i in items] == snapshot
    assert [i.start_date for i in items] == [utc(2025, 1, 5), utc(2025, 1, 1)]
