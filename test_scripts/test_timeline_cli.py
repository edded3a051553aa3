from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import timeline_cli  # noqa: E402
from roadmap_studio.services.timeline.layout import compute_roadmap_layout  # noqa: E402

from conftest import utc  # noqa: E402


@pytest.fixture
def cli_store(store, monkeypatch):
    import roadmap_studio.main as main_module

    monkeypatch.setattr(main_module, "build_default_store", lambda: store)
    return store


def test_parse_args_defaults():
    args = timeline_cli.parse_args([])
    assert args.roadmap_id is None
    assert args.log_level == "WARNING"


def test_format_roadmap_list(make_roadmap):
    assert timeline_cli.format_roadmap_list([]) == ["(no roadmaps)"]
    (line,) = timeline_cli.format_roadmap_list([make_roadmap()])
    assert line.startswith("rm-1  Platform  items=0  categories=2")
    assert line.endswith("updated=2025-01-01 00:00")


def test_format_layout(make_roadmap, make_item):
    roadmap = make_roadmap(
        items=[
            make_item(utc(2025, 1, 1), utc(2025, 1, 11), title="Kickoff"),
            make_item(utc(2025, 1, 6), utc(2025, 1, 11), title="Build"),
        ]
    )
    lines = timeline_cli.format_layout(compute_roadmap_layout(roadmap))
    assert lines == [
        "window: 2025-01-01 -> 2025-01-11",
        "months: Jan 2025",
        "Dev (2 rows, 80px)",
        "  [row 0] Kickoff  left=0.0% width=100.0% top=0px",
        "  [row 1] Build  left=50.0% width=50.0% top=76px",
    ]


def test_main_lists_roadmaps(cli_store, make_roadmap, capsys):
    cli_store.add_roadmap(make_roadmap())
    assert timeline_cli.main([]) == 0
    assert "rm-1  Platform" in capsys.readouterr().out


def test_main_prints_layout(cli_store, make_roadmap, make_item, capsys):
    cli_store.add_roadmap(make_roadmap(items=[make_item(utc(2025, 1, 1), utc(2025, 1, 2), title="Only")]))
    assert timeline_cli.main(["--roadmap-id", "rm-1"]) == 0
    assert "[row 0] Only" in capsys.readouterr().out


def test_main_unknown_roadmap_exit_code(cli_store):
    assert timeline_cli.main(["--roadmap-id", "missing"]) == 2
