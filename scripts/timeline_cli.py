#!/usr/bin/env python3
"""CLI for inspecting persisted roadmaps and their timeline layout.

Usage examples:
    python scripts/timeline_cli.py                 # list roadmaps
    python scripts/timeline_cli.py --roadmap-id ID # print swimlane layout

Flags:
    --roadmap-id ID    Print the row-packed layout of one roadmap.
    --log-level LEVEL  Logging level (INFO, DEBUG, WARNING, ERROR).

Exit codes:
    0 on success, 2 if the roadmap is unknown, 1 on unexpected exception.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from roadmap_studio.schemas.layout import RoadmapLayout
from roadmap_studio.schemas.roadmap import Roadmap
from roadmap_studio.services.timeline.layout import compute_roadmap_layout


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect roadmaps and their timeline layout.")
    parser.add_argument(
        "--roadmap-id",
        type=str,
        default=None,
        help="Roadmap to lay out. Without it, all roadmaps are listed.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (e.g. INFO, DEBUG).",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    lvl = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def format_roadmap_list(roadmaps: List[Roadmap]) -> List[str]:
    if not roadmaps:
        return ["(no roadmaps)"]
    return [
        f"{r.id}  {r.title}  items={len(r.items)}  categories={len(r.categories)}  "
        f"updated={r.updated_at:%Y-%m-%d %H:%M}"
        for r in roadmaps
    ]


def format_layout(layout: RoadmapLayout) -> List[str]:
    lines = [f"window: {layout.window.start:%Y-%m-%d} -> {layout.window.end:%Y-%m-%d}"]
    lines.append("months: " + " | ".join(m.label for m in layout.months))
    for lane in layout.lanes:
        lines.append(f"{lane.category} ({lane.row_count} rows, {lane.height}px)")
        for placed in lane.items:
            g = placed.geometry
            lines.append(
                f"  [row {placed.row}] {placed.item.title}  "
                f"left={g.left:.1f}% width={g.width:.1f}% top={g.top:g}px"
            )
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    log = logging.getLogger(__name__)

    # Imported late so --help works without touching the database
    from roadmap_studio.main import build_default_store

    store = build_default_store()
    try:
        if args.roadmap_id is None:
            print("\n".join(format_roadmap_list(store.list_roadmaps())))
            return 0

        roadmap = store.get_roadmap(args.roadmap_id)
        if roadmap is None:
            log.error("timeline_cli.unknown_roadmap", extra={"roadmap_id": args.roadmap_id})
            return 2
        print("\n".join(format_layout(compute_roadmap_layout(roadmap))))
    except KeyboardInterrupt:
        log.warning("timeline_cli.interrupted")
        return 130
    except Exception:
        log.exception("timeline_cli.error")
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
