"""Construct new roadmaps and items with generated ids.

Ids are random hex strings (uuid4), unique enough that the store never has
to deduplicate them.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from roadmap_studio.schemas.roadmap import Roadmap, RoadmapItem, RoadmapTemplate

DEFAULT_CATEGORIES = ["Planning", "Development", "Testing", "Launch"]
DEFAULT_ITEM_DAYS = 14
FALLBACK_ITEM_CATEGORY = "General"


def _now() -> datetime:
	return datetime.now(timezone.utc)


def generate_id() -> str:
	return uuid.uuid4().hex


def create_empty_roadmap(title: str = "Untitled Roadmap", now: Optional[datetime] = None) -> Roadmap:
	"""Blank roadmap with the default category set."""
	ts = now or _now()
	return Roadmap(
		id=generate_id(),
		title=title,
		description="",
		items=[],
		categories=list(DEFAULT_CATEGORIES),
		created_at=ts,
		updated_at=ts,
	)


def create_roadmap_from_template(
	title: str,
	description: str,
	categories: Sequence[str],
	now: Optional[datetime] = None,
) -> Roadmap:
	"""Roadmap seeded with a template's categories (duplicates and blanks dropped)."""
	ts = now or _now()
	seen: list[str] = []
	for c in categories:
		name = c.strip()
		if name and name not in seen:
			seen.append(name)
	return Roadmap(
		id=generate_id(),
		title=title,
		description=description,
		items=[],
		categories=seen,
		created_at=ts,
		updated_at=ts,
	)


def roadmap_from_template(template: RoadmapTemplate, title: Optional[str] = None) -> Roadmap:
	return create_roadmap_from_template(title or template.name, template.description, template.categories)


def new_roadmap_item(
	title: str,
	categories: Sequence[str],
	*,
	description: str = "",
	start_date: Optional[datetime] = None,
	end_date: Optional[datetime] = None,
	category: Optional[str] = None,
	progress: int = 0,
) -> RoadmapItem:
	"""New item with form defaults: starts now, lasts two weeks, first category."""
	start = start_date or _now()
	end = end_date or (start + timedelta(days=DEFAULT_ITEM_DAYS))
	return RoadmapItem(
		id=generate_id(),
		title=title,
		description=description,
		start_date=start,
		end_date=end,
		category=category or (categories[0] if categories else FALLBACK_ITEM_CATEGORY),
		progress=progress,
	)


__all__ = [
	"DEFAULT_CATEGORIES",
	"generate_id",
	"create_empty_roadmap",
	"create_roadmap_from_template",
	"roadmap_from_template",
	"new_roadmap_item",
]
