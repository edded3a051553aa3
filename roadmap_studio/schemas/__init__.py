from .roadmap import RoadmapItem, Roadmap, RoadmapTemplate
from .layout import (
    TimelineWindow,
    RowAssignment,
    ItemGeometry,
    PlacedItem,
    LaneLayout,
    MonthLabel,
    RoadmapLayout,
    DragRequest,
)

__all__ = [
    "RoadmapItem",
    "Roadmap",
    "RoadmapTemplate",
    "TimelineWindow",
    "RowAssignment",
    "ItemGeometry",
    "PlacedItem",
    "LaneLayout",
    "MonthLabel",
    "RoadmapLayout",
    "DragRequest",
]
