from .date_range import compute_timeline_window
from .row_packing import (
    intervals_overlap,
    assign_item_rows,
    pack_category,
    compute_row_layout,
)
from .geometry import compute_item_geometry, compute_lane_height
from .drag import compute_drag_target, drop_fraction_from_pointer, resolve_drag_request
from .layout import compute_roadmap_layout, get_category_color, month_labels

__all__ = [
    "compute_timeline_window",
    "intervals_overlap",
    "assign_item_rows",
    "pack_category",
    "compute_row_layout",
    "compute_item_geometry",
    "compute_lane_height",
    "compute_drag_target",
    "drop_fraction_from_pointer",
    "resolve_drag_request",
    "compute_roadmap_layout",
    "get_category_color",
    "month_labels",
]
