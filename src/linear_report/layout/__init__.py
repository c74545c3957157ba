"""Layout engine: turns an analysis into boxes, placements and canonical lines.

Phases:
  1. Coordinate assignment (process tracks, condensed time)
  2. Path annotation (per-transition bounds)
  3. Line placement (collision-free points on a shared grid)
  4. Line deduplication (merge identical lines, retarget paths)
"""

from linear_report.layout.coords import (
    annotate_paths,
    condense_time_coords,
    distinct_models,
    distinct_ops,
    model_numbers,
    op_boxes,
    path_bounds,
    process_coords,
    time_bounds,
    time_coords,
)
from linear_report.layout.lines import (
    collapse_mapping,
    dedupe_lines,
    merge_lines,
    place_lines,
    place_path,
    paths_to_lines,
)
from linear_report.layout.pipeline import build_layout, build_layout_with_step
from linear_report.layout.types import MIN_STEP, Grid, LayoutResult, Line, OpBox

__all__ = [
    "MIN_STEP",
    "Grid",
    "LayoutResult",
    "Line",
    "OpBox",
    "annotate_paths",
    "build_layout",
    "build_layout_with_step",
    "collapse_mapping",
    "condense_time_coords",
    "dedupe_lines",
    "distinct_models",
    "distinct_ops",
    "merge_lines",
    "model_numbers",
    "op_boxes",
    "path_bounds",
    "paths_to_lines",
    "place_lines",
    "place_path",
    "process_coords",
    "time_bounds",
    "time_coords",
]
