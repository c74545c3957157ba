"""Layout IR: the values the layout engine produces for a rendering backend."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Hashable, Mapping

from linear_report.analysis import Analysis, Coord, Path
from linear_report.history import Operation, OpType, PairIndex
from linear_report.model import Model, is_inconsistent

# Minimum horizontal distance between two placements on one track, in
# condensed time units. Six placements fit inside one unit.
MIN_STEP: Fraction = Fraction(1, 6)

# (x, y) → model occupying that point.
Grid = dict[tuple[Coord, int], Model]


@dataclass(frozen=True)
class Line:
    """A directed segment ending at a placement whose model is ``model``."""

    id: int
    model: Model
    x0: Coord
    y0: int
    x1: Coord
    y1: int

    @property
    def key(self) -> tuple[Coord, int, Coord, int, Model]:
        """Lines with equal keys are drawn identically and merge into one."""
        return (self.x0, self.y0, self.x1, self.y1, self.model)

    @property
    def inconsistent(self) -> bool:
        return is_inconsistent(self.model)


@dataclass(frozen=True)
class OpBox:
    """An operation's rectangle: ``[t1, t2]`` on track ``y``."""

    op: Operation
    t1: int
    t2: int
    y: int
    label: str
    type: OpType | None


@dataclass(frozen=True)
class LayoutResult:
    """Everything a rendering backend needs to draw one analysis.

    The mappings are read-only views.

    Attributes:
        history: The completed, indexed history.
        analysis: The analysis that was laid out.
        pair_index: Invocation ↔ completion lookup over ``history``.
        ops: Distinct operations on any final path.
        models: Distinct models on any final path.
        model_numbers: Model → small stable integer.
        process_coords: Process → track index (0, 1, 2, …).
        time_bounds: Raw ``(lower, upper)`` index window.
        time_coords: Op index → condensed ``(t1, t2)``.
        boxes: One ``OpBox`` per op in ``ops``.
        paths: Final paths with coordinates and canonical line ids.
        lines: Surviving lines by id.
        placements: Every placed point and the model occupying it.
    """

    history: tuple[Operation, ...]
    analysis: Analysis
    pair_index: PairIndex
    ops: tuple[Operation, ...]
    models: tuple[Model, ...]
    model_numbers: Mapping[Model, int]
    process_coords: Mapping[Hashable, int]
    time_bounds: tuple[int, int]
    time_coords: Mapping[int, tuple[int, int]]
    boxes: tuple[OpBox, ...]
    paths: tuple[Path, ...]
    lines: Mapping[int, Line]
    placements: Mapping[tuple[Coord, int], Model]
