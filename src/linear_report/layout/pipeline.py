"""Full layout pipeline: history + analysis → ``LayoutResult``."""

from __future__ import annotations

import logging
from fractions import Fraction
from types import MappingProxyType
from typing import Iterable

from linear_report.analysis import Analysis
from linear_report.errors import ConfigurationError
from linear_report.history import Operation, complete, index, pair_index
from linear_report.layout.coords import (
    annotate_paths,
    distinct_models,
    distinct_ops,
    model_numbers,
    op_boxes,
    process_coords,
    time_bounds,
    time_coords,
)
from linear_report.layout.lines import paths_to_lines
from linear_report.layout.types import MIN_STEP, LayoutResult

logger = logging.getLogger(__name__)


def prepare_history(history: Iterable[Operation]) -> tuple[Operation, ...]:
    """Use an indexed history as given; complete and index a raw one.

    Indices are never reassigned, so a window cut from a longer history keeps
    the numbering its analysis refers to.
    """
    hist = tuple(history)
    if all(op.index is not None for op in hist):
        return hist
    return tuple(index(complete(hist)))


def build_layout(history: Iterable[Operation], analysis: Analysis) -> LayoutResult:
    """Run the full layout pipeline with the default step."""
    return build_layout_with_step(history, analysis, MIN_STEP)


def build_layout_with_step(
    history: Iterable[Operation],
    analysis: Analysis,
    step: Fraction,
) -> LayoutResult:
    """Like ``build_layout`` but lets the caller choose the placement step."""
    if step <= 0:
        raise ConfigurationError(f"step must be positive, got {step}")

    hist = prepare_history(history)
    pairs = pair_index(hist)
    ops = distinct_ops(analysis)
    models = distinct_models(analysis)
    pcoords = process_coords(ops)
    bounds = time_bounds(pairs, analysis)
    tcoords = time_coords(pairs, bounds, ops)

    paths = annotate_paths(analysis, tcoords, pcoords)
    paths, lines, grid = paths_to_lines(paths, step)

    logger.debug(
        "laid out %d ops on %d tracks: %d paths, %d models, %d lines",
        len(ops),
        len(pcoords),
        len(paths),
        len(models),
        len(lines),
    )

    return LayoutResult(
        history=hist,
        analysis=analysis,
        pair_index=pairs,
        ops=tuple(ops),
        models=tuple(models),
        model_numbers=MappingProxyType(model_numbers(models)),
        process_coords=MappingProxyType(pcoords),
        time_bounds=bounds,
        time_coords=MappingProxyType(tcoords),
        boxes=tuple(op_boxes(ops, pairs, tcoords, pcoords)),
        paths=tuple(paths),
        lines=MappingProxyType(lines),
        placements=MappingProxyType(grid),
    )
