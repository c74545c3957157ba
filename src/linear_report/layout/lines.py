"""Line placement and deduplication.

Many candidate paths describe the same state transition at the same moment.
Placement puts equal models at equal points wherever their bounds allow, so
those transitions become geometrically identical lines; deduplication then
folds identical lines into one canonical line and retargets every path.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from fractions import Fraction
from typing import Iterable

import networkx as nx

from linear_report.analysis import Coord, Path, Transition
from linear_report.errors import ConfigurationError, LayoutError, LayoutOverflowError
from linear_report.layout.types import MIN_STEP, Grid, Line
from linear_report.model import Model

logger = logging.getLogger(__name__)

# ─── Line Placement ───────────────────────────────────────────────────────────


def place_path(path: Path, lines: list[Line], grid: Grid, step: Fraction = MIN_STEP) -> Path:
    """Place every transition of ``path``, appending connecting lines to ``lines``.

    Each transition lands at the leftmost point of its ``[min_x, max_x]`` bound
    that is at least ``step`` right of the previous placement and is not held
    by a different model. ``grid`` is shared across paths so collisions are
    global. The first transition gets no incoming line.
    """
    placed: list[Transition] = []
    x0: Coord | None = None
    y0: int | None = None

    for transition in path:
        if transition.y is None or transition.min_x is None or transition.max_x is None:
            raise ConfigurationError(f"transition {transition!r} has no coordinate bounds")

        y1 = transition.y
        model: Model = transition.model
        x1: Coord = transition.min_x if x0 is None else max(x0 + step, transition.min_x)

        while True:
            if x1 > transition.max_x:
                logger.warning(
                    "no room for %r on track %d: %s is outside [%s, %s]",
                    model,
                    y1,
                    x1,
                    transition.min_x,
                    transition.max_x,
                )
                raise LayoutOverflowError(transition, x1, transition.min_x, transition.max_x)
            point = (x1, y1)
            if point not in grid or grid[point] == model:
                break
            # Taken by another model.
            x1 += step

        grid[(x1, y1)] = model

        if x0 is None:
            placed.append(replace(transition, x=x1))
        else:
            line = Line(id=len(lines), model=model, x0=x0, y0=y0, x1=x1, y1=y1)
            lines.append(line)
            placed.append(replace(transition, x=x1, line_id=line.id))

        x0, y0 = x1, y1

    return tuple(placed)


def place_lines(paths: Iterable[Path], step: Fraction = MIN_STEP) -> tuple[list[Path], list[Line], Grid]:
    """Place all paths in order against one shared grid.

    Returns ``(paths, lines, grid)``: the paths with ``x`` and ``line_id`` set,
    every line in id order, and the final placement grid.
    """
    placed_paths: list[Path] = []
    lines: list[Line] = []
    grid: Grid = {}
    for p in paths:
        placed_paths.append(place_path(p, lines, grid, step))
    return placed_paths, lines, grid


# ─── Line Deduplication ───────────────────────────────────────────────────────


def merge_lines(lines: Iterable[Line]) -> tuple[dict[int, Line], dict[int, int]]:
    """Group lines by ``Line.key`` and keep the first line of each group.

    Returns ``(surviving, mapping)`` where ``surviving`` maps id → line and
    ``mapping`` maps each dropped id to the id that absorbed it.
    """
    surviving: dict[int, Line] = {}
    canonical: dict[tuple, int] = {}
    mapping: dict[int, int] = {}

    for line in lines:
        first = canonical.get(line.key)
        if first is None:
            canonical[line.key] = line.id
            surviving[line.id] = line
        else:
            mapping[line.id] = first

    return surviving, mapping


def collapse_mapping(mapping: dict[int, int]) -> dict[int, int]:
    """Flatten chains ``a → b → c`` so every key points at its final target.

    The mapping is treated as a directed graph; it must be acyclic.
    """
    graph: nx.DiGraph = nx.DiGraph()
    graph.add_edges_from(mapping.items())
    if not nx.is_directed_acyclic_graph(graph):
        raise LayoutError(f"line id remapping contains a cycle: {nx.find_cycle(graph)}")

    resolved: dict[int, int] = {}
    for key in mapping:
        chain = [key]
        target = mapping[key]
        while target in mapping and target not in resolved:
            chain.append(target)
            target = mapping[target]
        target = resolved.get(target, target)
        for k in chain:
            resolved[k] = target
    return resolved


def dedupe_lines(paths: Iterable[Path], lines: Iterable[Line]) -> tuple[list[Path], dict[int, Line]]:
    """Merge identical lines and point every transition at a surviving line."""
    lines = list(lines)
    surviving, mapping = merge_lines(lines)
    mapping = collapse_mapping(mapping)

    rewritten: list[Path] = []
    for p in paths:
        rewritten.append(
            tuple(
                t if t.line_id is None else replace(t, line_id=mapping.get(t.line_id, t.line_id))
                for t in p
            )
        )

    logger.debug("merged %d of %d lines", len(lines) - len(surviving), len(lines))
    return rewritten, surviving


def paths_to_lines(paths: Iterable[Path], step: Fraction = MIN_STEP) -> tuple[list[Path], dict[int, Line], Grid]:
    """Place and deduplicate: returns ``(paths, lines, grid)`` with canonical line ids."""
    placed, lines, grid = place_lines(paths, step)
    placed, surviving = dedupe_lines(placed, lines)
    return placed, surviving, grid
