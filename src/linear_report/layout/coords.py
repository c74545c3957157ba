"""Coordinate assignment and path annotation.

Tracks:  each process gets a dense integer track 0, 1, 2, … . Visual spacing
         between tracks is the renderer's job (it scales tracks by a fixed
         height).
Time:    each op gets a ``[t1, t2]`` interval of *condensed* time: raw history
         indices re-ranked to 0, 1, 2, … so quiet stretches of the history
         take no room.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Hashable, Iterable

from linear_report.analysis import Analysis, Path
from linear_report.errors import ConfigurationError
from linear_report.history import Operation, PairIndex, processes, sort_processes
from linear_report.layout.types import OpBox
from linear_report.model import Model

# ─── Analysis Summaries ───────────────────────────────────────────────────────


def distinct_ops(analysis: Analysis) -> list[Operation]:
    """Distinct ops across all final paths, in order of first appearance."""
    seen: dict[int, Operation] = {}
    for p in analysis.final_paths:
        for transition in p:
            op = transition.op
            if op.index is None:
                raise ConfigurationError(f"operation {op!r} has not been indexed")
            seen.setdefault(op.index, op)
    return list(seen.values())


def distinct_models(analysis: Analysis) -> list[Model]:
    """Distinct models (by equality) across all final paths."""
    seen: dict[Model, None] = {}
    for p in analysis.final_paths:
        for transition in p:
            seen.setdefault(transition.model, None)
    return list(seen)


def model_numbers(models: Iterable[Model]) -> dict[Model, int]:
    return {model: i for i, model in enumerate(models)}


# ─── Process Coordinates ──────────────────────────────────────────────────────


def process_coords(ops: Iterable[Operation]) -> dict[Hashable, int]:
    """Map each process referenced by ``ops`` to a unique track, starting at 0."""
    return {process: i for i, process in enumerate(sort_processes(processes(ops)))}


# ─── Time Coordinates ─────────────────────────────────────────────────────────


def time_bounds(pair_index: PairIndex, analysis: Analysis) -> tuple[int, int]:
    """Raw ``(lower, upper)`` index window for rendering an analysis.

    The window opens just before the invocation of the last known-good op
    (or at 0 when there is none) and closes just after the completion of the
    final op.
    """
    prior = pair_index.invocation(analysis.previous_ok)
    lower = (prior.index if prior is not None else 1) - 1

    final = pair_index.completion(analysis.op)
    if final is None or final.index is None:
        raise ConfigurationError(f"final operation {analysis.op!r} has no completion")
    return (lower, final.index + 1)


def condense_time_coords(coords: dict[int, tuple[int, int]]) -> dict[int, tuple[int, int]]:
    """Re-rank every endpoint in ``coords`` to its position among all distinct endpoints."""
    endpoints = sorted({t for interval in coords.values() for t in interval})
    rank = {t: i for i, t in enumerate(endpoints)}
    return {k: (rank[t1], rank[t2]) for k, (t1, t2) in coords.items()}


def time_coords(
    pair_index: PairIndex,
    bounds: tuple[int, int],
    ops: Iterable[Operation],
) -> dict[int, tuple[int, int]]:
    """Map op indices to condensed ``(start, end)`` coordinates within ``bounds``.

    Ops invoked before the window are clipped to its lower edge; ops that
    never completed run to its upper edge.
    """
    tmin, tmax = bounds
    coords: dict[int, tuple[int, int]] = {}
    for op in ops:
        if op.index is None:
            raise ConfigurationError(f"operation {op!r} has not been indexed")
        inv = pair_index.invocation(op)
        if inv is None:
            raise ConfigurationError(f"operation {op!r} has no invocation")
        comp = pair_index.completion(op)

        t1 = max(tmin, inv.index)
        t2 = comp.index if comp is not None else tmax
        coords[op.index] = (t1 - tmin, t2 - tmin)
    return condense_time_coords(coords)


def op_boxes(
    ops: Iterable[Operation],
    pair_index: PairIndex,
    tcoords: dict[int, tuple[int, int]],
    pcoords: dict[Hashable, int],
) -> list[OpBox]:
    """One labelled rectangle per op, colored downstream by its completion type."""
    boxes: list[OpBox] = []
    for op in ops:
        t1, t2 = tcoords[op.index]
        comp = pair_index.completion(op)
        boxes.append(
            OpBox(
                op=op,
                t1=t1,
                t2=t2,
                y=pcoords[op.process],
                label=f"{op.f} {op.value!r}",
                type=comp.type if comp is not None else None,
            )
        )
    return boxes


# ─── Path Annotation ──────────────────────────────────────────────────────────


def path_bounds(
    path: Path,
    tcoords: dict[int, tuple[int, int]],
    pcoords: dict[Hashable, int],
) -> Path:
    """Give every transition its track ``y`` and its ``[min_x, max_x]`` bound."""
    annotated = []
    for transition in path:
        op = transition.op
        if op.process not in pcoords:
            raise ConfigurationError(f"operation {op!r} references an unrecognized process")
        if op.index not in tcoords:
            raise ConfigurationError(f"operation {op!r} has no time coordinates")
        t1, t2 = tcoords[op.index]
        annotated.append(replace(transition, y=pcoords[op.process], min_x=t1, max_x=t2))
    return tuple(annotated)


def annotate_paths(
    analysis: Analysis,
    tcoords: dict[int, tuple[int, int]],
    pcoords: dict[Hashable, int],
) -> list[Path]:
    return [path_bounds(p, tcoords, pcoords) for p in analysis.final_paths]
