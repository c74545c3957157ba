"""Analysis results: candidate explanation paths made of transitions."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from linear_report.history import Operation
from linear_report.model import Model, is_inconsistent

Coord = Union[int, Fraction]


@dataclass(frozen=True)
class Transition:
    """An operation and the model state it produced along one path.

    ``y``, ``min_x`` and ``max_x`` are filled in by path annotation; ``x`` and
    ``line_id`` by line placement. ``line_id`` stays ``None`` for the first
    transition of a path, which has no incoming line.
    """

    op: Operation
    model: Model
    y: int | None = None
    min_x: int | None = None
    max_x: int | None = None
    x: Coord | None = None
    line_id: int | None = None

    @property
    def inconsistent(self) -> bool:
        return is_inconsistent(self.model)


Path = tuple[Transition, ...]


@dataclass(frozen=True)
class Analysis:
    """What the linearizability search hands over for rendering.

    Attributes:
        final_paths: Candidate explanations, each an ordered path of transitions.
        op: The final operation the search considered.
        previous_ok: The last operation known to be consistent, if any.
    """

    final_paths: tuple[Path, ...]
    op: Operation
    previous_ok: Operation | None = None


def path(model: Model, *ops: Operation) -> Path:
    """Step ``model`` through ``ops`` in order, recording a transition for each."""
    transitions: list[Transition] = []
    for op in ops:
        model = model.step(op)
        transitions.append(Transition(op=op, model=model))
    return tuple(transitions)
