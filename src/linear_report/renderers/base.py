"""Renderer protocol: the contract between the layout engine and a drawing backend."""

from __future__ import annotations

from typing import Protocol

from linear_report.layout.types import LayoutResult


class Renderer(Protocol):
    """Anything that turns a ``LayoutResult`` into a document.

    Backends read op boxes, lines and placements in logical units and apply
    their own scale; they must not mutate the result.
    """

    def render(self, result: LayoutResult) -> str: ...
