"""Public entry points."""

from __future__ import annotations

from typing import Iterable

from linear_report.analysis import Analysis
from linear_report.history import Operation
from linear_report.layout import build_layout
from linear_report.renderers.base import Renderer
from linear_report.renderers.svg import SvgRenderer


def render(history: Iterable[Operation], analysis: Analysis, renderer: Renderer) -> str:
    """Lay out ``analysis`` against ``history`` and hand the result to ``renderer``."""
    return renderer.render(build_layout(history, analysis))


def render_svg(history: Iterable[Operation], analysis: Analysis) -> str:
    """Lay out ``analysis`` against ``history`` and return an SVG document."""
    return render(history, analysis, SvgRenderer())
