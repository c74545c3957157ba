"""Tests for api.py — rendering through any Renderer."""

from __future__ import annotations

from linear_report.analysis import Analysis, path
from linear_report.api import render, render_svg
from linear_report.history import complete, index, invoke, ok
from linear_report.layout.types import LayoutResult
from linear_report.model import Register


class LineListRenderer:
    """Lists lines as text: one ``id: (x0, y0) -> (x1, y1)`` per row."""

    def render(self, result: LayoutResult) -> str:
        rows = []
        for line_id in sorted(result.lines):
            ln = result.lines[line_id]
            rows.append(f"{ln.id}: ({ln.x0}, {ln.y0}) -> ({ln.x1}, {ln.y1})")
        return "\n".join(rows)


def write_then_read():
    raw = [invoke(0, "write", 1), ok(0, "write", 1), invoke(1, "read"), ok(1, "read", 1)]
    h = index(complete(raw))
    return raw, Analysis(final_paths=(path(Register(), h[0], h[2]),), op=h[2])


class TestRender:
    def test_custom_renderer(self):
        """Any object with a matching render method can draw a layout."""
        raw, analysis = write_then_read()
        assert render(raw, analysis, LineListRenderer()) == "0: (0, 0) -> (2, 1)"

    def test_render_svg_uses_svg_backend(self):
        """render_svg is render with the SVG backend."""
        raw, analysis = write_then_read()
        svg = render_svg(raw, analysis)
        assert svg.startswith("<svg")
        assert 'id="line-0"' in svg
