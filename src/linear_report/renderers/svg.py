"""SVG renderer — renders a LayoutResult to an SVG string."""

from __future__ import annotations

from linear_report.analysis import Coord
from linear_report.history import OpType
from linear_report.layout.types import LayoutResult, Line, OpBox

# ─── Constants ──────────────────────────────────────────────────────────────

PROCESS_HEIGHT = 0.6  # op box height, in tracks
HSCALE = 150  # pixels per condensed time unit
VSCALE = 40  # pixels per track
FONT_FAMILY = "sans"

_TYPE_COLORS: dict[OpType | None, str] = {
    OpType.OK: "#B3F3B5",
    OpType.FAIL: "#F3B3B3",
    OpType.INFO: "#F2F3B3",
    None: "#F2F3B3",
}

_CONSISTENT_STROKE = "#000000"
_INCONSISTENT_STROKE = "#C51919"


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _fmt(v: float) -> str:
    return f"{v:g}"


# ─── Coordinate Helpers ─────────────────────────────────────────────────────


def hscale(x: Coord) -> float:
    """Condensed time units → horizontal pixels."""
    return float(x) * HSCALE


def vscale(y: Coord | float) -> float:
    """Tracks → vertical pixels."""
    return float(y) * VSCALE


# ─── Element Rendering ──────────────────────────────────────────────────────


def _render_box(box: OpBox) -> str:
    x = hscale(box.t1)
    y = vscale(box.y)
    w = hscale(box.t2 - box.t1)
    h = vscale(PROCESS_HEIGHT)
    r = vscale(0.1)
    fill = _TYPE_COLORS.get(box.type, _TYPE_COLORS[None])
    font_size = vscale(PROCESS_HEIGHT * 0.6)

    rect = (
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" '
        f'rx="{_fmt(r)}" ry="{_fmt(r)}" fill="{fill}"/>'
    )
    text = (
        f'<text x="{_fmt(x + w / 2)}" y="{_fmt(y + h / 2)}" fill="#000000" font-size="{_fmt(font_size)}" '
        f'font-family="{FONT_FAMILY}" dominant-baseline="central" text-anchor="middle">{_escape(box.label)}</text>'
    )
    return f"<g>{rect}{text}</g>"


def _render_line(line: Line) -> str:
    # Heading down the page: leave from the bottom of the upper box.
    down = line.y0 < line.y1
    y0 = line.y0 + PROCESS_HEIGHT if down else line.y0
    y1 = line.y1 if down else line.y1 + PROCESS_HEIGHT
    stroke = _INCONSISTENT_STROKE if line.inconsistent else _CONSISTENT_STROKE
    return (
        f'<line id="line-{line.id}" x1="{_fmt(hscale(line.x0))}" y1="{_fmt(vscale(y0))}" '
        f'x2="{_fmt(hscale(line.x1))}" y2="{_fmt(vscale(y1))}" '
        f'stroke-width="{_fmt(vscale(0.025))}" stroke="{stroke}"/>'
    )


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a LayoutResult, produces an SVG string."""

    def render(self, result: LayoutResult) -> str:
        if not result.boxes:
            return ""

        # One track of margin on every side.
        margin = vscale(1)
        max_t = max(box.t2 for box in result.boxes)
        max_y = max(box.y for box in result.boxes)
        svg_w = hscale(max_t) + 2 * margin
        svg_h = vscale(max_y + PROCESS_HEIGHT) + 2 * margin

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.0" width="{_fmt(svg_w)}" height="{_fmt(svg_h)}">',
            f'<g transform="translate({_fmt(margin)},{_fmt(margin)})">',
        ]

        # Lines go under the boxes.
        parts.append("<g>")
        for line_id in sorted(result.lines):
            parts.append(_render_line(result.lines[line_id]))
        parts.append("</g>")

        parts.append("<g>")
        for box in result.boxes:
            parts.append(_render_box(box))
        parts.append("</g>")

        parts.append("</g>")
        parts.append("</svg>")
        return "\n".join(parts)
