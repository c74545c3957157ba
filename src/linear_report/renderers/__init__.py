from linear_report.renderers.base import Renderer
from linear_report.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
