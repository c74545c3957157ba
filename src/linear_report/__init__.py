"""Timeline reports for linearizability analyses."""

from linear_report.analysis import Analysis, Transition, path
from linear_report.errors import ConfigurationError, LayoutError, LayoutOverflowError
from linear_report.layout import LayoutResult, build_layout, build_layout_with_step

__all__ = [
    "Analysis",
    "ConfigurationError",
    "LayoutError",
    "LayoutOverflowError",
    "LayoutResult",
    "Transition",
    "build_layout",
    "build_layout_with_step",
    "path",
]
