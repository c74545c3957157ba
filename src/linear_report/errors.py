"""Errors raised by the layout engine."""

from __future__ import annotations

from typing import Any


class LayoutError(Exception):
    """Base class for every failure the layout engine reports."""


class ConfigurationError(LayoutError):
    """Input history, analysis, or settings are malformed or inconsistent."""


class LayoutOverflowError(LayoutError):
    """No free placement exists for a transition inside its time bound.

    Raised when more distinct models compete for one process track than the
    interval ``[min_x, max_x]`` can hold at the configured step.
    """

    def __init__(self, transition: Any, candidate: Any, min_x: Any, max_x: Any) -> None:
        self.transition = transition
        self.candidate = candidate
        self.min_x = min_x
        self.max_x = max_x
        super().__init__(f"{candidate} is outside [{min_x}, {max_x}] for {transition!r}")
