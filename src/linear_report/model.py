"""Abstract models of the system under test.

Models are immutable values compared by structure, so equal states reached
along different paths hash and compare equal. That is what lets the layout
engine share placements and merge lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from linear_report.history import Operation


class Model:
    """Base class for model states. Subclasses are frozen dataclasses."""

    def step(self, op: Operation) -> Model:
        """Apply ``op`` and return the next state, or an ``Inconsistent`` one."""
        raise NotImplementedError


@dataclass(frozen=True)
class Inconsistent(Model):
    """A state reached by applying an operation the model could not accept."""

    msg: str

    def step(self, op: Operation) -> Model:
        return self

    def __str__(self) -> str:
        return self.msg


def is_inconsistent(model: Any) -> bool:
    return isinstance(model, Inconsistent)


def freeze(value: Any) -> Any:
    """Hashable equivalent of a history value: lists become tuples, sets frozensets."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    if isinstance(value, dict):
        return frozenset((freeze(k), freeze(v)) for k, v in value.items())
    return value


@dataclass(frozen=True)
class Register(Model):
    """A single read/write register."""

    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", freeze(self.value))

    def step(self, op: Operation) -> Model:
        if op.f == "write":
            return Register(op.value)
        if op.f == "read":
            if op.value is None or freeze(op.value) == self.value:
                return self
            return Inconsistent(f"can't read {op.value!r} from register {self.value!r}")
        return Inconsistent(f"unknown operation {op.f!r}")

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class CASRegister(Model):
    """A register supporting compare-and-set; ``cas`` values are ``(old, new)`` pairs."""

    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", freeze(self.value))

    def step(self, op: Operation) -> Model:
        if op.f == "write":
            return CASRegister(op.value)
        if op.f == "cas":
            old, new = op.value
            if freeze(old) == self.value:
                return CASRegister(new)
            return Inconsistent(f"can't CAS {self.value!r} from {old!r} to {new!r}")
        if op.f == "read":
            if op.value is None or freeze(op.value) == self.value:
                return self
            return Inconsistent(f"can't read {op.value!r} from register {self.value!r}")
        return Inconsistent(f"unknown operation {op.f!r}")

    def __str__(self) -> str:
        return repr(self.value)
