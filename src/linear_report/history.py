"""Operation histories: completion, indexing, and invocation/completion pairing.

A history is a list of ``Operation`` values in the order they were observed.
The layout engine needs it *completed* (every invocation has a completion)
and *indexed* (every op knows its position), and it looks partners up through
a ``PairIndex``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Hashable, Iterable

from linear_report.errors import ConfigurationError

logger = logging.getLogger(__name__)


class OpType(Enum):
    INVOKE = "invoke"
    OK = "ok"
    FAIL = "fail"
    INFO = "info"


@dataclass(frozen=True)
class Operation:
    """One half of a process's interaction with the system under test.

    ``type`` is ``OpType.INVOKE`` for the invocation phase; ``OK``, ``FAIL`` and
    ``INFO`` are the success, failure and indeterminate completions.
    ``index`` is ``None`` until the history has been indexed.
    """

    process: Hashable
    type: OpType
    f: str
    value: Any = None
    index: int | None = None

    @property
    def is_invoke(self) -> bool:
        return self.type is OpType.INVOKE


def invoke(process: Hashable, f: str, value: Any = None) -> Operation:
    return Operation(process=process, type=OpType.INVOKE, f=f, value=value)


def ok(process: Hashable, f: str, value: Any = None) -> Operation:
    return Operation(process=process, type=OpType.OK, f=f, value=value)


def fail(process: Hashable, f: str, value: Any = None) -> Operation:
    return Operation(process=process, type=OpType.FAIL, f=f, value=value)


def info(process: Hashable, f: str, value: Any = None) -> Operation:
    return Operation(process=process, type=OpType.INFO, f=f, value=value)


# ─── Completion & Indexing ────────────────────────────────────────────────────


def complete(history: Iterable[Operation]) -> list[Operation]:
    """Pair every invocation with a completion.

    Successful completions copy their value back onto the invocation, since a
    read's result is only known once it returns. Invocations still pending at
    the end of the history get a synthesized ``info`` completion appended.
    """
    result: list[Operation] = []
    pending: dict[Hashable, int] = {}  # process → position of open invocation

    for op in history:
        if op.is_invoke:
            if op.process in pending:
                raise ConfigurationError(f"process {op.process!r} invoked {op.f} while another call is pending")
            pending[op.process] = len(result)
            result.append(op)
            continue

        pos = pending.pop(op.process, None)
        if pos is None:
            raise ConfigurationError(f"completion {op!r} has no pending invocation")
        if op.type is OpType.OK:
            result[pos] = replace(result[pos], value=op.value)
        result.append(op)

    # Unfinished calls, in invocation order.
    for pos in sorted(pending.values()):
        inv = result[pos]
        result.append(Operation(process=inv.process, type=OpType.INFO, f=inv.f, value=inv.value))

    if pending:
        logger.debug("synthesized %d info completions", len(pending))
    return result


def index(history: Iterable[Operation]) -> list[Operation]:
    """Return copies of ``history`` with ``index`` set to each op's position."""
    return [replace(op, index=i) for i, op in enumerate(history)]


# ─── Pair Index ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PairIndex:
    """Read-only lookup between invocations and completions, by op index."""

    partners: dict[int, Operation] = field(default_factory=dict)

    def partner(self, op: Operation) -> Operation | None:
        if op.index is None:
            raise ConfigurationError(f"operation {op!r} has not been indexed")
        return self.partners.get(op.index)

    def invocation(self, op: Operation | None) -> Operation | None:
        """The invocation side of ``op``; ``op`` itself if it is one."""
        if op is None:
            return None
        if op.is_invoke:
            return op
        return self.partner(op)

    def completion(self, op: Operation | None) -> Operation | None:
        """The completion side of ``op``, or ``None`` if it never completed."""
        if op is None:
            return None
        if not op.is_invoke:
            return op
        return self.partner(op)


def pair_index(history: Iterable[Operation]) -> PairIndex:
    """Build a ``PairIndex`` over an indexed history."""
    partners: dict[int, Operation] = {}
    pending: dict[Hashable, Operation] = {}

    for op in history:
        if op.index is None:
            raise ConfigurationError(f"operation {op!r} has not been indexed")
        if op.is_invoke:
            pending[op.process] = op
            continue
        inv = pending.pop(op.process, None)
        if inv is None:
            raise ConfigurationError(f"completion {op!r} has no pending invocation")
        partners[inv.index] = op
        partners[op.index] = inv

    return PairIndex(partners=partners)


# ─── Processes ────────────────────────────────────────────────────────────────


def processes(ops: Iterable[Operation]) -> set[Hashable]:
    """The distinct processes referenced by ``ops``."""
    return {op.process for op in ops}


def _process_key(process: Hashable) -> tuple[int, Any]:
    # bool is an int subclass but is never a valid process id.
    if isinstance(process, int) and not isinstance(process, bool):
        return (0, process)
    if isinstance(process, str):
        return (1, process)
    raise ConfigurationError(f"unrecognized process {process!r}")


def sort_processes(procs: Iterable[Hashable]) -> list[Hashable]:
    """Numeric processes first, in numeric order; named ones (e.g. ``"nemesis"``) after."""
    return sorted(procs, key=_process_key)
