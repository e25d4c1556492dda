"""Target — per-target rendering strategy driven by the emitter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..ir import Block, Op, OpKind


class Target(ABC):
    """Renders the preamble, postamble, loop boundaries and ops of one target.

    Every method returns the text to append to the output, one line per
    emitted instruction/label, each terminated by a newline. ``depth`` is the
    loop nesting level of the rendered line.
    """

    NAME: str = ""

    def __init__(self, memory_size: int):
        self._memory_size = memory_size
        self._OP_DISPATCH: dict[OpKind, Callable[[Op, int], str]] = {
            OpKind.INCREMENT: lambda op, depth: self.increment(op.amount, depth),
            OpKind.SHIFT: lambda op, depth: self.shift(op.amount, depth),
            OpKind.READ: lambda op, depth: self.read(depth),
            OpKind.WRITE: lambda op, depth: self.write(depth),
        }

    @property
    def memory_size(self) -> int:
        return self._memory_size

    def render_op(self, op: Op, depth: int) -> str:
        return self._OP_DISPATCH[op.kind](op, depth)

    def preamble(self) -> str:
        return ""

    def postamble(self) -> str:
        return ""

    @abstractmethod
    def loop_open(self, header: Block, depth: int) -> str: ...

    @abstractmethod
    def loop_close(self, header: Block, depth: int) -> str: ...

    @abstractmethod
    def increment(self, delta: int, depth: int) -> str: ...

    @abstractmethod
    def shift(self, distance: int, depth: int) -> str: ...

    @abstractmethod
    def read(self, depth: int) -> str: ...

    @abstractmethod
    def write(self, depth: int) -> str: ...
