"""IR Design — basic blocks of coalesced tape operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from . import constants


class OpKind(str, Enum):
    INCREMENT = "INCREMENT"
    SHIFT = "SHIFT"
    READ = "READ"
    WRITE = "WRITE"


class Op(BaseModel):
    """One tape operation.

    ``amount`` is the delta mod 256 for ``INCREMENT`` and the forward
    distance mod the memory size for ``SHIFT``; it is unused (0) for I/O.
    Decrement and move-left are increments/shifts by ``modulus - 1``.
    """

    model_config = ConfigDict(frozen=True)

    kind: OpKind
    amount: int = Field(default=0, ge=0)

    @classmethod
    def increment(cls, delta: int) -> Op:
        return cls(kind=OpKind.INCREMENT, amount=delta)

    @classmethod
    def shift(cls, distance: int) -> Op:
        return cls(kind=OpKind.SHIFT, amount=distance)

    @classmethod
    def read(cls) -> Op:
        return cls(kind=OpKind.READ)

    @classmethod
    def write(cls) -> Op:
        return cls(kind=OpKind.WRITE)

    def __str__(self) -> str:
        if self.kind in (OpKind.INCREMENT, OpKind.SHIFT):
            return f"{self.kind.value.lower()} {self.amount}"
        return self.kind.value.lower()


def _coalescing_modulus(kind: OpKind, memory_size: int) -> int:
    """Modulus that same-kind neighbours are summed under; 0 if never merged."""
    if kind == OpKind.INCREMENT:
        return constants.CELL_MODULUS
    if kind == OpKind.SHIFT:
        return memory_size
    return 0


@dataclass
class Block:
    """A straight-line run of ops, optionally heading a loop.

    ``next`` is the block run after this one. ``exit`` is set only on loop
    headers and names the block entered once the guard cell reads zero;
    the loop body is reached through ``next``. Both are indices into the
    owning ``Program.blocks``.
    """

    index: int
    ops: list[Op] = field(default_factory=list)
    next: int | None = None
    exit: int | None = None

    @property
    def is_loop_header(self) -> bool:
        return self.exit is not None

    def append(self, op: Op, memory_size: int) -> None:
        """Append *op*, merging it into a same-kind predecessor.

        Increments and shifts are summed under their modulus; a sum of zero
        removes the predecessor instead of leaving a no-op behind. Reads and
        writes are always kept as separate entries.
        """
        modulus = _coalescing_modulus(op.kind, memory_size)
        if not modulus:
            self.ops.append(op)
            return

        amount = op.amount % modulus
        if self.ops and self.ops[-1].kind == op.kind:
            amount = (self.ops[-1].amount + amount) % modulus
            if amount == 0:
                self.ops.pop()
            else:
                self.ops[-1] = Op(kind=op.kind, amount=amount)
            return

        if amount:
            self.ops.append(Op(kind=op.kind, amount=amount))


def _fmt_link(index: int | None) -> str:
    return "(none)" if index is None else str(index)


@dataclass
class Program:
    """An arena of blocks; ``blocks[entry]`` starts the ``next`` chain.

    Built once by the builder and only read afterwards.
    """

    memory_size: int = constants.DEFAULT_MEMORY_SIZE
    blocks: list[Block] = field(default_factory=list)
    entry: int = 0

    def new_block(self) -> Block:
        block = Block(index=len(self.blocks))
        self.blocks.append(block)
        return block

    def block(self, index: int) -> Block:
        return self.blocks[index]

    @property
    def root(self) -> Block:
        return self.blocks[self.entry]

    def loop_headers(self) -> Iterator[Block]:
        return (block for block in self.blocks if block.is_loop_header)

    def __str__(self) -> str:
        lines = [f"memory size: {self.memory_size}"]
        for block in self.blocks:
            kind = "  loop" if block.is_loop_header else ""
            lines.append(
                f"[block {block.index}]  next={_fmt_link(block.next)}"
                f"  exit={_fmt_link(block.exit)}{kind}"
            )
            for op in block.ops:
                lines.append(f"  {op}")
        return "\n".join(lines)
