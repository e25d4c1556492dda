"""Templates shared by the NASM targets.

The tape is ``mem``, a ``memory_size``-byte data array; the cell pointer
lives in ``POINTER`` for the whole program. Loop labels are disambiguated by
the header's block index so sibling loops never collide.
"""

from __future__ import annotations

from ..ir import Block
from .. import constants
from ._base import Target


def _lines(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines)


class NasmTarget(Target):
    """Structural translation common to both assembly dialects."""

    # Register used in effective addresses, and its 32-bit view for arithmetic.
    POINTER: str = "esi"
    POINTER32: str = "esi"

    @property
    def cell(self) -> str:
        return f"[mem + {self.POINTER}]"

    def loop_label(self, header: Block) -> str:
        return f"{constants.LOOP_LABEL_PREFIX}{header.index}"

    def end_label(self, header: Block) -> str:
        return f"{constants.END_LABEL_PREFIX}{header.index}"

    def loop_open(self, header: Block, depth: int) -> str:
        return _lines(
            f"{self.loop_label(header)}:",
            f"cmp byte {self.cell}, 0",
            f"je {self.end_label(header)}",
        )

    def loop_close(self, header: Block, depth: int) -> str:
        return _lines(
            f"jmp {self.loop_label(header)}",
            f"{self.end_label(header)}:",
        )

    def increment(self, delta: int, depth: int) -> str:
        return _lines(f"add byte {self.cell}, {delta}")

    def shift(self, distance: int, depth: int) -> str:
        # pointer = (pointer + distance) mod memory_size, remainder left in edx
        return _lines(
            f"add {self.POINTER32}, {distance}",
            "xor edx, edx",
            f"mov eax, {self.POINTER32}",
            f"mov ecx, {self.memory_size}",
            "div ecx",
            f"mov {self.POINTER32}, edx",
        )

    def data_section(self) -> str:
        return _lines(
            "section .data",
            f"mem db {self.memory_size} dup(0)",
        )
