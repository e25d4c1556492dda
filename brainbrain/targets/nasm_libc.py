"""C-runtime target — 64-bit System V, I/O and exit through libc calls."""

from __future__ import annotations

from .. import constants
from ._nasm import NasmTarget, _lines


class NasmLibcTarget(NasmTarget):
    """Pointer in ``rbx``, callee-saved so it survives ``getchar``/``putchar``.

    ``main`` pushes ``rbx``, which also restores the 16-byte stack alignment
    the calls require. Link without PIE: ``mem`` is addressed absolutely.
    """

    NAME = constants.TARGET_NASM_LIBC
    POINTER = "rbx"
    POINTER32 = "ebx"

    def preamble(self) -> str:
        return (
            _lines(
                "extern getchar",
                "extern putchar",
                "extern exit",
                "global main",
                "",
            )
            + self.data_section()
            + _lines(
                "",
                "section .text",
                "main:",
                "push rbx",
                "xor ebx, ebx",
            )
        )

    def postamble(self) -> str:
        return _lines(
            "xor edi, edi",
            "call exit",
        )

    def read(self, depth: int) -> str:
        return _lines(
            "call getchar",
            f"mov {self.cell}, al",
        )

    def write(self, depth: int) -> str:
        return _lines(
            f"movzx edi, byte {self.cell}",
            "call putchar",
        )
