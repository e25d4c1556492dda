"""Bare-kernel target — 32-bit Linux, I/O and exit through ``int 80h``."""

from __future__ import annotations

from .. import constants
from ._nasm import NasmTarget, _lines

SYS_EXIT = 1
SYS_READ = 3
SYS_WRITE = 4
STDIN = 0
STDOUT = 1


class NasmLinuxTarget(NasmTarget):
    """Pointer in ``esi``, which the kernel preserves across system calls.

    A single scratch cell ``tmp`` is the one-byte buffer handed to
    ``read``/``write``. It is loaded with the current cell before a read, so
    end of input leaves the cell unchanged.
    """

    NAME = constants.TARGET_NASM_LINUX
    POINTER = "esi"
    POINTER32 = "esi"

    def preamble(self) -> str:
        return (
            _lines(
                "global _start",
                "",
                "section .bss",
                "tmp resd 1",
                "",
            )
            + self.data_section()
            + _lines(
                "",
                "section .text",
                "_start:",
                "xor esi, esi",
            )
        )

    def postamble(self) -> str:
        return _lines(
            f"mov eax, {SYS_EXIT}",
            "xor ebx, ebx",
            "int 80h",
        )

    def read(self, depth: int) -> str:
        return _lines(
            f"mov al, {self.cell}",
            "mov [tmp], al",
            f"mov eax, {SYS_READ}",
            f"mov ebx, {STDIN}",
            "mov ecx, tmp",
            "mov edx, 1",
            "int 80h",
            "mov al, [tmp]",
            f"mov {self.cell}, al",
        )

    def write(self, depth: int) -> str:
        return _lines(
            f"mov al, {self.cell}",
            "mov [tmp], al",
            f"mov eax, {SYS_WRITE}",
            f"mov ebx, {STDOUT}",
            "mov ecx, tmp",
            "mov edx, 1",
            "int 80h",
        )
