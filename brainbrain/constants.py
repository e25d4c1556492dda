"""Named constants — eliminates magic numbers and strings across the codebase."""

from __future__ import annotations

DEFAULT_MEMORY_SIZE = 3000
MAX_MEMORY_SIZE = 0xFFFF

CELL_MODULUS = 256

INCREMENT_CHAR = "+"
DECREMENT_CHAR = "-"
SHIFT_RIGHT_CHAR = ">"
SHIFT_LEFT_CHAR = "<"
READ_CHAR = ","
WRITE_CHAR = "."
LOOP_OPEN_CHAR = "["
LOOP_CLOSE_CHAR = "]"

INDENT = "    "

TARGET_BF = "bf"
TARGET_NASM_LINUX = "nasm-linux"
TARGET_NASM_LIBC = "nasm-libc"

DEFAULT_TARGET = TARGET_NASM_LINUX

LOOP_LABEL_PREFIX = ".loop_"
END_LABEL_PREFIX = ".end_"
