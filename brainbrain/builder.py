"""IR Builder — single left-to-right scan of source text into a block graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .config import check_memory_size
from .errors import MalformedKind, MalformedProgram
from .ir import Block, Op, Program
from .stack import Stack
from . import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _OpenLoop:
    """A loop header awaiting its ``]``, with where its ``[`` was seen."""

    header: Block
    offset: int
    line: int
    column: int


class IRBuilder:
    """Builds a ``Program`` from source text.

    Every ``[`` starts a new block that is both the loop header and the
    first block of the body; every ``]`` starts a new block that becomes
    the header's ``exit``. Characters outside the operation alphabet are
    comments.
    """

    def __init__(self, memory_size: int = constants.DEFAULT_MEMORY_SIZE):
        check_memory_size(memory_size)
        self._memory_size = memory_size
        self._OP_DISPATCH: dict[str, Callable[[], Op]] = {
            constants.INCREMENT_CHAR: lambda: Op.increment(1),
            constants.DECREMENT_CHAR: lambda: Op.increment(constants.CELL_MODULUS - 1),
            constants.SHIFT_RIGHT_CHAR: lambda: Op.shift(1),
            constants.SHIFT_LEFT_CHAR: lambda: Op.shift(self._memory_size - 1),
            constants.READ_CHAR: Op.read,
            constants.WRITE_CHAR: Op.write,
        }

    def build(self, source: str) -> Program:
        logger.info(
            "Building IR from %d source characters (memory size %d)",
            len(source),
            self._memory_size,
        )
        program = Program(memory_size=self._memory_size)
        current = program.new_block()
        unclosed: Stack[_OpenLoop] = Stack()
        line, line_start = 1, 0

        for offset, char in enumerate(source):
            make_op = self._OP_DISPATCH.get(char)
            if make_op is not None:
                current.append(make_op(), self._memory_size)
            elif char == constants.LOOP_OPEN_CHAR:
                header = program.new_block()
                current.next = header.index
                unclosed.push(_OpenLoop(header, offset, line, offset - line_start))
                current = header
            elif char == constants.LOOP_CLOSE_CHAR:
                if not unclosed:
                    raise MalformedProgram(
                        MalformedKind.UNMATCHED_CLOSE,
                        offset,
                        line,
                        offset - line_start,
                    )
                opened = unclosed.pop()
                after = program.new_block()
                opened.header.exit = after.index
                current = after
            elif char == "\n":
                line += 1
                line_start = offset + 1

        if unclosed:
            outermost = next(iter(unclosed))
            raise MalformedProgram(
                MalformedKind.UNMATCHED_OPEN,
                outermost.offset,
                outermost.line,
                outermost.column,
                unclosed=len(unclosed),
            )

        logger.debug("Built %d blocks", len(program.blocks))
        return program


def build_program(
    source: str, memory_size: int = constants.DEFAULT_MEMORY_SIZE
) -> Program:
    """Build the IR for *source*.

    Raises:
        MalformedProgram: If ``[`` and ``]`` are unbalanced.
        ValueError: If *memory_size* is outside ``1..65535``.
    """
    return IRBuilder(memory_size).build(source)
