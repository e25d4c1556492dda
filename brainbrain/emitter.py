"""Code Emitter — non-recursive walk of the block graph into target text."""

from __future__ import annotations

import io
import logging
from typing import Protocol

from .errors import WriteFailure
from .ir import Block, Program
from .stack import Stack
from .targets import Target, get_target

logger = logging.getLogger(__name__)


class Writer(Protocol):
    """Anything text can be appended to; failures surface as ``OSError``."""

    def write(self, text: str, /) -> object: ...


def _resolve_target(program: Program, target: Target | str) -> Target:
    if isinstance(target, str):
        return get_target(target, program.memory_size)
    if target.memory_size != program.memory_size:
        raise ValueError(
            f"Target configured for memory size {target.memory_size}, "
            f"program built for {program.memory_size}"
        )
    return target


def _write(sink: Writer, text: str) -> None:
    if not text:
        return
    try:
        sink.write(text)
    except OSError as exc:
        raise WriteFailure(exc) from exc


def emit(program: Program, target: Target | str, sink: Writer) -> None:
    """Write *program* to *sink* as preamble, translated body, postamble.

    The ``next`` chain is followed with an explicit stack of open loop
    headers: a block without ``next`` ends the innermost open loop's body
    (the close form is rendered and the walk resumes at the header's
    ``exit``) or, with no loop open, the program.

    Raises:
        WriteFailure: On the first write the sink rejects. Output already
            written stays in the sink.
    """
    strategy = _resolve_target(program, target)
    logger.info("Emitting %d blocks for target %s", len(program.blocks), strategy.NAME)

    _write(sink, strategy.preamble())
    open_loops: Stack[Block] = Stack()
    depth = 0
    visited = 0
    block = program.root
    while True:
        visited += 1
        if block.is_loop_header:
            _write(sink, strategy.loop_open(block, depth))
            open_loops.push(block)
            depth += 1

        for op in block.ops:
            _write(sink, strategy.render_op(op, depth))

        if block.next is not None:
            block = program.block(block.next)
            continue
        if not open_loops:
            break
        header = open_loops.pop()
        depth -= 1
        _write(sink, strategy.loop_close(header, depth))
        block = program.block(header.exit)

    _write(sink, strategy.postamble())
    logger.debug("Emitted %d blocks", visited)


def emit_to_string(program: Program, target: Target | str) -> str:
    """Emit *program* into an in-memory buffer and return the text."""
    buffer = io.StringIO()
    emit(program, target, buffer)
    return buffer.getvalue()
