"""Reference interpreter — executes a built ``Program`` directly."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .config import EofBehavior, VMConfig
from .ir import Block, Op, OpKind, Program
from .stack import Stack
from . import constants

logger = logging.getLogger(__name__)

_EOF_VALUES: dict[EofBehavior, int | None] = {
    EofBehavior.UNCHANGED: None,
    EofBehavior.ZERO: 0,
    EofBehavior.MAX: constants.CELL_MODULUS - 1,
}


@dataclass
class ExecutionStats:
    """Returned execution metrics from execute."""

    steps: int = 0
    ops_executed: int = 0
    loop_iterations: int = 0


@dataclass
class VMState:
    memory: bytearray
    pointer: int = 0
    stdin: bytes = b""
    input_pos: int = 0
    output: bytearray = field(default_factory=bytearray)

    @property
    def current(self) -> int:
        return self.memory[self.pointer]


@dataclass
class ExecutionResult:
    output: bytes
    memory: bytearray
    pointer: int
    halted: bool
    stats: ExecutionStats


def _op_increment(state: VMState, op: Op, config: VMConfig):
    state.memory[state.pointer] = (state.current + op.amount) % constants.CELL_MODULUS


def _op_shift(state: VMState, op: Op, config: VMConfig):
    state.pointer = (state.pointer + op.amount) % len(state.memory)


def _op_read(state: VMState, op: Op, config: VMConfig):
    if state.input_pos < len(state.stdin):
        state.memory[state.pointer] = state.stdin[state.input_pos]
        state.input_pos += 1
        return
    eof_value = _EOF_VALUES[config.eof_behavior]
    if eof_value is not None:
        state.memory[state.pointer] = eof_value


def _op_write(state: VMState, op: Op, config: VMConfig):
    state.output.append(state.current)


_OP_HANDLERS: dict[OpKind, Callable[[VMState, Op, VMConfig], None]] = {
    OpKind.INCREMENT: _op_increment,
    OpKind.SHIFT: _op_shift,
    OpKind.READ: _op_read,
    OpKind.WRITE: _op_write,
}


def _result(state: VMState, halted: bool, stats: ExecutionStats) -> ExecutionResult:
    return ExecutionResult(
        output=bytes(state.output),
        memory=state.memory,
        pointer=state.pointer,
        halted=halted,
        stats=stats,
    )


def execute(
    program: Program, stdin: bytes = b"", config: VMConfig = VMConfig()
) -> ExecutionResult:
    """Run *program* against *stdin* and collect what it writes.

    A loop header checks its guard each time it is entered: a zero cell
    jumps to ``exit``, otherwise the header is pushed and its body runs.
    When a body's ``next`` chain ends, control returns to the innermost
    pushed header. Each block entered counts as one step; exhausting
    ``config.max_steps`` stops early with ``halted=False``.
    """
    logger.info(
        "Executing %d blocks (memory size %d, max_steps=%d)",
        len(program.blocks),
        program.memory_size,
        config.max_steps,
    )
    state = VMState(memory=bytearray(program.memory_size), stdin=stdin)
    stats = ExecutionStats()
    loops: Stack[Block] = Stack()
    block = program.root
    while True:
        if config.max_steps and stats.steps >= config.max_steps:
            logger.warning("Step limit %d reached, stopping", config.max_steps)
            return _result(state, False, stats)
        stats.steps += 1

        if block.is_loop_header:
            if state.current == 0:
                block = program.block(block.exit)
                continue
            loops.push(block)
            stats.loop_iterations += 1

        for op in block.ops:
            _OP_HANDLERS[op.kind](state, op, config)
        stats.ops_executed += len(block.ops)

        if block.next is not None:
            block = program.block(block.next)
        elif loops:
            block = loops.pop()
        else:
            break

    return _result(state, True, stats)
