"""Composable API functions for the translation pipeline.

Each function corresponds to a CLI workflow (translate, --ir-only, --stats,
--run) but is callable programmatically without argparse.
"""

from __future__ import annotations

import logging

from .builder import build_program
from .config import TranslationConfig, VMConfig
from .emitter import Writer, emit, emit_to_string
from .ir import Program
from .ir_stats import program_stats
from .vm import ExecutionResult, execute
from . import constants

logger = logging.getLogger(__name__)


def build_program_from_source(
    source: str, memory_size: int = constants.DEFAULT_MEMORY_SIZE
) -> Program:
    """Build the IR for *source*.

    Args:
        source: The program text; characters outside the alphabet are comments.
        memory_size: Number of tape cells the pointer wraps around.

    Returns:
        The built Program.
    """
    return build_program(source, memory_size)


def translate(
    source: str, sink: Writer, config: TranslationConfig = TranslationConfig()
) -> None:
    """Build *source* and emit it for ``config.target`` into *sink*.

    Args:
        source: The program text.
        sink: Destination with a ``write(str)`` method.
        config: Target and memory size.

    Raises:
        MalformedProgram: If the brackets are unbalanced; nothing is written.
        WriteFailure: If the sink fails; partial output is left in the sink.
    """
    logger.info("Translating source (target=%s)", config.target)
    program = build_program(source, config.memory_size)
    emit(program, config.target, sink)


def translate_to_string(
    source: str,
    target: str = constants.TARGET_BF,
    memory_size: int = constants.DEFAULT_MEMORY_SIZE,
) -> str:
    """Build *source* and return the emitted text for *target*."""
    config = TranslationConfig(target=target, memory_size=memory_size)
    program = build_program(source, config.memory_size)
    return emit_to_string(program, config.target)


def dump_ir(source: str, memory_size: int = constants.DEFAULT_MEMORY_SIZE) -> str:
    """Build *source* and return a human-readable dump of its blocks."""
    return str(build_program(source, memory_size))


def ir_stats(
    source: str, memory_size: int = constants.DEFAULT_MEMORY_SIZE
) -> dict[str, int]:
    """Build *source* and return op-kind, block and loop counts.

    Returns:
        A dict mapping op kind names, ``BLOCKS`` and ``LOOPS`` to counts.
    """
    return program_stats(build_program(source, memory_size))


def run_source(
    source: str,
    stdin: bytes = b"",
    memory_size: int = constants.DEFAULT_MEMORY_SIZE,
    config: VMConfig = VMConfig(),
) -> ExecutionResult:
    """Build *source* and interpret it against *stdin*.

    Composes build_program → execute.
    """
    logger.info("run_source: memory_size=%d, max_steps=%d", memory_size, config.max_steps)
    return execute(build_program(source, memory_size), stdin, config)
