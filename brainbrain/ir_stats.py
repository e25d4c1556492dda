"""Pure functions for computing statistics over a built Program."""

from __future__ import annotations

from collections import Counter

from brainbrain.ir import Program


def count_ops(program: Program) -> dict[str, int]:
    """Return a frequency map of op kind names across every block.

    Args:
        program: A built program.

    Returns:
        A dict mapping op kind name strings to their occurrence counts.
        Empty dict for a program without ops.
    """
    return dict(
        Counter(op.kind.value for block in program.blocks for op in block.ops)
    )


def program_stats(program: Program) -> dict[str, int]:
    """``count_ops`` plus ``BLOCKS`` and ``LOOPS`` totals."""
    stats = count_ops(program)
    stats["BLOCKS"] = len(program.blocks)
    stats["LOOPS"] = sum(1 for _ in program.loop_headers())
    return stats
