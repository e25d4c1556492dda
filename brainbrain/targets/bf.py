"""Normalized-source target — re-renders the IR in the eight-character alphabet."""

from __future__ import annotations

from ..ir import Block
from .. import constants
from ._base import Target


def signed_amount(amount: int, modulus: int) -> int:
    """Map ``amount`` (mod ``modulus``) onto the shorter signed direction.

    ``signed_amount(200, 256) == -56``; an amount of exactly half the
    modulus keeps the forward direction.
    """
    return amount - modulus if amount > modulus // 2 else amount


def _run(count: int, forward: str, backward: str) -> str:
    return forward * count if count >= 0 else backward * -count


class NormalizedSourceTarget(Target):
    """One op per line, loop bodies indented one level deeper than ``[``."""

    NAME = constants.TARGET_BF

    def _line(self, text: str, depth: int) -> str:
        return f"{constants.INDENT * depth}{text}\n"

    def loop_open(self, header: Block, depth: int) -> str:
        return self._line(constants.LOOP_OPEN_CHAR, depth)

    def loop_close(self, header: Block, depth: int) -> str:
        return self._line(constants.LOOP_CLOSE_CHAR, depth)

    def increment(self, delta: int, depth: int) -> str:
        count = signed_amount(delta, constants.CELL_MODULUS)
        return self._line(
            _run(count, constants.INCREMENT_CHAR, constants.DECREMENT_CHAR), depth
        )

    def shift(self, distance: int, depth: int) -> str:
        count = signed_amount(distance, self.memory_size)
        return self._line(
            _run(count, constants.SHIFT_RIGHT_CHAR, constants.SHIFT_LEFT_CHAR), depth
        )

    def read(self, depth: int) -> str:
        return self._line(constants.READ_CHAR, depth)

    def write(self, depth: int) -> str:
        return self._line(constants.WRITE_CHAR, depth)
