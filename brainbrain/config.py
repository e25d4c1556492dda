"""Configuration data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class EofBehavior(Enum):
    """What a read stores in the current cell once input is exhausted."""

    UNCHANGED = "unchanged"
    ZERO = "zero"
    MAX = "max"


def check_memory_size(memory_size: int) -> None:
    if not 1 <= memory_size <= constants.MAX_MEMORY_SIZE:
        raise ValueError(
            f"memory size must be between 1 and {constants.MAX_MEMORY_SIZE}, "
            f"got {memory_size}"
        )


@dataclass(frozen=True)
class TranslationConfig:
    """Groups the target selector and the tape size for one translation."""

    target: str = constants.DEFAULT_TARGET
    memory_size: int = constants.DEFAULT_MEMORY_SIZE

    def __post_init__(self):
        from .targets import SUPPORTED_TARGETS

        if self.target not in SUPPORTED_TARGETS:
            raise ValueError(f"Unsupported target: {self.target}")
        check_memory_size(self.memory_size)


@dataclass(frozen=True)
class VMConfig:
    """Groups interpreter configuration. ``max_steps == 0`` means unbounded."""

    max_steps: int = 0
    eof_behavior: EofBehavior = EofBehavior.UNCHANGED

    def __post_init__(self):
        if self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")
