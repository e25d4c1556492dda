"""Output targets selectable by name."""

from __future__ import annotations

from ._base import Target
from .bf import NormalizedSourceTarget
from .nasm_libc import NasmLibcTarget
from .nasm_linux import NasmLinuxTarget
from .. import constants

_TARGET_CLASSES: dict[str, type[Target]] = {
    constants.TARGET_BF: NormalizedSourceTarget,
    constants.TARGET_NASM_LINUX: NasmLinuxTarget,
    constants.TARGET_NASM_LIBC: NasmLibcTarget,
}


def get_target(name: str, memory_size: int = constants.DEFAULT_MEMORY_SIZE) -> Target:
    """Instantiate the target registered as *name*.

    Raises ``ValueError`` if *name* has no registered target.
    """
    cls = _TARGET_CLASSES.get(name)
    if cls is None:
        raise ValueError(f"Unsupported target: {name}")
    return cls(memory_size)


SUPPORTED_TARGETS: tuple[str, ...] = tuple(_TARGET_CLASSES.keys())

__all__ = [
    "Target",
    "NormalizedSourceTarget",
    "NasmLinuxTarget",
    "NasmLibcTarget",
    "get_target",
    "SUPPORTED_TARGETS",
]
