"""Translation errors surfaced to callers of the builder and emitter."""

from __future__ import annotations

from enum import Enum


class MalformedKind(str, Enum):
    UNMATCHED_OPEN = "UNMATCHED_OPEN"
    UNMATCHED_CLOSE = "UNMATCHED_CLOSE"


class MalformedProgram(Exception):
    """Loop delimiters in the source are unbalanced.

    ``offset`` is the zero-based character index of the offending bracket,
    ``line`` is one-based and ``column`` zero-based. For
    ``UNMATCHED_OPEN`` the location is the outermost ``[`` left open and
    ``unclosed`` counts every ``[`` still open at end of input.
    """

    def __init__(
        self,
        kind: MalformedKind,
        offset: int,
        line: int,
        column: int,
        unclosed: int = 0,
    ):
        self.kind = kind
        self.offset = offset
        self.line = line
        self.column = column
        self.unclosed = unclosed
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind == MalformedKind.UNMATCHED_CLOSE:
            return (
                "no matching opening bracket ('[') for closing bracket (']') "
                f"at line {self.line} column {self.column}"
            )
        return (
            f"{self.unclosed} opening bracket(s) ('[') left unbalanced at end of "
            f"input, outermost at line {self.line} column {self.column}"
        )


class WriteFailure(Exception):
    """The output sink rejected a write; emission stopped at that point."""

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"failed to write output: {error}")
