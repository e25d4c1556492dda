"""bf translator package."""

from .builder import build_program  # noqa: F401
from .emitter import emit, emit_to_string  # noqa: F401
from .errors import MalformedKind, MalformedProgram, WriteFailure  # noqa: F401
from .api import (  # noqa: F401
    build_program_from_source,
    translate,
    translate_to_string,
    dump_ir,
    ir_stats,
    run_source,
)
