"""Command-line front end: reads a source file, writes the translation."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys

from .builder import build_program
from .config import EofBehavior, TranslationConfig, VMConfig
from .emitter import emit
from .errors import MalformedProgram, WriteFailure
from .ir import Program
from .ir_stats import program_stats
from .targets import SUPPORTED_TARGETS
from .vm import execute
from . import constants


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brainbrain", description="Translate bf to NASM assembly or normalized bf"
    )
    parser.add_argument("input", help="Path to the bf source file")
    parser.add_argument(
        "output", nargs="?", default=None, help="Output path (default: stdout)"
    )
    parser.add_argument(
        "--target",
        "-t",
        default=constants.DEFAULT_TARGET,
        choices=SUPPORTED_TARGETS,
        help=f"Output target (default: {constants.DEFAULT_TARGET})",
    )
    parser.add_argument(
        "-b",
        dest="bf",
        action="store_true",
        help=f"Generate bf instead of assembly (same as --target {constants.TARGET_BF})",
    )
    parser.add_argument(
        "--memory-size",
        "-m",
        type=int,
        default=constants.DEFAULT_MEMORY_SIZE,
        help=f"Number of tape cells (default: {constants.DEFAULT_MEMORY_SIZE})",
    )
    parser.add_argument(
        "--ir-only", action="store_true", help="Only print the IR (no translation)"
    )
    parser.add_argument(
        "--stats", action="store_true", help="Only print IR statistics"
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Interpret the program with stdin/stdout instead of translating",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=0,
        help="Block visits allowed with --run (default: 0, unbounded)",
    )
    parser.add_argument(
        "--eof",
        default=EofBehavior.UNCHANGED.value,
        choices=[behavior.value for behavior in EofBehavior],
        help="Cell value stored by a read at end of input with --run",
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="Log progress to stderr"
    )
    return parser


def _configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s"
    )


def _error(message: str) -> int:
    print(f"error: {message}", file=sys.stderr)
    return 1


def _read_source(path: str) -> str:
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def _write_text(text: str, output: str | None):
    if output is None:
        sys.stdout.write(text)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)


def _discard_partial(output: str):
    # Only regular files are removed; links and devices are left alone.
    if os.path.isfile(output) and not os.path.islink(output):
        with contextlib.suppress(OSError):
            os.remove(output)


def _emit(program: Program, target: str, output: str | None) -> int:
    if output is None:
        try:
            emit(program, target, sys.stdout)
        except WriteFailure as exc:
            return _error(f"Failed to write to stdout: {exc.error}")
        return 0

    try:
        f = open(output, "w", encoding="utf-8")
    except OSError as exc:
        return _error(f"Failed to open {output} for writing: {exc.strerror}")
    try:
        with f:
            emit(program, target, f)
    except (WriteFailure, OSError) as exc:
        _discard_partial(output)
        reason = exc.error if isinstance(exc, WriteFailure) else exc
        return _error(f"Failed to write to {output}: {reason}")
    return 0


def _run(program: Program, args: argparse.Namespace) -> int:
    config = VMConfig(max_steps=args.max_steps, eof_behavior=EofBehavior(args.eof))
    result = execute(program, sys.stdin.buffer.read(), config)
    if args.output is None:
        sys.stdout.buffer.write(result.output)
        sys.stdout.flush()
    else:
        with open(args.output, "wb") as f:
            f.write(result.output)
    if not result.halted:
        return _error(f"Step limit of {args.max_steps} reached before the program halted")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    target = constants.TARGET_BF if args.bf else args.target
    try:
        config = TranslationConfig(target=target, memory_size=args.memory_size)
        VMConfig(max_steps=args.max_steps)
    except ValueError as exc:
        return _error(str(exc))

    try:
        source = _read_source(args.input)
    except OSError as exc:
        return _error(f"Failed to open {args.input} for reading: {exc.strerror}")

    try:
        program = build_program(source, config.memory_size)
    except MalformedProgram as exc:
        return _error(f"Source code contains invalid bf: {exc}")

    try:
        if args.ir_only:
            _write_text(f"{program}\n", args.output)
            return 0
        if args.stats:
            stats = program_stats(program)
            _write_text("".join(f"{k}: {v}\n" for k, v in stats.items()), args.output)
            return 0
        if args.run:
            return _run(program, args)
    except OSError as exc:
        return _error(f"Failed to write to {args.output or 'stdout'}: {exc}")

    return _emit(program, config.target, args.output)


if __name__ == "__main__":
    sys.exit(main())
