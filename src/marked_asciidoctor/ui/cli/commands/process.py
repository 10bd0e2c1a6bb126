"""The processor command invoked by Marked for every render."""

from __future__ import annotations

from collections.abc import Mapping
import os
import sys
from typing import BinaryIO

import typer

from marked_asciidoctor.adapters.process import ProcessRunner
from marked_asciidoctor.core.context import InvocationContext, Phase
from marked_asciidoctor.core.dispatch import NOCUSTOM, Defer, dispatch, execute
from marked_asciidoctor.core.exceptions import ProcessorError
from marked_asciidoctor.core.options import FLAG_SPECS, parse_flags

from .._options import VersionOption
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state, render_message, set_cli_state


def flags_epilog() -> str:
    """Describe the processor flags, which bypass click's option parsing."""
    lines = ["Processor flags:"]
    for spec in FLAG_SPECS:
        names = ", ".join(spec.names)
        if spec.takes_value:
            names = f"{names} VALUE"
        lines.append(f"{names}: {spec.help}")
    return "\n\n".join(lines)


def _write(stream: BinaryIO, data: bytes) -> None:
    stream.write(data)
    stream.flush()


def run_processor(
    args: list[str],
    environ: Mapping[str, str],
    stdin: BinaryIO,
    stdout: BinaryIO,
    *,
    ctx: typer.Context | None = None,
) -> None:
    """Route one render request, writing the result to ``stdout``."""
    context = InvocationContext.from_environ(environ)
    if context.phase is not Phase.PROCESS:
        _write(stdout, NOCUSTOM)
        return

    state = get_cli_state(ctx)
    emitter = CliEmitter(state)
    options = parse_flags(args, emitter=emitter)
    set_cli_state(ctx=ctx, verbosity=options.verbosity, debug=options.trace)

    runner = ProcessRunner(emitter)
    outcome = dispatch(context, options, environ, runner=runner, emitter=emitter)
    if isinstance(outcome, Defer):
        emitter.info(f"Deferring to Marked: {outcome.reason}")
    payload = b"" if isinstance(outcome, Defer) else stdin.read()
    _write(stdout, execute(outcome, payload, runner=runner))


def process(ctx: typer.Context, version: VersionOption = False) -> None:
    """Render AsciiDoc documents for Marked, deferring everything else."""
    _ = version
    try:
        run_processor(
            list(ctx.args),
            dict(os.environ),
            sys.stdin.buffer,
            sys.stdout.buffer,
            ctx=ctx,
        )
    except ProcessorError as exc:
        emit_error(str(exc), exception=exc)
        if exc.hint:
            render_message("info", exc.hint)
        raise typer.Exit(code=1) from exc


__all__ = ["flags_epilog", "process", "run_processor"]
