"""Typer application wiring for the marked-asciidoctor CLI."""

from __future__ import annotations

import typer

from marked_asciidoctor.ui.cli.commands.process import flags_epilog, process

from .state import debug_enabled, emit_error


app = typer.Typer(
    help="Asciidoctor custom processor for Marked.",
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
)


# Processor flags are parsed by marked_asciidoctor.core.options, not by click.
app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    epilog=flags_epilog(),
)(process)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - last-resort reporting
        from .state import get_cli_state

        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
