"""Diagnostic emitter bridging the dispatcher with CLI rendering utilities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marked_asciidoctor.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_info, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Emit diagnostics using the rich-enabled CLI helpers."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.verbosity >= 1

    def info(self, message: str) -> None:
        emit_info(message)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        # Command and environment traces are the verbose mode's output.
        threshold = 1 if name == "runtime_activated" else 2
        if self._state.verbosity < threshold:
            return
        message = format_event_message(name, payload)
        if message:
            render_message("info", message)


__all__ = ["CliEmitter"]
