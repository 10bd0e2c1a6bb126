"""Diagnostic abstractions shared by the dispatcher and its adapters."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import shlex
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger("marked_asciidoctor")


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, trace lines and structured events."""

    debug_enabled: bool

    def info(self, message: str) -> None: ...

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def info(self, message: str) -> None:
        return

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.debug(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly trace line for known diagnostic events."""
    data = dict(payload)

    if name == "command":
        argv = [str(part) for part in data.get("argv") or ()]
        line = f"+ {shlex.join(argv)}"
        cwd = data.get("cwd")
        if cwd:
            line = f"{line} (cwd: {cwd})"
        return line

    if name == "environment":
        changes = data.get("changes") or {}
        if not changes:
            return None
        return "environment: " + ", ".join(f"{key}={value}" for key, value in changes.items())

    if name == "runtime_activated":
        manager = data.get("manager") or "<unknown>"
        version = data.get("version") or "<unknown>"
        return f"Activated Ruby {version} via {manager}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
