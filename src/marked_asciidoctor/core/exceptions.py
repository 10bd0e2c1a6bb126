"""Exception hierarchy for fatal processor failures."""

from __future__ import annotations

from collections.abc import Sequence


class ProcessorError(RuntimeError):
    """Base exception for failures that abort an invocation."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class MissingFlagValueError(ProcessorError):
    """Raised when a flag expecting a value ends the argument list."""

    def __init__(self, flag: str) -> None:
        super().__init__(f"Flag '{flag}' requires a value.")
        self.flag = flag


class ExecutableNotFoundError(ProcessorError):
    """Raised when a required executable cannot be located on PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(
            f"'{executable}' was not found on PATH.",
            hint=f"Add the directory containing '{executable}' to PATH with '--path DIR'.",
        )
        self.executable = executable


class RuntimeManagerError(ProcessorError):
    """Raised when a Ruby version manager cannot activate the requested version."""

    def __init__(self, manager: str, version: str, installed: Sequence[str] = ()) -> None:
        hint = None
        if installed:
            hint = f"Installed {manager} versions: {', '.join(installed)}"
        super().__init__(f"{manager} could not activate Ruby version '{version}'.", hint=hint)
        self.manager = manager
        self.version = version
        self.installed = tuple(installed)


class WorkingDirectoryError(ProcessorError):
    """Raised when the document origin cannot be used as working directory."""


class ConverterError(ProcessorError):
    """Raised when the external converter exits with a non-zero status."""

    def __init__(self, executable: str, returncode: int, stderr: str = "") -> None:
        message = f"{executable} failed with exit code {returncode}"
        detail = stderr.strip()
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr


__all__ = [
    "ConverterError",
    "ExecutableNotFoundError",
    "MissingFlagValueError",
    "ProcessorError",
    "RuntimeManagerError",
    "WorkingDirectoryError",
]
