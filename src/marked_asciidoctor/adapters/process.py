"""Abstractions for locating and invoking external executables."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import os
from pathlib import Path
import shutil
import subprocess

from marked_asciidoctor.core.diagnostics import DiagnosticEmitter, NullEmitter
from marked_asciidoctor.core.exceptions import ExecutableNotFoundError, ProcessorError


@dataclass(slots=True)
class CommandRequest:
    """Full request payload for a blocking subprocess execution."""

    argv: Sequence[str]
    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Path | str | None = None
    input: bytes | None = None


class ProcessRunner:
    """Run commands against an explicit environment instead of ``os.environ``."""

    def __init__(self, emitter: DiagnosticEmitter | None = None) -> None:
        self.emitter = emitter or NullEmitter()

    def which(self, executable: str, env: Mapping[str, str]) -> str | None:
        """Resolve ``executable`` on the PATH of ``env``."""
        try:
            return shutil.which(executable, path=env.get("PATH", os.defpath))
        except (OSError, ValueError):
            return None

    def require(self, executable: str, env: Mapping[str, str]) -> str:
        """Resolve ``executable`` or raise :class:`ExecutableNotFoundError`."""
        resolved = self.which(executable, env)
        if resolved is None:
            raise ExecutableNotFoundError(executable)
        return resolved

    def run(self, request: CommandRequest) -> subprocess.CompletedProcess[bytes]:
        """Execute the request, capturing stdout and stderr as bytes."""
        argv = [str(part) for part in request.argv]
        cwd = str(request.cwd) if request.cwd is not None else None
        self.emitter.event("command", {"argv": argv, "cwd": cwd})
        try:
            return subprocess.run(
                argv,
                check=False,
                capture_output=True,
                input=request.input,
                cwd=cwd,
                env=dict(request.env),
            )
        except FileNotFoundError as exc:
            raise ExecutableNotFoundError(argv[0]) from exc
        except OSError as exc:
            raise ProcessorError(f"Failed to invoke {argv[0]}: {exc}") from exc


__all__ = ["CommandRequest", "ProcessRunner"]
