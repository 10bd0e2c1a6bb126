from __future__ import annotations

from collections.abc import Callable, Iterable
import subprocess

import pytest

from marked_asciidoctor.adapters.process import CommandRequest, ProcessRunner
from marked_asciidoctor.ui.cli.state import reset_cli_state


Handler = Callable[[CommandRequest], "subprocess.CompletedProcess[bytes]"]


def completed(
    request: CommandRequest, returncode: int = 0, stdout: bytes = b"", stderr: bytes = b""
) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess(
        list(request.argv), returncode, stdout=stdout, stderr=stderr
    )


class FakeRunner(ProcessRunner):
    """Runner resolving a fixed set of executables and replaying canned results."""

    def __init__(
        self,
        available: Iterable[str] = ("asciidoctor",),
        handlers: dict[str, Handler] | None = None,
    ) -> None:
        super().__init__()
        self.available = set(available)
        self.handlers = dict(handlers or {})
        self.requests: list[CommandRequest] = []
        self.lookups: list[tuple[str, str]] = []

    def which(self, executable: str, env) -> str | None:  # type: ignore[override]
        self.lookups.append((executable, env.get("PATH", "")))
        if executable in self.available:
            return f"/opt/bin/{executable}"
        return None

    def run(self, request: CommandRequest) -> subprocess.CompletedProcess[bytes]:
        self.requests.append(request)
        handler = self.handlers.get(str(request.argv[0]))
        if handler is None:
            return completed(request, stdout=b"<p>converted</p>\n")
        return handler(request)


@pytest.fixture(autouse=True)
def _isolated_cli_state() -> None:
    reset_cli_state()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
