"""Asciidoctor command construction and execution."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
import os

from marked_asciidoctor.core.context import InvocationContext
from marked_asciidoctor.core.exceptions import ConverterError

from .process import CommandRequest, ProcessRunner


ASCIIDOCTOR = "asciidoctor"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass(frozen=True, slots=True)
class DocumentTimestamp:
    """Modification time rendered in the formats Asciidoctor exposes."""

    full: str
    date: str
    time: str
    year: str

    @classmethod
    def from_datetime(cls, moment: datetime) -> DocumentTimestamp:
        stamp = moment.strftime(TIMESTAMP_FORMAT)
        date, _, time = stamp.partition(" ")
        return cls(full=stamp, date=date, time=time, year=moment.strftime("%Y"))


def document_timestamp(path: str | os.PathLike[str] | None) -> DocumentTimestamp:
    """Return the local modification time of ``path`` (now when unavailable)."""
    moment: datetime | None = None
    if path:
        try:
            moment = datetime.fromtimestamp(os.stat(path).st_mtime).astimezone()
        except (OSError, ValueError, OverflowError):
            moment = None
    if moment is None:
        moment = datetime.now().astimezone()
    return DocumentTimestamp.from_datetime(moment)


def document_attributes(
    context: InvocationContext, timestamp: DocumentTimestamp
) -> list[tuple[str, str]]:
    """Return the intrinsic document attributes in command-line order."""
    return [
        ("docdatetime", timestamp.full),
        ("docdate", timestamp.date),
        ("doctime", timestamp.time),
        ("docyear", timestamp.year),
        ("docfile", context.document_path),
        ("docdir", context.origin),
        ("docname", context.docname),
        ("docfilesuffix", context.docfilesuffix),
        ("user-home", context.home),
    ]


@dataclass(frozen=True, slots=True)
class ConverterInvocation:
    """External converter command ready to launch."""

    executable: str
    argv: tuple[str, ...]
    cwd: str | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    def request(self, payload: bytes) -> CommandRequest:
        return CommandRequest(argv=self.argv, env=self.env, cwd=self.cwd, input=payload)


def build_asciidoctor_command(
    context: InvocationContext,
    *,
    requires: Sequence[str] = (),
    attributes: Sequence[str] = (),
    timestamp: DocumentTimestamp,
    executable: str = ASCIIDOCTOR,
) -> list[str]:
    """Construct the command converting stdin to HTML5 on stdout."""
    argv = [executable, "--base-dir", context.origin]
    for library in requires:
        argv.extend(["--require", library])
    for key, value in document_attributes(context, timestamp):
        argv.extend(["--attribute", f"{key}={value}"])
    for attribute in attributes:
        argv.extend(["--attribute", attribute])
    argv.extend(["--quiet", "--backend", "html5", "-o", "-", "-"])
    return argv


def run_converter(
    invocation: ConverterInvocation, payload: bytes, *, runner: ProcessRunner
) -> bytes:
    """Run the converter on ``payload`` and return its stdout."""
    result = runner.run(invocation.request(payload))
    if result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        raise ConverterError(invocation.executable, result.returncode, stderr)
    return result.stdout


__all__ = [
    "ASCIIDOCTOR",
    "TIMESTAMP_FORMAT",
    "ConverterInvocation",
    "DocumentTimestamp",
    "build_asciidoctor_command",
    "document_attributes",
    "document_timestamp",
    "run_converter",
]
