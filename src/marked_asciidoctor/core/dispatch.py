"""Route a render request to one of the three processor outcomes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import os

from marked_asciidoctor.adapters.asciidoctor import (
    ASCIIDOCTOR,
    ConverterInvocation,
    build_asciidoctor_command,
    document_timestamp,
    run_converter,
)
from marked_asciidoctor.adapters.process import ProcessRunner
from marked_asciidoctor.adapters.runtime import activate_runtime

from .context import DocumentKind, InvocationContext, Phase
from .diagnostics import DiagnosticEmitter, NullEmitter
from .environment import apply_gem_overrides, build_base_env, environment_changes
from .exceptions import WorkingDirectoryError
from .options import ProcessorOptions, parse_flags


NOCUSTOM = b"NOCUSTOM"


@dataclass(frozen=True, slots=True)
class Defer:
    """Let the host render the document itself."""

    reason: str


@dataclass(frozen=True, slots=True)
class PassThrough:
    """Echo the input unchanged."""


@dataclass(frozen=True, slots=True)
class Delegate:
    """Hand the input to the external converter."""

    invocation: ConverterInvocation


Outcome = Defer | PassThrough | Delegate


@dataclass(frozen=True, slots=True)
class PreparedEnvironment:
    """Subprocess environment and working directory for one invocation."""

    env: Mapping[str, str]
    cwd: str | None


def _check_origin(origin: str) -> str | None:
    # An unset origin keeps the inherited working directory.
    if not origin:
        return None
    if not os.path.isdir(origin):
        raise WorkingDirectoryError(f"Cannot change directory to '{origin}'.")
    return origin


def prepare_environment(
    context: InvocationContext,
    options: ProcessorOptions,
    environ: Mapping[str, str],
    *,
    runner: ProcessRunner,
    emitter: DiagnosticEmitter,
) -> PreparedEnvironment:
    """Activate the Ruby runtime, validate the origin and apply gem overrides.

    Gem overrides are layered after activation so the manager cannot reset them.
    """
    env = build_base_env(environ, options)
    env = activate_runtime(options.runtime, env, runner=runner, emitter=emitter)
    cwd = _check_origin(context.origin)
    env = apply_gem_overrides(env, options)
    emitter.event("environment", {"changes": environment_changes(environ, env)})
    return PreparedEnvironment(env=env, cwd=cwd)


def build_invocation(
    context: InvocationContext,
    options: ProcessorOptions,
    prepared: PreparedEnvironment,
    *,
    runner: ProcessRunner,
    emitter: DiagnosticEmitter,
) -> ConverterInvocation:
    """Locate Asciidoctor and assemble its command for the document."""
    executable = runner.require(ASCIIDOCTOR, prepared.env)
    emitter.info(f"Using {executable}")
    argv = build_asciidoctor_command(
        context,
        requires=options.requires,
        attributes=options.attributes,
        timestamp=document_timestamp(context.document_path),
    )
    return ConverterInvocation(
        executable=ASCIIDOCTOR, argv=tuple(argv), cwd=prepared.cwd, env=prepared.env
    )


def dispatch(
    context: InvocationContext,
    options: ProcessorOptions | Sequence[str],
    environ: Mapping[str, str],
    *,
    runner: ProcessRunner | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> Outcome:
    """Decide what to do with the document described by ``context``.

    ``options`` may be raw flag tokens, parsed only once the phase allows
    processing. Fatal problems surface as
    :class:`~marked_asciidoctor.core.exceptions.ProcessorError`.
    """
    emitter = emitter or NullEmitter()
    runner = runner or ProcessRunner(emitter)

    if context.phase is not Phase.PROCESS:
        return Defer(reason=f"phase is {context.phase.value}")

    if not isinstance(options, ProcessorOptions):
        options = parse_flags(options, emitter=emitter)
    emitter.info(f"Processing '{context.document_path}' (extension '{context.extension}')")
    if context.includes:
        emitter.info(f"Included files: {', '.join(context.includes)}")
    if context.css_path:
        emitter.info(f"Stylesheet: {context.css_path}")

    prepared = prepare_environment(context, options, environ, runner=runner, emitter=emitter)

    match context.kind:
        case DocumentKind.ASCIIDOC:
            invocation = build_invocation(
                context, options, prepared, runner=runner, emitter=emitter
            )
            return Delegate(invocation=invocation)
        case DocumentKind.HTML:
            return PassThrough()
        case DocumentKind.OTHER:
            return Defer(reason=f"unsupported extension '{context.extension}'")


def execute(outcome: Outcome, payload: bytes, *, runner: ProcessRunner | None = None) -> bytes:
    """Produce the bytes to write on stdout for ``outcome``."""
    match outcome:
        case Defer():
            return NOCUSTOM
        case PassThrough():
            return payload
        case Delegate(invocation=invocation):
            return run_converter(invocation, payload, runner=runner or ProcessRunner())
    raise TypeError(f"Unsupported outcome: {outcome!r}")


__all__ = [
    "NOCUSTOM",
    "Defer",
    "Delegate",
    "Outcome",
    "PassThrough",
    "PreparedEnvironment",
    "build_invocation",
    "dispatch",
    "execute",
    "prepare_environment",
]
